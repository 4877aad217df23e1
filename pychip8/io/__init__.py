"""Input helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .keypad import KEY_COUNT, KEY_MAP_TEMPLATE, Keypad

__all__ = [
    "Keypad",
    "KEY_COUNT",
    "KEY_MAP_TEMPLATE",
]
