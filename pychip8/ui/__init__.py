"""User interface layer for the CHIP-8 interpreter."""

from __future__ import annotations

from .app import AppConfig, Chip8App

__all__ = [
    "AppConfig",
    "Chip8App",
]
