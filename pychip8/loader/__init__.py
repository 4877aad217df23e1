"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .program import (
    MAX_ROM_SIZE,
    RomFormatError,
    RomImage,
    load_rom,
    load_rom_from_path,
    load_rom_stream,
)

__all__ = [
    "MAX_ROM_SIZE",
    "RomFormatError",
    "RomImage",
    "load_rom",
    "load_rom_from_path",
    "load_rom_stream",
]
