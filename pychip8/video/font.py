"""Built-in hexadecimal font for CHIP-8 programs."""

from __future__ import annotations

FONT_ADDRESS = 0x000
FONT_WIDTH = 4
GLYPH_BYTES = 5
GLYPH_COUNT = 16

# One byte per row, high nibble drawn; digits 0-F in order.
FONT_DATA: bytes = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xF0, 0x90, 0xE0, 0x90, 0xF0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)


def glyph_address(value: int) -> int:
    """Return the address of the glyph for ``value`` (no nibble masking)."""

    return (FONT_ADDRESS + value * GLYPH_BYTES) & 0xFFFF


def get_glyph(digit: int) -> bytes:
    """Return the five row bytes of the glyph for hexadecimal ``digit``."""

    if not 0 <= digit < GLYPH_COUNT:
        raise ValueError(f"digit out of range: {digit}")
    offset = digit * GLYPH_BYTES
    return FONT_DATA[offset : offset + GLYPH_BYTES]
