"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .font import FONT_ADDRESS, FONT_DATA, GLYPH_BYTES, glyph_address
from .framebuffer import HEIGHT, PIXEL_OFF, PIXEL_ON, WIDTH, Framebuffer
from .palette import MONOCHROME, PALETTES, get_palette, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "Framebuffer",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "validate_palette",
    "get_palette",
    "PALETTES",
    "FONT_ADDRESS",
    "FONT_DATA",
    "GLYPH_BYTES",
    "glyph_address",
    "WIDTH",
    "HEIGHT",
    "PIXEL_ON",
    "PIXEL_OFF",
]
