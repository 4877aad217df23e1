"""Two-colour palettes for the CHIP-8 screen."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

RGBColor = Tuple[int, int, int]
Palette = Tuple[RGBColor, RGBColor]


# (background, foreground)
MONOCHROME: Palette = ((0x00, 0x00, 0x00), (0xFF, 0xFF, 0xFF))
AMBER: Palette = ((0x1A, 0x0F, 0x00), (0xFF, 0xB0, 0x00))
PHOSPHOR: Palette = ((0x00, 0x14, 0x00), (0x33, 0xFF, 0x33))

PALETTES: Dict[str, Palette] = {
    "mono": MONOCHROME,
    "amber": AMBER,
    "phosphor": PHOSPHOR,
}


def validate_palette(palette: Sequence[RGBColor]) -> Palette:
    """Return ``palette`` as a (background, foreground) pair of byte triples."""

    if len(palette) != 2:
        raise ValueError("palette needs a background and a foreground colour")
    background, foreground = (_to_rgb(color) for color in palette)
    return background, foreground


def get_palette(name: str) -> Palette:
    try:
        return PALETTES[name.lower()]
    except KeyError:
        choices = ", ".join(sorted(PALETTES))
        raise ValueError(f"unknown palette {name!r} (choose from {choices})") from None


def _to_rgb(color: Sequence[int]) -> RGBColor:
    if len(color) != 3:
        raise ValueError(f"colour {color!r} is not an RGB triple")
    red, green, blue = (int(channel) & 0xFF for channel in color)
    return red, green, blue
