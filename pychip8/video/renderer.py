"""Scale CHIP-8 framebuffers into RGB frames for the pygame frontend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .framebuffer import HEIGHT, WIDTH
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Rendered RGB frame, stored row-major as packed bytes."""

    width: int
    height: int
    data: bytearray

    def get_pixel(self, x: int, y: int) -> RGBColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside rendered frame")
        offset = (y * self.width + x) * 3
        return (self.data[offset], self.data[offset + 1], self.data[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(bytes(self.data), (self.width, self.height), "RGB")


class Renderer:
    """Turn logical pixels into a scaled two-colour RGB image."""

    def __init__(
        self,
        palette: Sequence[RGBColor] = MONOCHROME,
        *,
        width: int = WIDTH,
        height: int = HEIGHT,
    ) -> None:
        self._background, self._foreground = validate_palette(palette)
        self._width = width
        self._height = height

    def render(self, pixels: Sequence[int], *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        if len(pixels) != self._width * self._height:
            raise ValueError(
                f"expected {self._width * self._height} pixels, got {len(pixels)}"
            )

        out_width = self._width * scale
        out_height = self._height * scale
        data = bytearray(out_width * out_height * 3)
        background = bytes(self._background)
        foreground = bytes(self._foreground)

        for y in range(self._height):
            row = bytearray()
            for x in range(self._width):
                color = foreground if pixels[y * self._width + x] else background
                row += color * scale
            for sub in range(scale):
                start = ((y * scale + sub) * out_width) * 3
                data[start : start + len(row)] = row

        return RenderResult(out_width, out_height, data)
