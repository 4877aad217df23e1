"""Monochrome 64x32 framebuffer with XOR sprite blitting."""

from __future__ import annotations

from typing import Iterable, Sequence

WIDTH = 64
HEIGHT = 32
PIXEL_ON = 0x00FFFFFF
PIXEL_OFF = 0x000000


class Framebuffer:
    """Row-major pixel store; any non-zero value counts as a set pixel."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT, *, color: int = PIXEL_ON) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        if color & 0x00FFFFFF == 0:
            raise ValueError("set colour must be non-zero")
        self.width = width
        self.height = height
        self._color = color & 0x00FFFFFF
        self._pixels = [PIXEL_OFF] * (width * height)

    def __len__(self) -> int:
        return len(self._pixels)

    def clear(self) -> None:
        self._pixels[:] = [PIXEL_OFF] * len(self._pixels)

    def get_pixel(self, x: int, y: int) -> int:
        return self._pixels[self._index(x, y)]

    def is_set(self, x: int, y: int) -> bool:
        return self.get_pixel(x, y) != PIXEL_OFF

    def pixels(self) -> Sequence[int]:
        return self._pixels

    def blit(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR ``rows`` onto the screen at ``(x, y)`` and report erasures.

        Each row is an 8-pixel byte, most significant bit leftmost. Pixels
        that land outside the screen are dropped; coordinates never wrap.
        Returns ``True`` when at least one pixel went from set to clear.
        """

        collision = False
        for dy, row in enumerate(rows):
            py = y + dy
            if not 0 <= py < self.height:
                continue
            base = py * self.width
            for dx in range(8):
                if not (row >> (7 - dx)) & 1:
                    continue
                px = x + dx
                if not 0 <= px < self.width:
                    continue
                old_pixel = self._pixels[base + px]
                new_pixel = (old_pixel ^ self._color) & 0x00FFFFFF
                self._pixels[base + px] = new_pixel
                if old_pixel != PIXEL_OFF and new_pixel == PIXEL_OFF:
                    collision = True
        return collision

    def rows(self) -> Iterable[str]:
        """Yield one text line per row, ``#`` for set pixels."""

        for y in range(self.height):
            line = self._pixels[y * self.width : (y + 1) * self.width]
            yield "".join("#" if pixel else "." for pixel in line)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} screen")
        return y * self.width + x
