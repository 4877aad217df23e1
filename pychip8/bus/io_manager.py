"""Memory, display and keypad surface consumed by the CPU."""

from __future__ import annotations

from typing import Sequence

from pychip8.io import Keypad
from pychip8.video import FONT_ADDRESS, FONT_DATA, Framebuffer

from .memory import MEMORY_SIZE, ROM_START, Memory


class IOManager:
    """Interface the CPU uses for every effect outside its own registers."""

    def read(self, address: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def write(self, address: int, value: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def clear_display(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def draw(self, x: int, y: int, n: int, address: int) -> bool:  # pragma: no cover - interface
        raise NotImplementedError

    def get_framebuffer(self) -> Sequence[int]:  # pragma: no cover - interface
        raise NotImplementedError

    def get_key(self) -> int | None:  # pragma: no cover - interface
        raise NotImplementedError

    def read16(self, address: int) -> int:
        high = self.read(address)
        low = self.read(address + 1)
        return ((high & 0xFF) << 8) | (low & 0xFF)

    def write16(self, address: int, value: int) -> None:
        self.write(address, (value >> 8) & 0xFF)
        self.write(address + 1, value & 0xFF)


class Chip8IO(IOManager):
    """Concrete surface: 4 KiB RAM, 64x32 framebuffer and a keypad."""

    def __init__(
        self,
        rom: bytes = b"",
        *,
        memory: Memory | None = None,
        framebuffer: Framebuffer | None = None,
        keypad: Keypad | None = None,
    ) -> None:
        self.memory = memory or Memory(MEMORY_SIZE)
        self.framebuffer = framebuffer or Framebuffer()
        self.keypad = keypad or Keypad()
        self.did_draw = False
        self.memory.load_image(FONT_ADDRESS, FONT_DATA)
        self.memory.load_image(ROM_START, rom)

    def read(self, address: int) -> int:
        return self.memory.load8(address)

    def write(self, address: int, value: int) -> None:
        self.memory.store8(address, value)

    def clear_display(self) -> None:
        self.framebuffer.clear()
        self.did_draw = True

    def draw(self, x: int, y: int, n: int, address: int) -> bool:
        self.did_draw = True
        rows = [self.memory.load8(address + row) for row in range(n)]
        return self.framebuffer.blit(x, y, rows)

    def get_framebuffer(self) -> Sequence[int]:
        return self.framebuffer.pixels()

    def get_key(self) -> int | None:
        return self.keypad.current_key()

    def consume_draw_flag(self) -> bool:
        """Return whether the screen changed since the last call and reset it."""

        changed = self.did_draw
        self.did_draw = False
        return changed
