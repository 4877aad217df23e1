"""Flat 4 KiB memory for the CHIP-8 interpreter.

Programs and the call stack share this address space. Addresses are folded
into the 4096-byte range instead of raising, so a runaway stack or an index
register pointing past the end behaves like the wrapped hardware bus rather
than crashing the interpreter.
"""

from __future__ import annotations

from dataclasses import dataclass

MEMORY_SIZE = 0x1000
ROM_START = 0x200


class MemoryError(Exception):
    """Raised when memory is misconfigured or an image does not fit."""


@dataclass
class Memory:
    """Simple byte-addressable RAM block."""

    length: int = MEMORY_SIZE

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise MemoryError("memory must have a positive length")
        self._data = bytearray(self.length)

    def __len__(self) -> int:
        return self.length

    def _offset(self, address: int) -> int:
        return address % self.length

    def load8(self, address: int) -> int:
        return self._data[self._offset(address)]

    def store8(self, address: int, value: int) -> None:
        self._data[self._offset(address)] = value & 0xFF

    def load16(self, address: int) -> int:
        high = self.load8(address)
        low = self.load8(address + 1)
        return (high << 8) | low

    def store16(self, address: int, value: int) -> None:
        self.store8(address, (value >> 8) & 0xFF)
        self.store8(address + 1, value & 0xFF)

    def load_image(self, address: int, data: bytes) -> None:
        """Copy ``data`` verbatim to ``address``; the image must fit."""

        if address < 0 or address + len(data) > self.length:
            raise MemoryError(
                f"image of {len(data)} bytes at {address:#05x} exceeds memory size {self.length:#06x}"
            )
        self._data[address : address + len(data)] = data

    def read_block(self, address: int, length: int) -> bytes:
        return bytes(self.load8(address + offset) for offset in range(length))

    def snapshot(self) -> bytes:
        return bytes(self._data)
