"""ROM image loading for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MEMORY_SIZE, ROM_START

MAX_ROM_SIZE = MEMORY_SIZE - ROM_START


class RomFormatError(ValueError):
    """Raised when a ROM image cannot be placed in memory."""


@dataclass
class RomImage:
    """Raw program bytes together with where they will be loaded."""

    name: str
    data: bytes
    origin: int = ROM_START

    @property
    def end_address(self) -> int:
        return self.origin + len(self.data) - 1

    def __len__(self) -> int:
        return len(self.data)


def load_rom(data: bytes, name: str = "") -> RomImage:
    """Validate ``data`` as a CHIP-8 program image."""

    if not data:
        raise RomFormatError("ROM image is empty")
    if len(data) > MAX_ROM_SIZE:
        raise RomFormatError(
            f"ROM image is {len(data)} bytes; at most {MAX_ROM_SIZE} bytes fit at {ROM_START:#05x}"
        )
    return RomImage(name=name, data=bytes(data))


def load_rom_stream(stream: BinaryIO, name: str = "") -> RomImage:
    # Read one byte past the limit so oversized images are reported, not truncated.
    return load_rom(stream.read(MAX_ROM_SIZE + 1), name)


def load_rom_from_path(path: Path) -> RomImage:
    """Load a ROM image from the filesystem."""

    with path.open("rb") as handle:
        return load_rom_stream(handle, path.name)
