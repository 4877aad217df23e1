"""Bus-related helpers for the CHIP-8 interpreter."""

from .memory import MEMORY_SIZE, ROM_START, Memory, MemoryError
from .io_manager import Chip8IO, IOManager

__all__ = [
    "Chip8IO",
    "IOManager",
    "Memory",
    "MemoryError",
    "MEMORY_SIZE",
    "ROM_START",
]
