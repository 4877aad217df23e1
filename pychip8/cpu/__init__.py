"""CPU package for the CHIP-8 interpreter."""

from .core import (
    Chip8CPU,
    CPUError,
    CPUState,
    IllegalOpcodeError,
    MachineCodeCallError,
)
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CPUError",
    "IllegalOpcodeError",
    "MachineCodeCallError",
    "opcodes",
]
