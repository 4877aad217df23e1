"""CHIP-8 machine assembly."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

from pychip8.bus import Chip8IO, Memory
from pychip8.cpu import Chip8CPU
from pychip8.io import Keypad
from pychip8.video import Framebuffer


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 machine."""

    rom_image: Optional[bytes] = None
    seed: Optional[int] = None


@dataclass
class Machine:
    """Aggregates the processor and the surface it drives."""

    cpu: Chip8CPU
    io: Chip8IO
    memory: Memory
    framebuffer: Framebuffer
    keypad: Keypad

    def step(self, count: int = 1) -> None:
        """Execute ``count`` instructions in order."""

        for _ in range(count):
            self.cpu.step(self.io)


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a CHIP-8 machine with the requested configuration."""

    memory = Memory()
    framebuffer = Framebuffer()
    keypad = Keypad()
    io = Chip8IO(
        config.rom_image or b"",
        memory=memory,
        framebuffer=framebuffer,
        keypad=keypad,
    )
    cpu = Chip8CPU(rng=random.Random(config.seed))

    return Machine(
        cpu=cpu,
        io=io,
        memory=memory,
        framebuffer=framebuffer,
        keypad=keypad,
    )
