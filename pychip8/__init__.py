"""CHIP-8 interpreter.

The package hosts the CPU, memory/display bus, video, keypad, loader and
pygame UI layers used by ``run.py``.
"""

from __future__ import annotations

from . import bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
