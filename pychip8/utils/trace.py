"""Recent-instruction history replayed when the interpreter dies."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List

from .debug import debug_log


@dataclass(frozen=True)
class TraceEntry:
    pc: int
    opcode: int | None
    mnemonic: str
    v: tuple[int, ...]
    i: int
    sp: int
    delay: int
    sound: int
    note: str = ""

    def describe(self) -> str:
        opcode = "----" if self.opcode is None else f"{self.opcode:04X}"
        registers = " ".join(f"{value:02X}" for value in self.v)
        return (
            f"pc={self.pc:04X} opcode={opcode} {self.mnemonic or '?':<18} "
            f"V=[{registers}] I={self.i:04X} SP={self.sp:04X} "
            f"DT={self.delay:02X} ST={self.sound:02X} note={self.note or '-'}"
        )


class TraceRecorder:
    """Keeps the last ``capacity`` CPU snapshots, oldest first."""

    def __init__(self, capacity: int = 256) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._history: Deque[TraceEntry] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._history)

    def record_step(self, cpu_state, opcode: int | None, *, mnemonic: str = "", note: str = "") -> None:
        self._history.append(
            TraceEntry(
                pc=cpu_state.pc & 0xFFFF,
                opcode=None if opcode is None else opcode & 0xFFFF,
                mnemonic=mnemonic,
                v=tuple(value & 0xFF for value in cpu_state.v),
                i=cpu_state.i & 0xFFFF,
                sp=cpu_state.sp & 0xFFFF,
                delay=cpu_state.delay & 0xFF,
                sound=cpu_state.sound & 0xFF,
                note=note,
            )
        )

    def format_entries(self, limit: int | None = None) -> List[str]:
        history = list(self._history)
        if limit is not None:
            history = history[len(history) - min(max(limit, 0), len(history)):]
        return [entry.describe() for entry in history]

    def dump(self, category: str, limit: int | None = None) -> None:
        for line in self.format_entries(limit):
            debug_log(category, line)
