"""CHIP-8 processor: register file, timers and the fetch/decode/execute loop."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Sequence

from pychip8.bus import ROM_START, IOManager
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import glyph_address

from .opcodes import Instruction, Operands, OPCODE_TABLE, decode


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised when a fetched word matches no supported instruction form."""

    def __init__(self, opcode: int, address: int, message: str | None = None) -> None:
        self.opcode = opcode & 0xFFFF
        self.address = address & 0xFFFF
        if message is None:
            message = f"Unsupported instruction ${self.opcode:04X} (PC=${self.address:04X})"
        super().__init__(message)


class MachineCodeCallError(IllegalOpcodeError):
    """Raised for ``0nnn``: native machine-code routines cannot be run."""

    def __init__(self, opcode: int, address: int) -> None:
        super().__init__(
            opcode,
            address,
            f"Call to machine code routine is not implemented. (PC=${address & 0xFFFF:04X})",
        )


REGISTER_COUNT = 16
FLAG_REGISTER = 0xF
STACK_TOP = 0x0EFF
TIMER_CYCLE = 60


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x0000
    sp: int = STACK_TOP
    pc: int = ROM_START
    delay: int = 0x00
    sound: int = 0x00

    def __post_init__(self) -> None:
        if len(self.v) != REGISTER_COUNT:
            raise ValueError(f"expected {REGISTER_COUNT} registers, got {len(self.v)}")


@dataclass
class Chip8CPU:
    """Interpreter core; executes one instruction per :meth:`step`."""

    rng: random.Random = field(default_factory=random.Random)
    instruction_table: Sequence[Sequence[Instruction]] = field(default=OPCODE_TABLE)

    state: CPUState = field(default_factory=CPUState)
    sub_tick: int = TIMER_CYCLE
    step_count: int = 0

    def reset(self) -> None:
        """Return registers, timers and counters to their power-on values."""

        self.state = CPUState()
        self.sub_tick = TIMER_CYCLE
        self.step_count = 0

    def step(self, io: IOManager) -> None:
        """Execute a single instruction against ``io``."""

        self._tick_timers()

        address = self.state.pc
        word = self._fetch(io)
        instruction = decode(word, self.instruction_table)
        if instruction is None:
            raise IllegalOpcodeError(word, address)

        operands = Operands.from_word(word)
        if debug_enabled("cpu"):
            debug_log("cpu", "$%04X: %04X  %s", address, word, instruction.format(operands))

        handler = getattr(self, instruction.handler, None)
        if handler is None:
            raise CPUError(f"handler '{instruction.handler}' not implemented")
        handler(io, operands)
        self.step_count += 1

    # ------------------------------------------------------------------
    # Flow control

    def op_cls(self, io: IOManager, _: Operands) -> None:
        io.clear_display()

    def op_ret(self, io: IOManager, _: Operands) -> None:
        self.state.pc = self._pop(io)

    def op_sys(self, _: IOManager, op: Operands) -> None:
        raise MachineCodeCallError(op.word, self.state.pc - 2)

    def op_jp(self, _: IOManager, op: Operands) -> None:
        self.state.pc = op.nnn

    def op_call(self, io: IOManager, op: Operands) -> None:
        self._push(io, self.state.pc)
        self.state.pc = op.nnn

    def op_jp_offset(self, _: IOManager, op: Operands) -> None:
        self.state.pc = (self.state.v[0] + op.nnn) & 0xFFFF

    def op_se_imm(self, _: IOManager, op: Operands) -> None:
        if self.state.v[op.x] == op.nn:
            self._advance()

    def op_sne_imm(self, _: IOManager, op: Operands) -> None:
        if self.state.v[op.x] != op.nn:
            self._advance()

    def op_se_reg(self, _: IOManager, op: Operands) -> None:
        if self.state.v[op.x] == self.state.v[op.y]:
            self._advance()

    def op_sne_reg(self, _: IOManager, op: Operands) -> None:
        if self.state.v[op.x] != self.state.v[op.y]:
            self._advance()

    def op_skp(self, io: IOManager, op: Operands) -> None:
        if io.get_key() == self.state.v[op.x]:
            self._advance()

    def op_sknp(self, io: IOManager, op: Operands) -> None:
        if io.get_key() != self.state.v[op.x]:
            self._advance()

    # ------------------------------------------------------------------
    # Register arithmetic

    def op_ld_imm(self, _: IOManager, op: Operands) -> None:
        self.state.v[op.x] = op.nn

    def op_add_imm(self, _: IOManager, op: Operands) -> None:
        v = self.state.v
        v[op.x] = (v[op.x] + op.nn) & 0xFF

    def op_ld_reg(self, _: IOManager, op: Operands) -> None:
        self.state.v[op.x] = self.state.v[op.y]

    def op_or(self, _: IOManager, op: Operands) -> None:
        self.state.v[op.x] |= self.state.v[op.y]

    def op_and(self, _: IOManager, op: Operands) -> None:
        self.state.v[op.x] &= self.state.v[op.y]

    def op_xor(self, _: IOManager, op: Operands) -> None:
        self.state.v[op.x] ^= self.state.v[op.y]

    def op_add_reg(self, _: IOManager, op: Operands) -> None:
        v = self.state.v
        total = v[op.x] + v[op.y]
        v[op.x] = total & 0xFF
        v[FLAG_REGISTER] = 1 if total > 0xFF else 0

    def op_sub(self, _: IOManager, op: Operands) -> None:
        v = self.state.v
        minuend, subtrahend = v[op.x], v[op.y]
        v[op.x] = (minuend - subtrahend) & 0xFF
        v[FLAG_REGISTER] = 0 if minuend < subtrahend else 1

    def op_subn(self, _: IOManager, op: Operands) -> None:
        v = self.state.v
        minuend, subtrahend = v[op.y], v[op.x]
        v[op.x] = (minuend - subtrahend) & 0xFF
        v[FLAG_REGISTER] = 0 if minuend < subtrahend else 1

    def op_shr(self, _: IOManager, op: Operands) -> None:
        v = self.state.v
        value = v[op.x]
        v[FLAG_REGISTER] = value & 0x01
        v[op.x] = value >> 1

    def op_shl(self, _: IOManager, op: Operands) -> None:
        v = self.state.v
        value = v[op.x]
        v[FLAG_REGISTER] = (value >> 7) & 0x01
        v[op.x] = (value << 1) & 0xFF

    def op_rnd(self, _: IOManager, op: Operands) -> None:
        self.state.v[op.x] = self.rng.getrandbits(8) & op.nn

    # ------------------------------------------------------------------
    # Index register, timers and memory

    def op_ld_index(self, _: IOManager, op: Operands) -> None:
        self.state.i = op.nnn

    def op_add_index(self, _: IOManager, op: Operands) -> None:
        self.state.i = (self.state.i + self.state.v[op.x]) & 0xFFFF

    def op_ld_sprite(self, _: IOManager, op: Operands) -> None:
        self.state.i = glyph_address(self.state.v[op.x])

    def op_ld_get_delay(self, _: IOManager, op: Operands) -> None:
        self.state.v[op.x] = self.state.delay

    def op_ld_set_delay(self, _: IOManager, op: Operands) -> None:
        self.state.delay = self.state.v[op.x]

    def op_ld_set_sound(self, _: IOManager, op: Operands) -> None:
        self.state.sound = self.state.v[op.x]

    def op_drw(self, io: IOManager, op: Operands) -> None:
        v = self.state.v
        collision = io.draw(v[op.x], v[op.y], op.n, self.state.i)
        v[FLAG_REGISTER] = 1 if collision else 0

    def op_ld_bcd(self, io: IOManager, op: Operands) -> None:
        value = self.state.v[op.x]
        base = self.state.i
        io.write(base, value // 100)
        io.write(base + 1, (value // 10) % 10)
        io.write(base + 2, value % 10)

    def op_ld_dump(self, io: IOManager, op: Operands) -> None:
        base = self.state.i
        for index in range(op.x + 1):
            io.write(base + index, self.state.v[index])

    def op_ld_load(self, io: IOManager, op: Operands) -> None:
        base = self.state.i
        for index in range(op.x + 1):
            self.state.v[index] = io.read(base + index) & 0xFF

    # ------------------------------------------------------------------
    # Helpers

    def _tick_timers(self) -> None:
        self.sub_tick -= 1
        if self.sub_tick > 0:
            return
        state = self.state
        state.delay = max(0, state.delay - 1)
        state.sound = max(0, state.sound - 1)
        self.sub_tick = TIMER_CYCLE

    def _fetch(self, io: IOManager) -> int:
        word = io.read16(self.state.pc)
        self._advance()
        return word

    def _advance(self) -> None:
        self.state.pc = (self.state.pc + 2) & 0xFFFF

    def _push(self, io: IOManager, value: int) -> None:
        # High byte at sp-1, low byte at sp; the stack grows downward.
        io.write16(self.state.sp - 1, value)
        self.state.sp = (self.state.sp - 2) & 0xFFFF

    def _pop(self, io: IOManager) -> int:
        self.state.sp = (self.state.sp + 2) & 0xFFFF
        return io.read16(self.state.sp - 1)
