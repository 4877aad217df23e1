"""Opcode metadata for the CHIP-8 instruction set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, List, Sequence


@dataclass(frozen=True)
class Operands:
    """Nibble fields of one 16-bit instruction word."""

    word: int
    x: int
    y: int
    n: int
    nn: int
    nnn: int

    @classmethod
    def from_word(cls, word: int) -> "Operands":
        word &= 0xFFFF
        return cls(
            word=word,
            x=(word >> 8) & 0xF,
            y=(word >> 4) & 0xF,
            n=word & 0xF,
            nn=word & 0xFF,
            nnn=word & 0xFFF,
        )


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single CHIP-8 instruction form.

    A word belongs to this form when ``word & mask == pattern``. ``syntax`` is
    a ``str.format`` template over the :class:`Operands` fields used for
    disassembly.
    """

    mask: int
    pattern: int
    mnemonic: str
    handler: str
    syntax: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.mask <= 0xFFFF:
            raise ValueError(f"mask out of range: {self.mask:#x}")
        if self.pattern & ~self.mask:
            raise ValueError(f"pattern {self.pattern:#06x} has bits outside mask {self.mask:#06x}")
        if self.mask & 0xF000 != 0xF000:
            raise ValueError("mask must cover the leading nibble")

    def matches(self, word: int) -> bool:
        return (word & self.mask) == self.pattern

    def format(self, operands: Operands) -> str:
        if not self.syntax:
            return self.mnemonic
        fields = {
            "x": operands.x,
            "y": operands.y,
            "n": operands.n,
            "nn": operands.nn,
            "nnn": operands.nnn,
        }
        return f"{self.mnemonic} {self.syntax.format(**fields)}"


class OpcodeTable:
    """Instruction forms bucketed by leading nibble, kept in priority order."""

    _BUCKETS: Final[int] = 0x10

    def __init__(self) -> None:
        self._buckets: List[List[Instruction]] = [[] for _ in range(self._BUCKETS)]

    def register(self, instruction: Instruction) -> None:
        bucket = self._buckets[instruction.pattern >> 12]
        for existing in bucket:
            if existing.mask == instruction.mask and existing.pattern == instruction.pattern:
                raise ValueError(
                    f"pattern {instruction.pattern:#06x} already registered as {existing.mnemonic}"
                )
        bucket.append(instruction)

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Sequence[Instruction]]:
        return tuple(tuple(bucket) for bucket in self._buckets)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Sequence[Instruction]]:
    """Build the 16-bucket lookup table; earlier entries win within a bucket."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(0xFFFF, 0x00E0, "CLS", "op_cls"),
    Instruction(0xFFFF, 0x00EE, "RET", "op_ret"),
    # Must follow CLS/RET: catches every other 0nnn word.
    Instruction(0xF000, 0x0000, "SYS", "op_sys", "{nnn:#05x}"),
    Instruction(0xF000, 0x1000, "JP", "op_jp", "{nnn:#05x}"),
    Instruction(0xF000, 0x2000, "CALL", "op_call", "{nnn:#05x}"),
    Instruction(0xF000, 0x3000, "SE", "op_se_imm", "V{x:X}, {nn:#04x}"),
    Instruction(0xF000, 0x4000, "SNE", "op_sne_imm", "V{x:X}, {nn:#04x}"),
    Instruction(0xF00F, 0x5000, "SE", "op_se_reg", "V{x:X}, V{y:X}"),
    Instruction(0xF000, 0x6000, "LD", "op_ld_imm", "V{x:X}, {nn:#04x}"),
    Instruction(0xF000, 0x7000, "ADD", "op_add_imm", "V{x:X}, {nn:#04x}"),
    Instruction(0xF00F, 0x8000, "LD", "op_ld_reg", "V{x:X}, V{y:X}"),
    Instruction(0xF00F, 0x8001, "OR", "op_or", "V{x:X}, V{y:X}"),
    Instruction(0xF00F, 0x8002, "AND", "op_and", "V{x:X}, V{y:X}"),
    Instruction(0xF00F, 0x8003, "XOR", "op_xor", "V{x:X}, V{y:X}"),
    Instruction(0xF00F, 0x8004, "ADD", "op_add_reg", "V{x:X}, V{y:X}"),
    Instruction(0xF00F, 0x8005, "SUB", "op_sub", "V{x:X}, V{y:X}"),
    Instruction(0xF00F, 0x8006, "SHR", "op_shr", "V{x:X}"),
    Instruction(0xF00F, 0x8007, "SUBN", "op_subn", "V{x:X}, V{y:X}"),
    Instruction(0xF00F, 0x800E, "SHL", "op_shl", "V{x:X}"),
    Instruction(0xF00F, 0x9000, "SNE", "op_sne_reg", "V{x:X}, V{y:X}"),
    Instruction(0xF000, 0xA000, "LD", "op_ld_index", "I, {nnn:#05x}"),
    Instruction(0xF000, 0xB000, "JP", "op_jp_offset", "V0, {nnn:#05x}"),
    Instruction(0xF000, 0xC000, "RND", "op_rnd", "V{x:X}, {nn:#04x}"),
    Instruction(0xF000, 0xD000, "DRW", "op_drw", "V{x:X}, V{y:X}, {n}"),
    Instruction(0xF0FF, 0xE09E, "SKP", "op_skp", "V{x:X}"),
    Instruction(0xF0FF, 0xE0A1, "SKNP", "op_sknp", "V{x:X}"),
    Instruction(0xF0FF, 0xF007, "LD", "op_ld_get_delay", "V{x:X}, DT"),
    Instruction(0xF0FF, 0xF015, "LD", "op_ld_set_delay", "DT, V{x:X}"),
    Instruction(0xF0FF, 0xF018, "LD", "op_ld_set_sound", "ST, V{x:X}"),
    Instruction(0xF0FF, 0xF01E, "ADD", "op_add_index", "I, V{x:X}"),
    Instruction(0xF0FF, 0xF029, "LD", "op_ld_sprite", "F, V{x:X}"),
    Instruction(0xF0FF, 0xF033, "LD", "op_ld_bcd", "B, V{x:X}"),
    Instruction(0xF0FF, 0xF055, "LD", "op_ld_dump", "[I], V{x:X}"),
    Instruction(0xF0FF, 0xF065, "LD", "op_ld_load", "V{x:X}, [I]"),
)


OPCODE_TABLE: Sequence[Sequence[Instruction]] = build_instruction_table(DEFAULT_INSTRUCTIONS)


def decode(word: int, table: Sequence[Sequence[Instruction]] = OPCODE_TABLE) -> Instruction | None:
    """Return the instruction form for ``word`` or ``None`` if it is unknown."""

    word &= 0xFFFF
    for instruction in table[word >> 12]:
        if instruction.matches(word):
            return instruction
    return None


def disassemble(word: int, table: Sequence[Sequence[Instruction]] = OPCODE_TABLE) -> str:
    instruction = decode(word, table)
    if instruction is None:
        return "???"
    return instruction.format(Operands.from_word(word))

