"""Unit tests for the CHIP-8 memory block."""

import pytest

from pychip8.bus import MEMORY_SIZE, Memory, MemoryError


def test_default_size_is_four_kib() -> None:
    memory = Memory()

    assert len(memory) == MEMORY_SIZE == 0x1000
    assert memory.snapshot() == bytes(0x1000)


def test_store_and_load() -> None:
    memory = Memory()
    memory.store8(0x300, 0x1FF)
    memory.store16(0x400, 0xABCD)

    assert memory.load8(0x300) == 0xFF
    assert memory.load8(0x400) == 0xAB
    assert memory.load8(0x401) == 0xCD
    assert memory.load16(0x400) == 0xABCD


def test_addresses_wrap_around_memory_size() -> None:
    memory = Memory()
    memory.store8(0x1000, 0x12)
    memory.store16(0x0FFF, 0x3456)

    assert memory.load8(0x0000) == 0x56
    assert memory.load8(0x0FFF) == 0x34
    assert memory.load8(-1) == 0x34


def test_load_image_must_fit() -> None:
    memory = Memory()
    memory.load_image(0xFFE, b"\x01\x02")

    assert memory.read_block(0xFFE, 2) == b"\x01\x02"
    with pytest.raises(MemoryError):
        memory.load_image(0xFFF, b"\x01\x02")


def test_non_positive_length_rejected() -> None:
    with pytest.raises(MemoryError):
        Memory(0)
