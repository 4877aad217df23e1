from types import SimpleNamespace

import pytest

from pychip8.utils.trace import TraceRecorder


def _state(pc: int, **kwargs):
    defaults = {"v": [0] * 16, "i": 0x0000, "sp": 0x0EFF, "delay": 0, "sound": 0}
    defaults.update(kwargs)
    return SimpleNamespace(pc=pc, **defaults)


def test_trace_recorder_overwrites_old_entries():
    recorder = TraceRecorder(capacity=2)

    recorder.record_step(_state(0x200), 0x600A, mnemonic="LD V0, 0x0a")
    recorder.record_step(_state(0x202, v=[0x0A] + [0] * 15), 0x7005, mnemonic="ADD V0, 0x05")
    recorder.record_step(_state(0x204, i=0x300, delay=3), 0xD015, mnemonic="DRW V0, V1, 5", note="draw")

    lines = list(recorder.format_entries())
    assert len(recorder) == 2
    assert len(lines) == 2
    assert "pc=0202" in lines[0]
    assert "V=[0A 00" in lines[0]
    assert "pc=0204" in lines[1]
    assert "I=0300" in lines[1]
    assert "DT=03" in lines[1]
    assert "note=draw" in lines[1]


def test_trace_recorder_handles_missing_opcode():
    recorder = TraceRecorder(1)
    recorder.record_step(_state(0x2000), None)

    lines = list(recorder.format_entries())
    assert len(lines) == 1
    assert "opcode=----" in lines[0]
    assert lines[0].startswith("pc=2000 ")


def test_trace_recorder_limit():
    recorder = TraceRecorder(8)
    for offset in range(5):
        recorder.record_step(_state(0x200 + offset * 2), 0x1200)

    lines = recorder.format_entries(limit=2)
    assert [line.split()[0] for line in lines] == ["pc=0206", "pc=0208"]
    assert recorder.format_entries(limit=0) == []


def test_trace_recorder_capacity_must_be_positive():
    with pytest.raises(ValueError):
        TraceRecorder(0)
