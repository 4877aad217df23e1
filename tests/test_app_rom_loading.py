"""Chip8App ROM loading and fatal error handling, without opening a window."""

from __future__ import annotations

import pytest

import run
from pychip8.ui.app import AppConfig, Chip8App, _canonical_name
from pychip8.utils import debug
from pychip8.video import get_palette


def test_app_creates_machine_from_rom(tmp_path) -> None:
    rom_path = tmp_path / "demo.ch8"
    rom_path.write_bytes(b"\x60\x2A\x12\x02")

    app = Chip8App(AppConfig(rom_path=rom_path, seed=3))
    machine = app._create_machine(rom_path)

    assert machine.memory.load8(0x200) == 0x60
    assert machine.memory.load8(0x203) == 0x02
    assert machine.cpu.state.pc == 0x200

    app._step_cpu(machine, 3)
    assert machine.cpu.state.v[0] == 0x2A


def test_app_missing_rom(tmp_path) -> None:
    app = Chip8App(AppConfig(rom_path=tmp_path / "missing.ch8"))

    with pytest.raises(RuntimeError, match="not found"):
        app._create_machine(tmp_path / "missing.ch8")


def test_app_oversized_rom(tmp_path) -> None:
    rom_path = tmp_path / "huge.ch8"
    rom_path.write_bytes(bytes(0x1000))
    app = Chip8App(AppConfig(rom_path=rom_path))

    with pytest.raises(RuntimeError, match="Failed to load ROM"):
        app._create_machine(rom_path)


def test_app_fatal_opcode_becomes_runtime_error(tmp_path) -> None:
    rom_path = tmp_path / "bad.ch8"
    rom_path.write_bytes(b"\x60\x01\xFF\xFF")
    app = Chip8App(AppConfig(rom_path=rom_path))
    machine = app._create_machine(rom_path)

    with pytest.raises(RuntimeError, match=r"PC=\$0202"):
        app._step_cpu(machine, 5)


def test_app_rejects_bad_scale() -> None:
    with pytest.raises(ValueError):
        Chip8App(AppConfig(scale=0))


def test_canonical_key_names() -> None:
    assert _canonical_name("Q") == "q"
    assert _canonical_name("[4]") == "[4]"
    assert _canonical_name("left shift") is None


def test_cli_requires_existing_rom(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run.main([str(tmp_path / "missing.ch8")])

    assert excinfo.value.code == 2


def test_cli_parses_options(tmp_path) -> None:
    parser = run.build_arg_parser()
    args = parser.parse_args([str(tmp_path / "rom.ch8"), "--scale", "4", "--speed", "20", "--seed", "9"])

    assert args.scale == 4
    assert args.speed == 20
    assert args.seed == 9


def test_cli_rejects_unknown_palette(tmp_path) -> None:
    parser = run.build_arg_parser()

    with pytest.raises(SystemExit):
        parser.parse_args([str(tmp_path / "rom.ch8"), "--palette", "sepia"])


def test_cli_rejects_unknown_debug_category(tmp_path) -> None:
    rom_path = tmp_path / "rom.ch8"
    rom_path.write_bytes(b"\x12\x00")

    try:
        with pytest.raises(SystemExit) as excinfo:
            run.main([str(rom_path), "--debug", "cpu,bogus"])
    finally:
        debug.reset()

    assert excinfo.value.code == 2


def test_cli_passes_palette_and_reports_fatal_errors(tmp_path, monkeypatch) -> None:
    rom_path = tmp_path / "rom.ch8"
    rom_path.write_bytes(b"\x12\x00")
    seen = {}

    def fake_run(self) -> None:
        seen["palette"] = self._config.palette
        raise RuntimeError("Unsupported instruction $FFFF (PC=$0200)")

    monkeypatch.setattr(run.Chip8App, "run", fake_run)

    with pytest.raises(SystemExit) as excinfo:
        run.main([str(rom_path), "--palette", "amber"])

    assert excinfo.value.code == 1
    assert seen["palette"] == get_palette("amber")


def test_app_paints_first_frame_before_any_draw(tmp_path) -> None:
    rom_path = tmp_path / "idle.ch8"
    rom_path.write_bytes(b"\x12\x00")
    app = Chip8App(AppConfig(rom_path=rom_path, palette=get_palette("amber")))
    machine = app._create_machine(rom_path)

    app._step_cpu(machine, 4)
    assert app._take_redraw(machine) is True
    assert app._take_redraw(machine) is False

    machine.io.clear_display()
    assert app._take_redraw(machine) is True
    assert app._take_redraw(machine) is False
