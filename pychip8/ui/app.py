"""Pygame frontend for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from pychip8.cpu import CPUError
from pychip8.cpu.opcodes import disassemble
from pychip8.loader import RomFormatError, load_rom_from_path
from pychip8.system import Machine, MachineConfig, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import HEIGHT, MONOCHROME, WIDTH, Renderer
from pychip8.video.palette import RGBColor


@dataclass
class AppConfig:
    """Configuration for the pygame frontend."""

    rom_path: Optional[Path] = None
    scale: int = 10
    steps_per_frame: int = 10
    frame_rate: int = 60
    seed: Optional[int] = None
    palette: Sequence[RGBColor] = MONOCHROME


class Chip8App:
    """Thin wrapper around the pygame event loop."""

    def __init__(self, config: AppConfig) -> None:
        if config.scale <= 0:
            raise ValueError("scale must be positive")
        if config.steps_per_frame < 0:
            raise ValueError("steps_per_frame must not be negative")
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._perf_enabled = debug_enabled("perf")
        self._perf_frame = 0
        self._trace_recorder: TraceRecorder | None = None
        self._pending_redraw = True
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        if not self._config.rom_path:
            raise RuntimeError("ROM image is required; pass a ROM path")

        machine = self._create_machine(self._config.rom_path)
        self._machine = machine
        renderer = Renderer(self._config.palette)

        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {self._config.rom_path.name}")
        surface_size = (WIDTH * self._config.scale, HEIGHT * self._config.scale)
        screen = pygame.display.set_mode(surface_size)
        clock = pygame.time.Clock()
        self._running = True

        import time

        try:
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key_event(pygame, event.key, pressed=True)
                    elif event.type == pygame.KEYUP:
                        self._handle_key_event(pygame, event.key, pressed=False)

                if not self._running:
                    break

                frame_start_time = time.perf_counter()
                self._step_cpu(machine, self._config.steps_per_frame)

                if self._take_redraw(machine):
                    frame = renderer.render(machine.framebuffer.pixels(), scale=self._config.scale)
                    screen.blit(frame.to_surface(), (0, 0))
                    pygame.display.flip()

                if self._perf_enabled:
                    self._perf_frame += 1
                    frame_duration = time.perf_counter() - frame_start_time
                    debug_log(
                        "perf",
                        "frame=%d steps=%d frame_ms=%.3f",
                        self._perf_frame,
                        self._config.steps_per_frame,
                        frame_duration * 1000.0,
                    )

                clock.tick(self._config.frame_rate)
        finally:
            pygame.quit()

    def _take_redraw(self, machine: Machine) -> bool:
        # the first frame paints the palette background before the ROM draws
        dirty = machine.io.consume_draw_flag() or self._pending_redraw
        self._pending_redraw = False
        return dirty

    def _handle_key_event(self, pygame, key_code: int, *, pressed: bool) -> None:
        if self._machine is None:
            return
        name = pygame.key.name(key_code)
        canonical = _canonical_name(name)
        if debug_enabled("input"):
            debug_log("input", "event=%s canonical=%s pressed=%s", name, canonical, pressed)
        if canonical is None:
            return
        if pressed:
            self._machine.keypad.press(canonical)
        else:
            self._machine.keypad.release(canonical)

    def _create_machine(self, rom_path: Path) -> Machine:
        try:
            rom = load_rom_from_path(rom_path)
        except FileNotFoundError as exc:
            raise RuntimeError(f"ROM file not found: {rom_path}") from exc
        except RomFormatError as exc:
            raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc

        return create_machine(MachineConfig(rom_image=rom.data, seed=self._config.seed))

    def _step_cpu(self, machine: Machine, steps: int) -> None:
        cpu = machine.cpu
        io = machine.io
        trace = self._trace_recorder

        try:
            for _ in range(steps):
                if trace is not None:
                    word = io.read16(cpu.state.pc)
                    trace.record_step(cpu.state, word, mnemonic=disassemble(word))
                cpu.step(io)
        except CPUError as exc:
            self._report_fatal(machine, exc)
            raise RuntimeError(str(exc)) from exc

    def _report_fatal(self, machine: Machine, exc: CPUError) -> None:
        debug_log("cpu", "fatal: %s", exc)
        if self._trace_recorder is not None:
            self._trace_recorder.dump("trace", limit=32)
        for line in self._dump_cpu(machine):
            debug_log("cpu", line)

    def _dump_cpu(self, machine: Machine) -> list[str]:
        state = machine.cpu.state
        registers = " ".join(f"V{index:X}={value:02X}" for index, value in enumerate(state.v))
        return [
            "CPU PC={:04X} SP={:04X} I={:04X} DT={:02X} ST={:02X}".format(
                state.pc,
                state.sp,
                state.i,
                state.delay,
                state.sound,
            ),
            registers,
        ]


def _canonical_name(name: str) -> str | None:
    lowered = name.lower()
    if lowered.startswith("[") and lowered.endswith("]"):
        # keypad digits are reported as "[1]"
        return lowered
    if len(lowered) == 1:
        return lowered
    if debug_enabled("input"):
        debug_log("input", "ignored=%s", lowered)
    return None
