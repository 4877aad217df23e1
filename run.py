"""Command-line entry point for the CHIP-8 interpreter.

Set ``CHIP8_DEBUG`` (or pass ``--debug``) to a comma-separated list of
categories (``cpu``, ``input``, ``perf``, ``trace`` or ``all``) to enable
diagnostics.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.ui.app import AppConfig, Chip8App
from pychip8.utils import configure_debug
from pychip8.utils.debug import CATEGORIES
from pychip8.video import PALETTES, get_palette


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter",
    )
    parser.add_argument(
        "rom",
        type=Path,
        help="Path to the CHIP-8 ROM to load at 0x200",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--speed",
        type=int,
        default=10,
        help="Instructions executed per 60 Hz frame (default: 10)",
    )
    parser.add_argument(
        "--palette",
        default="mono",
        choices=sorted(PALETTES),
        help="Screen colours (default: mono)",
    )
    parser.add_argument(
        "--debug",
        metavar="CATEGORIES",
        help="Comma-separated debug categories (overrides CHIP8_DEBUG)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the random-number instruction",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.speed < 0:
        parser.error("--speed must not be negative")

    if args.debug is not None:
        active = configure_debug(args.debug)
        unknown = sorted(active - CATEGORIES - {"all"})
        if unknown:
            parser.error(f"unknown debug categories: {', '.join(unknown)}")

    config = AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        steps_per_frame=args.speed,
        seed=args.seed,
        palette=get_palette(args.palette),
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
