"""Category-gated debug output for the CHIP-8 interpreter.

Categories come from the ``CHIP8_DEBUG`` environment variable (comma
separated, ``all`` enables everything) unless :func:`configure` is given an
explicit list, as ``run.py --debug`` does.
"""

from __future__ import annotations

import os

ENV_VAR = "CHIP8_DEBUG"
CATEGORIES = frozenset({"cpu", "input", "perf", "trace"})

_active: frozenset[str] | None = None


def _parse(value: str) -> frozenset[str]:
    return frozenset(part.strip().lower() for part in value.split(",") if part.strip())


def configure(value: str | None = None) -> frozenset[str]:
    """Select the active categories; ``None`` reads them from the environment."""

    global _active
    if value is None:
        value = os.environ.get(ENV_VAR, "")
    _active = _parse(value)
    return _active


def reset() -> None:
    """Drop the cached selection so the next query consults the environment."""

    global _active
    _active = None


def debug_enabled(category: str | None = None) -> bool:
    active = _active if _active is not None else configure()
    if not active:
        return False
    if category is None or "all" in active:
        return True
    return category.lower() in active


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    if args:
        try:
            message = message % args
        except (TypeError, ValueError):
            message = f"{message} {args!r}"
    print(f"[CHIP8][{category}] {message}")
