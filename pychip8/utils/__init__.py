"""Utility helpers for the CHIP-8 interpreter."""

from .debug import configure as configure_debug
from .debug import debug_enabled, debug_log
from .trace import TraceRecorder

__all__ = [
    "configure_debug",
    "debug_enabled",
    "debug_log",
    "TraceRecorder",
]
