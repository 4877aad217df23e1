"""CHIP-8 hexadecimal keypad handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# Host key name -> logical key code. The 4x4 block under 1/Q/A/Z mirrors
# the original COSMAC VIP keypad:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  <-  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
KEY_MAP_TEMPLATE: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


ALIAS_TABLE: Mapping[str, str] = {
    "[1]": "1",
    "[2]": "2",
    "[3]": "3",
    "[4]": "4",
}


@dataclass
class Keypad:
    """Sixteen-key keypad that remembers the most recent held key."""

    key_map: Mapping[str, int] = field(default_factory=lambda: dict(KEY_MAP_TEMPLATE))
    _held: List[int] = field(default_factory=list, init=False, repr=False)
    _listeners: list[Callable[[int, bool], None]] = field(default_factory=list, init=False, repr=False)

    def press(self, key_name: str) -> None:
        code = self._lookup(key_name)
        if code is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return
        self.press_code(code)

    def release(self, key_name: str) -> None:
        code = self._lookup(key_name)
        if code is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key_name)
            return
        self.release_code(code)

    def press_code(self, code: int) -> None:
        code = self._check_code(code)
        already_held = code in self._held
        if already_held:
            self._held.remove(code)
        self._held.append(code)
        if debug_enabled("input"):
            debug_log("input", "key_press=%X held=%s", code, self._format_held())
        if not already_held:
            self._notify_listeners(code, True)

    def release_code(self, code: int) -> None:
        code = self._check_code(code)
        if code not in self._held:
            return
        self._held.remove(code)
        if debug_enabled("input"):
            debug_log("input", "key_release=%X held=%s", code, self._format_held())
        self._notify_listeners(code, False)

    def current_key(self) -> int | None:
        """Return the most recently pressed key that is still held."""

        if not self._held:
            return None
        return self._held[-1]

    def is_pressed(self, code: int) -> bool:
        return self._check_code(code) in self._held

    def reset(self) -> None:
        self._held.clear()

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(code in self._held for code in range(KEY_COUNT))

    def add_listener(self, listener: Callable[[int, bool], None]) -> None:
        self._listeners.append(listener)

    def _lookup(self, key_name: str) -> int | None:
        name = key_name.lower()
        name = ALIAS_TABLE.get(name, name)
        return self.key_map.get(name)

    @staticmethod
    def _check_code(code: int) -> int:
        if not 0 <= code < KEY_COUNT:
            raise ValueError(f"key code out of range: {code}")
        return code

    def _format_held(self) -> str:
        return ",".join(f"{code:X}" for code in self._held) or "-"

    def _notify_listeners(self, code: int, pressed: bool) -> None:
        for listener in tuple(self._listeners):
            listener(code, pressed)
