"""CHIP-8 hexadecimal keypad state and the host keyboard layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from pychip8.utils import debug_enabled, debug_log

NO_KEY = 0xFF
KEY_COUNT = 16

# Host layout         CHIP-8 keypad
#   1 2 3 4             1 2 3 C
#   q w e r             4 5 6 D
#   a s d f             7 8 9 E
#   z x c v             A 0 B F
KEYPAD_LAYOUT: Mapping[str, int] = {
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

RATE_FASTER = 1
RATE_SLOWER = -1

RATE_HOTKEYS: Mapping[str, int] = {
    "+": RATE_FASTER,
    "=": RATE_FASTER,
    "[+]": RATE_FASTER,
    "-": RATE_SLOWER,
    "_": RATE_SLOWER,
    "[-]": RATE_SLOWER,
}


def keypad_value(key_name: str) -> int | None:
    """Return the keypad value for a host key name, or ``None`` if unmapped."""

    return KEYPAD_LAYOUT.get(key_name.lower())


def rate_hint(key_name: str) -> int:
    return RATE_HOTKEYS.get(key_name.lower(), 0)


@dataclass
class KeyState:
    """Single "currently pressed" key, or :data:`NO_KEY`."""

    current: int = NO_KEY

    def press(self, key: int) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"keypad value out of range: {key}")
        self.current = key
        if debug_enabled("input"):
            debug_log("input", "press key=%x", key)

    def release(self) -> None:
        if debug_enabled("input") and self.current != NO_KEY:
            debug_log("input", "release key=%x", self.current)
        self.current = NO_KEY

    def update(self, key: int) -> None:
        """Apply a polled key value (a keypad value or :data:`NO_KEY`)."""

        if key == NO_KEY:
            self.release()
        elif key != self.current:
            self.press(key)

    @property
    def any_pressed(self) -> bool:
        return self.current != NO_KEY

    def is_pressed(self, key: int) -> bool:
        return self.current != NO_KEY and self.current == key
