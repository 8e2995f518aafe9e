"""Input helpers for the CHIP-8 interpreter."""

from .keyboard import (
    KEYPAD_LAYOUT,
    NO_KEY,
    RATE_FASTER,
    RATE_SLOWER,
    KeyState,
    keypad_value,
    rate_hint,
)

__all__ = [
    "KeyState",
    "KEYPAD_LAYOUT",
    "NO_KEY",
    "RATE_FASTER",
    "RATE_SLOWER",
    "keypad_value",
    "rate_hint",
]
