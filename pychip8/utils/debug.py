"""Lightweight debug logging helpers for the CHIP-8 interpreter."""

from __future__ import annotations

import os
import sys
from typing import Iterable

_CATEGORIES: set[str] | None = None


def _load_categories() -> set[str]:
    global _CATEGORIES
    if _CATEGORIES is not None:
        return _CATEGORIES
    value = os.environ.get("CHIP8_DEBUG", "")
    if not value:
        _CATEGORIES = set()
        return _CATEGORIES
    parts: Iterable[str] = (part.strip().lower() for part in value.split(","))
    _CATEGORIES = {part for part in parts if part}
    return _CATEGORIES


def reload_categories() -> None:
    """Forget the cached ``CHIP8_DEBUG`` value so it is read again."""

    global _CATEGORIES
    _CATEGORIES = None


def debug_enabled(category: str | None = None) -> bool:
    categories = _load_categories()
    if not categories:
        return False
    if "all" in categories:
        return True
    if category is None:
        return True
    return category.lower() in categories


def _format(message: str, args: tuple) -> str:
    if not args:
        return message
    try:
        return message % args
    except (TypeError, ValueError):
        return f"{message} {args!r}"


def debug_log(category: str, message: str, *args) -> None:
    if not debug_enabled(category):
        return
    print(f"[CHIP8][{category}] {_format(message, args)}")


def log_failure(category: str, message: str, *args) -> None:
    """Report a recoverable failure regardless of ``CHIP8_DEBUG``."""

    print(f"[CHIP8][{category}] FAIL: {_format(message, args)}", file=sys.stderr)
