"""Utility helpers for the CHIP-8 interpreter."""

from .debug import debug_enabled, debug_log, log_failure, reload_categories

__all__ = [
    "debug_enabled",
    "debug_log",
    "log_failure",
    "reload_categories",
]
