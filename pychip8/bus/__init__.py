"""Bus-related helpers for the CHIP-8 interpreter."""

from .memory import (
    FONT_REGION,
    FONT_SET,
    MEMORY_SIZE,
    PROGRAM_REGION,
    Chip8Memory,
    MemoryError,
    MemoryRegion,
)

__all__ = [
    "Chip8Memory",
    "MemoryError",
    "MemoryRegion",
    "FONT_REGION",
    "FONT_SET",
    "MEMORY_SIZE",
    "PROGRAM_REGION",
]
