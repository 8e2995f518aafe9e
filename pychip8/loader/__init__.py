"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .rom import MAX_ROM_SIZE, RomLoadError, copy_rom, read_rom, read_rom_from_path

__all__ = [
    "MAX_ROM_SIZE",
    "RomLoadError",
    "copy_rom",
    "read_rom",
    "read_rom_from_path",
]
