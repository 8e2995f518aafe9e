"""Memory model for the CHIP-8 interpreter.

The CHIP-8 sees a flat 4 KiB byte-addressable space split into three fixed
logical regions: the reserved interpreter area, the hexadecimal font table
(which lives inside the reserved area) and the program area that ROM images
are copied into. Every address is wrapped into the 12-bit space, so accesses
past ``0xFFF`` land back at ``0x000`` instead of faulting.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

MEMORY_SIZE = 0x1000
ADDRESS_MASK = MEMORY_SIZE - 1

FONT_GLYPH_HEIGHT = 5
FONT_GLYPH_COUNT = 16

FONT_SET: Sequence[int] = (
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
)


class MemoryError(Exception):
    """Raised when the memory map is misconfigured or used incorrectly."""


@dataclass(frozen=True)
class MemoryRegion:
    """Inclusive address range within the CHIP-8 address space."""

    start: int
    end: int
    name: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.start <= self.end < MEMORY_SIZE:
            raise MemoryError(f"region {self.name!r} {self.start:#05x}-{self.end:#05x} outside address space")

    def length(self) -> int:
        return self.end - self.start + 1


FONT_REGION = MemoryRegion(0x050, 0x050 + FONT_GLYPH_COUNT * FONT_GLYPH_HEIGHT - 1, "font")
PROGRAM_REGION = MemoryRegion(0x200, 0xFFF, "program")


def _wrap(address: int) -> int:
    return address & ADDRESS_MASK


class Chip8Memory:
    """4 KiB of RAM with the font table preloaded."""

    def __init__(self) -> None:
        self._data = bytearray(MEMORY_SIZE)
        self.load_font()

    def load_font(self) -> None:
        start = FONT_REGION.start
        self._data[start : start + len(FONT_SET)] = bytes(FONT_SET)

    def load8(self, address: int) -> int:
        return self._data[_wrap(address)]

    def store8(self, address: int, value: int) -> None:
        self._data[_wrap(address)] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian instruction word."""

        high = self.load8(address)
        low = self.load8(address + 1)
        return (high << 8) | low

    def read_block(self, address: int, length: int) -> bytes:
        return bytes(self.load8(address + offset) for offset in range(length))

    def program_view(self) -> memoryview:
        """Writable view over the program region, used by ROM loaders."""

        return memoryview(self._data)[PROGRAM_REGION.start : PROGRAM_REGION.end + 1]


__all__ = [
    "ADDRESS_MASK",
    "Chip8Memory",
    "FONT_GLYPH_COUNT",
    "FONT_GLYPH_HEIGHT",
    "FONT_REGION",
    "FONT_SET",
    "MEMORY_SIZE",
    "MemoryError",
    "MemoryRegion",
    "PROGRAM_REGION",
]
