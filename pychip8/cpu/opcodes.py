"""Opcode metadata for the CHIP-8 instruction set.

Dispatch is two-level. The high nibble of the instruction word selects one of
sixteen family entries; the ``0``, ``8``, ``E`` and ``F`` families then look up
a sub-table keyed on the low nibble (``8``) or the low byte (the others).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Final, Iterable, List, Mapping, Sequence


class SubKey(Enum):
    """How a family entry selects its sub-operation."""

    NONE = auto()
    LOW_NIBBLE = auto()
    LOW_BYTE = auto()
    WORD = auto()


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single CHIP-8 operation."""

    key: int
    mnemonic: str
    handler: str


@dataclass(frozen=True)
class Family:
    """Top-level entry selected by the high nibble."""

    nibble: int
    pattern: str
    handler: str | None = None
    sub_key: SubKey = SubKey.NONE
    # Whether PC still advances when the sub-table has no match.
    advance_on_unknown: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.nibble <= 0xF:
            raise ValueError(f"family nibble out of range: {self.nibble}")
        if self.handler is None and self.sub_key is SubKey.NONE:
            raise ValueError(f"family {self.nibble:X} needs a handler or a sub-table")


class SubTable:
    """Mutable builder for a family's sub-operation table."""

    def __init__(self, family: int) -> None:
        self._family = family
        self._entries: Dict[int, Instruction] = {}

    def register(self, instruction: Instruction) -> None:
        existing = self._entries.get(instruction.key)
        if existing is not None:
            raise ValueError(
                f"family {self._family:X} key {instruction.key:#x} already registered as {existing.mnemonic}")
        self._entries[instruction.key] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Mapping[int, Instruction]:
        return dict(self._entries)


def build_family_table(families: Iterable[Family]) -> Sequence[Family]:
    """Build the 16-entry high-nibble lookup table."""

    table: List[Family | None] = [None] * 0x10
    for family in families:
        if table[family.nibble] is not None:
            raise ValueError(f"family {family.nibble:X} already registered")
        table[family.nibble] = family
    missing = [f"{index:X}" for index, entry in enumerate(table) if entry is None]
    if missing:
        raise ValueError(f"families missing from table: {', '.join(missing)}")
    return tuple(table)  # type: ignore[arg-type]


def _sub_table(family: int, instructions: Iterable[Instruction]) -> Mapping[int, Instruction]:
    builder = SubTable(family)
    builder.register_all(instructions)
    return builder.freeze()


FAMILY_TABLE: Final[Sequence[Family]] = build_family_table(
    (
        Family(0x0, "0NNN", sub_key=SubKey.WORD),
        Family(0x1, "1NNN", "op_jump"),
        Family(0x2, "2NNN", "op_call"),
        Family(0x3, "3XNN", "op_skip_eq_immediate"),
        Family(0x4, "4XNN", "op_skip_ne_immediate"),
        Family(0x5, "5XY0", "op_skip_eq_register"),
        Family(0x6, "6XNN", "op_load_immediate"),
        Family(0x7, "7XNN", "op_add_immediate"),
        Family(0x8, "8XYN", sub_key=SubKey.LOW_NIBBLE),
        Family(0x9, "9XY0", "op_skip_ne_register"),
        Family(0xA, "ANNN", "op_load_index"),
        Family(0xB, "BNNN", "op_jump_offset"),
        Family(0xC, "CXNN", "op_random"),
        Family(0xD, "DXYN", "op_draw"),
        Family(0xE, "EXNN", sub_key=SubKey.LOW_BYTE, advance_on_unknown=False),
        Family(0xF, "FXNN", sub_key=SubKey.LOW_BYTE, advance_on_unknown=False),
    )
)

SUB_TABLES: Final[Mapping[int, Mapping[int, Instruction]]] = {
    0x0: _sub_table(
        0x0,
        (
            Instruction(0x00E0, "CLS", "op_clear_screen"),
            Instruction(0x00EE, "RET", "op_return"),
        ),
    ),
    0x8: _sub_table(
        0x8,
        (
            Instruction(0x0, "LD Vx, Vy", "op_assign"),
            Instruction(0x1, "OR Vx, Vy", "op_or"),
            Instruction(0x2, "AND Vx, Vy", "op_and"),
            Instruction(0x3, "XOR Vx, Vy", "op_xor"),
            Instruction(0x4, "ADD Vx, Vy", "op_add_register"),
            Instruction(0x5, "SUB Vx, Vy", "op_sub_register"),
            Instruction(0x6, "SHR Vx, Vy", "op_shift_right"),
            Instruction(0x7, "SUBN Vx, Vy", "op_sub_reverse"),
            Instruction(0xE, "SHL Vx, Vy", "op_shift_left"),
        ),
    ),
    0xE: _sub_table(
        0xE,
        (
            Instruction(0x9E, "SKP Vx", "op_skip_key_pressed"),
            Instruction(0xA1, "SKNP Vx", "op_skip_key_not_pressed"),
        ),
    ),
    0xF: _sub_table(
        0xF,
        (
            Instruction(0x07, "LD Vx, DT", "op_read_delay"),
            Instruction(0x0A, "LD Vx, K", "op_wait_key"),
            Instruction(0x15, "LD DT, Vx", "op_set_delay"),
            Instruction(0x18, "LD ST, Vx", "op_set_sound"),
            Instruction(0x1E, "ADD I, Vx", "op_add_index"),
            Instruction(0x29, "LD F, Vx", "op_font_glyph"),
            Instruction(0x33, "LD B, Vx", "op_store_bcd"),
            Instruction(0x55, "LD [I], Vx", "op_store_registers"),
            Instruction(0x65, "LD Vx, [I]", "op_load_registers"),
        ),
    ),
}


def sub_key(family: Family, opcode: int) -> int:
    if family.sub_key is SubKey.LOW_NIBBLE:
        return opcode & 0x000F
    if family.sub_key is SubKey.LOW_BYTE:
        return opcode & 0x00FF
    return opcode & 0xFFFF


def decode(opcode: int) -> Instruction | None:
    """Return the instruction metadata for ``opcode``, or ``None`` if unrecognized."""

    family = FAMILY_TABLE[(opcode >> 12) & 0xF]
    if family.sub_key is SubKey.NONE:
        return Instruction(family.nibble, family.pattern, family.handler or "")
    return SUB_TABLES[family.nibble].get(sub_key(family, opcode))


__all__ = [
    "FAMILY_TABLE",
    "Family",
    "Instruction",
    "SUB_TABLES",
    "SubKey",
    "SubTable",
    "build_family_table",
    "decode",
    "sub_key",
]
