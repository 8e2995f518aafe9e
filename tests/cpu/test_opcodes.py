"""Tests for the two-level opcode tables."""

import pytest

from pychip8.cpu import Chip8CPU
from pychip8.cpu.opcodes import (
    FAMILY_TABLE,
    SUB_TABLES,
    Family,
    Instruction,
    SubKey,
    SubTable,
    build_family_table,
    decode,
)


def test_family_table_covers_every_nibble() -> None:
    assert len(FAMILY_TABLE) == 16
    assert [family.nibble for family in FAMILY_TABLE] == list(range(16))


def test_every_handler_exists_on_cpu() -> None:
    names = {family.handler for family in FAMILY_TABLE if family.handler}
    for table in SUB_TABLES.values():
        names.update(instruction.handler for instruction in table.values())

    for name in names:
        assert callable(getattr(Chip8CPU, name, None)), name


@pytest.mark.parametrize(
    ("opcode", "mnemonic"),
    [
        (0x00E0, "CLS"),
        (0x00EE, "RET"),
        (0x8AB4, "ADD Vx, Vy"),
        (0x812E, "SHL Vx, Vy"),
        (0xE19E, "SKP Vx"),
        (0xF233, "LD B, Vx"),
    ],
)
def test_decode_sub_table_entries(opcode: int, mnemonic: str) -> None:
    instruction = decode(opcode)
    assert instruction is not None
    assert instruction.mnemonic == mnemonic


def test_decode_single_handler_family() -> None:
    instruction = decode(0xD125)
    assert instruction is not None
    assert instruction.handler == "op_draw"
    assert instruction.mnemonic == "DXYN"


@pytest.mark.parametrize("opcode", (0x0000, 0x00E1, 0x8008, 0xE000, 0xF0FF))
def test_decode_unknown_returns_none(opcode: int) -> None:
    assert decode(opcode) is None


def test_unknown_advance_policy() -> None:
    assert FAMILY_TABLE[0x0].advance_on_unknown
    assert FAMILY_TABLE[0x8].advance_on_unknown
    assert not FAMILY_TABLE[0xE].advance_on_unknown
    assert not FAMILY_TABLE[0xF].advance_on_unknown


def test_sub_table_rejects_duplicates() -> None:
    table = SubTable(0x8)
    table.register(Instruction(0x1, "OR Vx, Vy", "op_or"))
    with pytest.raises(ValueError):
        table.register(Instruction(0x1, "XOR Vx, Vy", "op_xor"))


def test_family_table_requires_all_families() -> None:
    with pytest.raises(ValueError, match="missing"):
        build_family_table([Family(0x1, "1NNN", "op_jump")])


def test_family_needs_handler_or_sub_table() -> None:
    with pytest.raises(ValueError):
        Family(0x3, "3XNN")
    assert Family(0x8, "8XYN", sub_key=SubKey.LOW_NIBBLE).handler is None
