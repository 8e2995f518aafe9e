"""Tests for raw ROM image loading."""

from __future__ import annotations

import io

import pytest

from pychip8.bus import Chip8Memory
from pychip8.loader import MAX_ROM_SIZE, RomLoadError, copy_rom, read_rom, read_rom_from_path


def test_max_rom_size_matches_program_region() -> None:
    assert MAX_ROM_SIZE == 0x1000 - 0x200


def test_read_rom_returns_bytes_verbatim() -> None:
    assert read_rom(io.BytesIO(b"\x00\xe0\x12\x00")) == b"\x00\xe0\x12\x00"


def test_oversized_rom_is_truncated(capsys) -> None:
    image = read_rom(io.BytesIO(bytes(MAX_ROM_SIZE + 10)))

    assert len(image) == MAX_ROM_SIZE
    assert "truncated" in capsys.readouterr().err


def test_oversized_rom_rejected_when_strict() -> None:
    with pytest.raises(RomLoadError):
        read_rom(io.BytesIO(bytes(MAX_ROM_SIZE + 1)), strict=True)


def test_exact_fit_is_accepted() -> None:
    assert len(read_rom(io.BytesIO(bytes(MAX_ROM_SIZE)), strict=True)) == MAX_ROM_SIZE


def test_read_from_path(tmp_path) -> None:
    path = tmp_path / "maze.ch8"
    path.write_bytes(b"\xa2\x1e")
    assert read_rom_from_path(path) == b"\xa2\x1e"


def test_missing_file_logs_and_returns_empty(tmp_path, capsys) -> None:
    assert read_rom_from_path(tmp_path / "nope.ch8") == b""
    assert "Failed to open game" in capsys.readouterr().err


def test_missing_file_raises_when_strict(tmp_path) -> None:
    with pytest.raises(RomLoadError):
        read_rom_from_path(tmp_path / "nope.ch8", strict=True)


def test_copy_rom_into_program_view() -> None:
    memory = Chip8Memory()

    copied = copy_rom(b"\x12\x34\x56", memory.program_view(), MAX_ROM_SIZE)

    assert copied == 3
    assert memory.read_block(0x200, 3) == b"\x12\x34\x56"
    assert memory.load8(0x203) == 0


def test_copy_rom_respects_limit() -> None:
    memory = Chip8Memory()
    assert copy_rom(b"\x01\x02\x03\x04", memory.program_view(), 2) == 2
    assert memory.load8(0x202) == 0
