"""Tests for the scripted headless platform."""

from __future__ import annotations

from pychip8.bus import Chip8Memory
from pychip8.io import NO_KEY
from pychip8.system import Cadence, HeadlessPlatform, InputPoll


def test_manual_clock_and_cadence() -> None:
    platform = HeadlessPlatform()
    cadence = Cadence()

    assert not platform.can_advance(cadence, 5)
    platform.advance(4)
    assert not platform.can_advance(cadence, 5)
    platform.advance(1)
    assert platform.can_advance(cadence, 5)
    assert platform.ticks_ms() == 5


def test_poll_script_then_idle_quit() -> None:
    platform = HeadlessPlatform(auto_advance_ms=2)
    platform.queue_input([InputPoll(key=0x4), None])

    assert platform.poll_input(NO_KEY) == InputPoll(key=0x4)
    assert platform.poll_input(0x4) == InputPoll(key=0x4)
    assert platform.poll_input(0x4).quit
    assert platform.ticks_ms() == 6


def test_idle_without_quit() -> None:
    platform = HeadlessPlatform(quit_when_idle=False)
    assert platform.poll_input(NO_KEY) == InputPoll()


def test_sound_transitions_are_recorded_once() -> None:
    platform = HeadlessPlatform()
    platform.play_sound()
    platform.play_sound()
    platform.stop_sound()
    platform.stop_sound()
    assert platform.sound_transitions == [True, False]


def test_seeded_random_is_reproducible() -> None:
    first = HeadlessPlatform(seed=7)
    second = HeadlessPlatform(seed=7)

    values = [first.random_byte(0xFF) for _ in range(8)]
    assert values == [second.random_byte(0xFF) for _ in range(8)]
    assert all(first.random_byte(0x03) <= 0x03 for _ in range(32))


def test_load_program_from_path(tmp_path) -> None:
    rom = tmp_path / "pong.ch8"
    rom.write_bytes(b"\x6a\x02\x6b\x0c")
    memory = Chip8Memory()

    loaded = HeadlessPlatform().load_program(str(rom), memory.program_view(), 3584)

    assert loaded == 4
    assert memory.load16(0x200) == 0x6A02


def test_draw_copies_frame() -> None:
    platform = HeadlessPlatform()
    frame = bytearray(64 * 32)
    platform.draw(frame, 64, 32)
    frame[0] = 0xFF
    assert platform.frames[0][0] == 0


def test_in_memory_rom_uses_loader_truncation(capsys) -> None:
    platform = HeadlessPlatform(roms={"big": bytes([0x12]) * 3600})
    memory = Chip8Memory()

    loaded = platform.load_program("big", memory.program_view(), 3584)

    assert loaded == 3584
    assert memory.load8(0xFFF) == 0x12
    assert "truncated" in capsys.readouterr().err
