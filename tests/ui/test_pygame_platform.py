"""pygame backend tests using SDL's dummy video and audio drivers."""

from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

pygame = pytest.importorskip("pygame")

from pychip8.io import NO_KEY  # noqa: E402
from pychip8.ui import PygamePlatform  # noqa: E402


@pytest.fixture
def platform():
    backend = PygamePlatform(seed=1)
    backend.init(64, 32, 128, 64)
    yield backend
    backend.deinit()


def _poll_after(backend: PygamePlatform, event, current_key: int = NO_KEY):
    pygame.event.clear()
    pygame.event.post(event)
    return backend.poll_input(current_key)


def test_ticks_before_init_are_zero() -> None:
    assert PygamePlatform().ticks_ms() == 0


def test_keypad_press_and_release(platform) -> None:
    poll = _poll_after(platform, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w))
    assert poll.key == 0x5
    assert not poll.quit

    poll = _poll_after(platform, pygame.event.Event(pygame.KEYUP, key=pygame.K_w), 0x5)
    assert poll.key == NO_KEY


def test_unmapped_key_keeps_current(platform) -> None:
    poll = _poll_after(platform, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_SPACE), 0x3)
    assert poll.key == 0x3
    assert poll.rate_hint == 0


def test_rate_hotkeys(platform) -> None:
    poll = _poll_after(platform, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_MINUS), 0x2)
    assert poll.rate_hint == -1
    assert poll.key == 0x2

    poll = _poll_after(platform, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_EQUALS))
    assert poll.rate_hint == 1


def test_quit_and_escape(platform) -> None:
    assert _poll_after(platform, pygame.event.Event(pygame.QUIT)).quit
    assert _poll_after(platform, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)).quit


def test_draw_and_sound_calls_are_safe(platform) -> None:
    platform.draw(bytes(64 * 32), 64, 32)
    platform.play_sound()
    platform.update_audio()
    platform.stop_sound()
    assert platform.ticks_ms() >= 0


def test_draw_before_init_is_logged(capsys) -> None:
    PygamePlatform().draw(bytes(64 * 32), 64, 32)
    assert "display not initialised" in capsys.readouterr().err


def test_random_byte_respects_mask() -> None:
    backend = PygamePlatform(seed=5)
    assert all(0 <= backend.random_byte(0x07) <= 0x07 for _ in range(32))


def test_load_program(tmp_path) -> None:
    from pychip8.bus import Chip8Memory

    rom = tmp_path / "ibm.ch8"
    rom.write_bytes(b"\x00\xe0")
    memory = Chip8Memory()

    assert PygamePlatform().load_program(str(rom), memory.program_view(), 3584) == 2
    assert memory.load16(0x200) == 0x00E0
