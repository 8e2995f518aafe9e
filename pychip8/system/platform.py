"""Boundary between the interpreter core and a concrete host.

A platform supplies display, input, audio, a millisecond tick source, random
bytes and program storage. The core only talks to these capabilities through
:class:`Platform`, so headless, pygame or any other backend can be injected
into :func:`pychip8.system.run_machine`.
"""

from __future__ import annotations

from dataclasses import dataclass

from pychip8.io import NO_KEY

from .clock import Cadence


@dataclass(frozen=True)
class InputPoll:
    """Result of one non-blocking input poll."""

    key: int = NO_KEY
    rate_hint: int = 0
    quit: bool = False


class Platform:
    """Interface implemented by every host backend."""

    def init(self, pixel_width: int, pixel_height: int, output_width: int, output_height: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def deinit(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def draw(self, framebuffer: bytes, width: int, height: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def poll_input(self, current_key: int) -> InputPoll:  # pragma: no cover - interface
        """Return the key state after at most one host event.

        ``current_key`` is returned unchanged when nothing relevant happened.
        """

        raise NotImplementedError

    def ticks_ms(self) -> float:  # pragma: no cover - interface
        raise NotImplementedError

    def play_sound(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def stop_sound(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def random_byte(self, mask: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def load_program(self, identifier: str, destination: memoryview, max_bytes: int) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def update_audio(self) -> None:
        """Refresh any cached audio device status; optional."""

    def can_advance(self, cadence: Cadence, period_ms: float) -> bool:
        return cadence.ready(self.ticks_ms(), period_ms)
