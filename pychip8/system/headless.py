"""Deterministic platform with a manual clock and scripted input."""

from __future__ import annotations

import io
import random
from collections import deque
from pathlib import Path
from typing import Deque, Dict, Iterable, List, Optional

from pychip8.loader import copy_rom, read_rom, read_rom_from_path

from .platform import InputPoll, Platform


class HeadlessPlatform(Platform):
    """Host-free backend used by tests and scripted runs.

    Time only moves when :meth:`advance` is called or when ``auto_advance_ms``
    is set, in which case every input poll moves the clock forward by that
    amount. Scripted polls are consumed one per loop iteration; once the
    script runs out the platform reports no change, or a quit request if
    ``quit_when_idle`` is set.
    """

    def __init__(
        self,
        *,
        roms: Optional[Dict[str, bytes]] = None,
        seed: int | None = 0,
        auto_advance_ms: float = 0.0,
        quit_when_idle: bool = True,
    ) -> None:
        self._roms = dict(roms or {})
        self._rng = random.Random(seed)
        self._now_ms = 0.0
        self._auto_advance_ms = auto_advance_ms
        self._quit_when_idle = quit_when_idle
        self._script: Deque[InputPoll | None] = deque()
        self.initialised = False
        self.output_size: tuple[int, int] | None = None
        self.frames: List[bytes] = []
        self.sound_playing = False
        self.sound_transitions: List[bool] = []
        self.audio_updates = 0

    # ------------------------------------------------------------------
    # Scripting

    def advance(self, milliseconds: float) -> None:
        self._now_ms += milliseconds

    def queue_input(self, polls: Iterable[InputPoll | None]) -> None:
        """Queue polls; ``None`` entries mean "nothing happened this iteration"."""

        self._script.extend(polls)

    # ------------------------------------------------------------------
    # Platform interface

    def init(self, pixel_width: int, pixel_height: int, output_width: int, output_height: int) -> None:
        self.initialised = True
        self.output_size = (output_width, output_height)

    def deinit(self) -> None:
        self.initialised = False
        self.stop_sound()

    def draw(self, framebuffer: bytes, width: int, height: int) -> None:
        self.frames.append(bytes(framebuffer[: width * height]))

    def poll_input(self, current_key: int) -> InputPoll:
        self._now_ms += self._auto_advance_ms
        if self._script:
            poll = self._script.popleft()
            return poll if poll is not None else InputPoll(key=current_key)
        return InputPoll(key=current_key, quit=self._quit_when_idle)

    def ticks_ms(self) -> float:
        return self._now_ms

    def play_sound(self) -> None:
        if not self.sound_playing:
            self.sound_playing = True
            self.sound_transitions.append(True)

    def stop_sound(self) -> None:
        if self.sound_playing:
            self.sound_playing = False
            self.sound_transitions.append(False)

    def update_audio(self) -> None:
        self.audio_updates += 1

    def random_byte(self, mask: int) -> int:
        return self._rng.randint(0, mask & 0xFF)

    def load_program(self, identifier: str, destination: memoryview, max_bytes: int) -> int:
        stored = self._roms.get(identifier)
        if stored is None:
            image = read_rom_from_path(Path(identifier), max_bytes)
        else:
            image = read_rom(io.BytesIO(stored), max_bytes)
        return copy_rom(image, destination, max_bytes)
