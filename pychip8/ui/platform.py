"""pygame-backed platform: window, keyboard, beeper and wall-clock ticks."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Sequence

from pychip8.audio import SquareWaveBeeper
from pychip8.io import NO_KEY, keypad_value, rate_hint
from pychip8.loader import copy_rom, read_rom_from_path
from pychip8.system import InputPoll, Platform
from pychip8.utils import debug_enabled, debug_log, log_failure
from pychip8.video import MONOCHROME, Renderer
from pychip8.video.palette import RGBColor

_SAMPLE_RATE = 44_100


class PygamePlatform(Platform):
    """Desktop backend. Setup failures are logged and leave the resource unset."""

    def __init__(
        self,
        *,
        fullscreen: bool = False,
        seed: int | None = None,
        palette: Sequence[RGBColor] = MONOCHROME,
        caption: str = "CHIP-8 Emulator",
    ) -> None:
        self._fullscreen = fullscreen
        self._caption = caption
        self._rng = random.Random(seed)
        self._renderer = Renderer(palette)
        self._pygame = None
        self._screen = None
        self._beeper: SquareWaveBeeper | None = None

    def init(self, pixel_width: int, pixel_height: int, output_width: int, output_height: int) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        pygame.mixer.pre_init(_SAMPLE_RATE, -16, 1, 512)
        pygame.init()
        self._pygame = pygame

        try:
            flags = pygame.FULLSCREEN if self._fullscreen else 0
            self._screen = pygame.display.set_mode((output_width, output_height), flags)
            pygame.display.set_caption(self._caption)
        except pygame.error as exc:
            self._screen = None
            log_failure("video", "Window could not be created: %s", exc)

        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(_SAMPLE_RATE, -16, 1)
            except pygame.error as exc:  # pragma: no cover - best-effort path
                log_failure("audio", "Could not initialise audio: %s", exc)

        mixer_state = pygame.mixer.get_init()
        if mixer_state is not None:
            try:
                self._beeper = SquareWaveBeeper(sample_rate=mixer_state[0])
            except RuntimeError as exc:
                self._beeper = None
                log_failure("audio", "Beeper could not be created: %s", exc)

        if debug_enabled("video"):
            debug_log(
                "video",
                "init pixels=%dx%d output=%dx%d audio=%s",
                pixel_width,
                pixel_height,
                output_width,
                output_height,
                self._beeper is not None,
            )

    def deinit(self) -> None:
        if self._beeper is not None:
            self._beeper.shutdown()
            self._beeper = None
        self._screen = None
        if self._pygame is not None:
            self._pygame.quit()
            self._pygame = None

    def draw(self, framebuffer: bytes, width: int, height: int) -> None:
        pygame = self._pygame
        if pygame is None or self._screen is None:
            log_failure("video", "draw skipped: display not initialised")
            return
        frame = self._renderer.render(framebuffer, width, height)
        surface = pygame.transform.scale(frame.to_surface(), self._screen.get_size())
        self._screen.blit(surface, (0, 0))
        pygame.display.flip()

    def poll_input(self, current_key: int) -> InputPoll:
        pygame = self._pygame
        if pygame is None:
            return InputPoll(key=current_key)

        event = pygame.event.poll()
        if event.type == pygame.QUIT:
            return InputPoll(key=current_key, quit=True)
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return InputPoll(key=current_key, quit=True)
            name = pygame.key.name(event.key)
            key = keypad_value(name)
            hint = rate_hint(name)
            if debug_enabled("input"):
                debug_log("input", "event=%s key=%s hint=%d", name, key, hint)
            return InputPoll(key=current_key if key is None else key, rate_hint=hint)
        if event.type == pygame.KEYUP:
            if keypad_value(pygame.key.name(event.key)) is not None:
                return InputPoll(key=NO_KEY)
        return InputPoll(key=current_key)

    def ticks_ms(self) -> float:
        if self._pygame is None:
            return 0
        return self._pygame.time.get_ticks()

    def play_sound(self) -> None:
        if self._beeper is not None:
            self._beeper.start()

    def stop_sound(self) -> None:
        if self._beeper is not None:
            self._beeper.stop()

    def update_audio(self) -> None:
        if self._beeper is not None:
            self._beeper.refresh()

    def random_byte(self, mask: int) -> int:
        return self._rng.randint(0, mask & 0xFF)

    def load_program(self, identifier: str, destination: memoryview, max_bytes: int) -> int:
        image = read_rom_from_path(Path(identifier), max_bytes)
        return copy_rom(image, destination, max_bytes)
