"""Square-wave beeper gated by the CHIP-8 sound timer."""

from __future__ import annotations

from array import array
from typing import Optional


class SquareWaveBeeper:
    """Loop a fixed square tone on a pygame mixer channel while the gate is open."""

    def __init__(
        self,
        *,
        sample_rate: int = 44_100,
        frequency: float = 800.0,
        volume: float = 0.25,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating SquareWaveBeeper")

        self._pygame = pygame
        self._sample_rate = max(1, sample_rate)
        self._frequency = max(1.0, frequency)
        self._volume = max(0.0, min(1.0, volume))
        self._channel: Optional[pygame.mixer.Channel] = None
        self._sound: Optional[pygame.mixer.Sound] = self._build_sound()
        self._playing = False

    # ------------------------------------------------------------------
    # Public API

    @property
    def playing(self) -> bool:
        return self._playing

    def start(self) -> None:
        """Open the gate; does nothing if the tone is already playing."""

        if self._playing or self._sound is None:
            return
        channel = self._channel
        if channel is None:
            channel = self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel
        channel.play(self._sound, loops=-1)
        channel.set_volume(self._volume)
        self._playing = True

    def stop(self) -> None:
        """Close the gate; does nothing if the tone is already silent."""

        if not self._playing:
            return
        if self._channel is not None:
            self._channel.stop()
        self._playing = False

    def refresh(self) -> None:
        """Resynchronise the gate with the channel if playback ended on its own."""

        if self._playing and self._channel is not None and not self._channel.get_busy():
            self._playing = False

    def shutdown(self) -> None:
        """Stop any active tone and release resources."""

        self.stop()
        self._channel = None

    # ------------------------------------------------------------------
    # Internals

    def _build_sound(self) -> Optional["pygame.mixer.Sound"]:
        period_samples = max(2, int(round(self._sample_rate / self._frequency)))
        half = period_samples // 2
        amplitude = 12_000

        buffer = array("h")
        for index in range(period_samples):
            buffer.append(amplitude if index < half else -amplitude)

        try:
            sound = self._pygame.mixer.Sound(buffer=buffer.tobytes())
        except Exception:  # pragma: no cover - pygame error path
            return None
        return sound


__all__ = ["SquareWaveBeeper"]
