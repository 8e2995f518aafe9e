"""Dual-rate scheduling for the interpreter loop.

Two cadences are tracked independently: the instruction cadence, whose period
can be stretched or shortened at runtime, and the fixed 60 Hz cadence that
drains the delay/sound timers. Each cadence fires at most once per query and
moves its marker forward by exactly one period, so time that overruns a
period is carried into the next measurement rather than dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pychip8.utils import debug_enabled, debug_log

CYCLE_PERIOD_MS = int((1.0 / 60.0) * 100.0)  # ~600 Hz
TIMER_PERIOD_MS = int((1.0 / 60.0) * 1000.0)  # ~60 Hz
RATE_STEP_MS = int((1.0 / 60.0) * 100.0)
MAX_RATE_OFFSET_MS = 100


@dataclass
class Cadence:
    """Carry-forward tick gate for one repeating interval."""

    last_fire: Optional[float] = None

    def ready(self, now_ms: float, period_ms: float) -> bool:
        """Return ``True`` if a full period has elapsed since the last scheduled fire.

        The first query only primes the marker. A fire advances the marker by
        ``period_ms`` rather than to ``now_ms``, so a late query yields several
        consecutive fires until the backlog is consumed.
        """

        if self.last_fire is None:
            self.last_fire = now_ms
            return False
        if now_ms - self.last_fire >= period_ms:
            self.last_fire += period_ms
            return True
        return False


@dataclass
class CycleClock:
    """Instruction and timer cadences plus the adaptive instruction offset."""

    cycle_period_ms: float = CYCLE_PERIOD_MS
    timer_period_ms: float = TIMER_PERIOD_MS
    rate_step_ms: float = RATE_STEP_MS
    max_rate_offset_ms: float = MAX_RATE_OFFSET_MS
    rate_offset_ms: float = 0
    cycle: Cadence = field(default_factory=Cadence)
    timer: Cadence = field(default_factory=Cadence)

    @property
    def effective_cycle_period_ms(self) -> float:
        return self.cycle_period_ms + self.rate_offset_ms

    def apply_rate_hint(self, hint: int) -> None:
        """Slow down on a negative hint, speed up on a positive one."""

        if hint < 0:
            self.rate_offset_ms = min(self.max_rate_offset_ms, self.rate_offset_ms + self.rate_step_ms)
        elif hint > 0:
            self.rate_offset_ms = max(0, self.rate_offset_ms - self.rate_step_ms)
        else:
            return
        if debug_enabled("timer"):
            debug_log(
                "timer",
                "rate_hint=%d offset_ms=%s period_ms=%s",
                hint,
                self.rate_offset_ms,
                self.effective_cycle_period_ms,
            )
