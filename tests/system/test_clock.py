"""Tests for the carry-forward cadences and the adaptive instruction rate."""

from __future__ import annotations

from pychip8.system import Cadence, CycleClock
from pychip8.system.clock import CYCLE_PERIOD_MS, MAX_RATE_OFFSET_MS, TIMER_PERIOD_MS


def test_default_periods() -> None:
    assert CYCLE_PERIOD_MS == 1
    assert TIMER_PERIOD_MS == 16
    assert MAX_RATE_OFFSET_MS == 100


def test_first_query_only_primes() -> None:
    cadence = Cadence()
    assert not cadence.ready(500, 10)
    assert cadence.last_fire == 500
    assert not cadence.ready(509, 10)
    assert cadence.ready(510, 10)


def test_overrun_is_carried_forward() -> None:
    cadence = Cadence()
    cadence.ready(0, 10)

    # 2.5 periods elapsed: two consecutive fires, then wait for the remainder.
    assert cadence.ready(25, 10)
    assert cadence.ready(25, 10)
    assert not cadence.ready(25, 10)
    assert cadence.last_fire == 20
    assert cadence.ready(30, 10)


def test_rate_hints_adjust_offset() -> None:
    clock = CycleClock()

    clock.apply_rate_hint(-1)
    clock.apply_rate_hint(-1)
    assert clock.rate_offset_ms == 2
    assert clock.effective_cycle_period_ms == CYCLE_PERIOD_MS + 2

    clock.apply_rate_hint(1)
    assert clock.rate_offset_ms == 1

    clock.apply_rate_hint(0)
    assert clock.rate_offset_ms == 1


def test_rate_offset_is_clamped() -> None:
    clock = CycleClock()
    for _ in range(5):
        clock.apply_rate_hint(1)
    assert clock.rate_offset_ms == 0

    for _ in range(150):
        clock.apply_rate_hint(-1)
    assert clock.rate_offset_ms == MAX_RATE_OFFSET_MS


def test_cadences_are_independent() -> None:
    clock = CycleClock()
    clock.cycle.ready(0, clock.effective_cycle_period_ms)
    clock.timer.ready(0, clock.timer_period_ms)

    assert clock.cycle.ready(1, clock.effective_cycle_period_ms)
    assert not clock.timer.ready(1, clock.timer_period_ms)
    assert clock.timer.ready(16, clock.timer_period_ms)
