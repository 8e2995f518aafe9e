"""CHIP-8 system assembly, scheduling and platform boundary."""

from __future__ import annotations

from .clock import Cadence, CycleClock
from .headless import HeadlessPlatform
from .machine import Machine, MachineConfig, MachineStatus, create_machine, run_machine
from .platform import InputPoll, Platform

__all__ = [
    "Cadence",
    "CycleClock",
    "HeadlessPlatform",
    "InputPoll",
    "Machine",
    "MachineConfig",
    "MachineStatus",
    "Platform",
    "create_machine",
    "run_machine",
]
