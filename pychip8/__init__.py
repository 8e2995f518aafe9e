"""CHIP-8 interpreter.

The core (memory, CPU, framebuffer, scheduler) lives in ``bus``, ``cpu``,
``video`` and ``system``; ``ui`` hosts the pygame platform used by ``run.py``.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
