"""pygame application bootstrap for the CHIP-8 interpreter."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pychip8.system import Machine, MachineConfig, run_machine
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import MONOCHROME
from pychip8.video.palette import Palette

from .platform import PygamePlatform


@dataclass
class AppConfig:
    """Configuration for the desktop frontend."""

    rom_path: Optional[Path] = None
    scale: int = 10
    fullscreen: bool = False
    seed: Optional[int] = None
    palette: Palette = MONOCHROME
    strict: bool = False


class Chip8App:
    """Thin wrapper that wires a :class:`PygamePlatform` into the run loop."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config

    def build_platform(self) -> PygamePlatform:
        return PygamePlatform(
            fullscreen=self._config.fullscreen,
            seed=self._config.seed,
            palette=self._config.palette,
        )

    def machine_config(self) -> MachineConfig:
        return MachineConfig(
            strict_illegal=self._config.strict,
            screen_scale=max(1, self._config.scale),
        )

    def run(self) -> Machine:
        if not self._config.rom_path:
            raise RuntimeError("ROM image is required")
        rom_path = self._config.rom_path
        if not rom_path.exists():
            raise RuntimeError(f"ROM file not found: {rom_path}")

        machine = run_machine(self.build_platform(), str(rom_path), self.machine_config())
        if debug_enabled("cpu"):
            debug_log(
                "cpu",
                "terminated iterations=%d instructions=%d",
                machine.iterations,
                machine.cpu.instruction_count,
            )
        return machine
