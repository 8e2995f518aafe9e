"""CHIP-8 machine assembly and the cooperative run loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from pychip8.bus import Chip8Memory
from pychip8.cpu import Chip8CPU, Timers
from pychip8.io import KeyState
from pychip8.loader import MAX_ROM_SIZE
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import DISPLAY_HEIGHT, DISPLAY_WIDTH, Framebuffer

from .clock import CYCLE_PERIOD_MS, MAX_RATE_OFFSET_MS, RATE_STEP_MS, TIMER_PERIOD_MS, CycleClock
from .platform import Platform

SCREEN_SCALE = 10


class MachineStatus(Enum):
    RUNNING = auto()
    TERMINATED = auto()


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    strict_illegal: bool = False
    cycle_period_ms: float = CYCLE_PERIOD_MS
    timer_period_ms: float = TIMER_PERIOD_MS
    rate_step_ms: float = RATE_STEP_MS
    max_rate_offset_ms: float = MAX_RATE_OFFSET_MS
    screen_scale: int = SCREEN_SCALE


@dataclass
class Machine:
    """Owns every piece of VM state and drives it through ``platform``."""

    platform: Platform
    memory: Chip8Memory
    cpu: Chip8CPU
    framebuffer: Framebuffer
    keys: KeyState
    timers: Timers
    clock: CycleClock
    config: MachineConfig = field(default_factory=MachineConfig)
    status: MachineStatus = MachineStatus.RUNNING
    iterations: int = 0

    def load_rom(self, identifier: str) -> int:
        """Ask the platform to copy a program image into the program region."""

        loaded = self.platform.load_program(identifier, self.memory.program_view(), MAX_ROM_SIZE)
        if debug_enabled("loader"):
            debug_log("loader", "identifier=%s loaded=%d", identifier, loaded)
        return loaded

    def emulate_cycle(self) -> bool:
        """Execute one instruction if the instruction cadence allows it."""

        if not self.platform.can_advance(self.clock.cycle, self.clock.effective_cycle_period_ms):
            return False
        self.cpu.step()
        return True

    def update_timers(self) -> bool:
        """Gate audio from the sound timer, then drain the timers at 60 Hz."""

        if self.timers.sound_active:
            self.platform.play_sound()
        else:
            self.platform.stop_sound()

        if not self.platform.can_advance(self.clock.timer, self.clock.timer_period_ms):
            return False
        self.timers.tick()
        return True

    def present(self) -> bool:
        if not self.framebuffer.drawn:
            return False
        self.platform.draw(self.framebuffer.snapshot(), self.framebuffer.width, self.framebuffer.height)
        self.framebuffer.acknowledge()
        return True

    def poll_input(self) -> bool:
        """Feed one input poll into the key state and cadence; return the quit request."""

        poll = self.platform.poll_input(self.keys.current)
        self.keys.update(poll.key)
        self.clock.apply_rate_hint(poll.rate_hint)
        return poll.quit

    def step(self) -> bool:
        """Run one loop iteration; return ``False`` once the machine has terminated."""

        if self.status is MachineStatus.TERMINATED:
            return False
        self.emulate_cycle()
        self.update_timers()
        self.platform.update_audio()
        self.present()
        if self.poll_input():
            self.status = MachineStatus.TERMINATED
            if debug_enabled("input"):
                debug_log("input", "quit requested after %d iterations", self.iterations)
        self.iterations += 1
        return self.status is MachineStatus.RUNNING

    def run(self) -> None:
        while self.step():
            pass


def create_machine(platform: Platform, config: MachineConfig | None = None) -> Machine:
    """Instantiate a CHIP-8 machine wired to ``platform``."""

    config = config or MachineConfig()
    memory = Chip8Memory()
    framebuffer = Framebuffer()
    keys = KeyState()
    timers = Timers()
    clock = CycleClock(
        cycle_period_ms=config.cycle_period_ms,
        timer_period_ms=config.timer_period_ms,
        rate_step_ms=config.rate_step_ms,
        max_rate_offset_ms=config.max_rate_offset_ms,
    )
    cpu = Chip8CPU(
        memory,
        framebuffer,
        keys,
        timers=timers,
        random_source=platform.random_byte,
        strict_illegal=config.strict_illegal,
    )
    return Machine(
        platform=platform,
        memory=memory,
        cpu=cpu,
        framebuffer=framebuffer,
        keys=keys,
        timers=timers,
        clock=clock,
        config=config,
    )


def run_machine(platform: Platform, identifier: str, config: MachineConfig | None = None) -> Machine:
    """Initialise ``platform``, load ``identifier`` and run until a quit is polled."""

    machine = create_machine(platform, config)
    scale = machine.config.screen_scale
    platform.init(DISPLAY_WIDTH, DISPLAY_HEIGHT, DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale)
    try:
        machine.load_rom(identifier)
        machine.run()
    finally:
        platform.deinit()
    return machine
