"""CHIP-8 interpreter core: register file, timers and instruction handlers."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, List

from pychip8.bus import FONT_REGION, PROGRAM_REGION, Chip8Memory
from pychip8.bus.memory import FONT_GLYPH_HEIGHT
from pychip8.io import KeyState
from pychip8.utils import debug_enabled, debug_log, log_failure
from pychip8.video import Framebuffer

from .opcodes import FAMILY_TABLE, Family, decode

STACK_DEPTH = 16
REGISTER_COUNT = 16
FLAG = 0xF

RandomSource = Callable[[int], int]


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised in strict mode when an instruction word is not recognized."""


class StackOverflowError(CPUError):
    """Raised in strict mode when a call would exceed the stack depth."""


class StackUnderflowError(CPUError):
    """Raised in strict mode when a return finds an empty stack."""


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    i: int = 0x000
    pc: int = PROGRAM_REGION.start
    sp: int = 0
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)


@dataclass
class Timers:
    """Delay and sound countdowns, drained only by the 60 Hz cadence."""

    delay: int = 0
    sound: int = 0

    def tick(self) -> None:
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1

    @property
    def sound_active(self) -> bool:
        return self.sound > 0


def _default_random_source() -> RandomSource:
    rng = random.Random()
    return lambda mask: rng.randint(0, mask & 0xFF)


@dataclass
class Chip8CPU:
    """Fetch-decode-execute engine operating on one machine's state.

    Handlers return ``True`` when the program counter should advance past the
    instruction, and ``False`` when they repositioned it themselves (jumps,
    calls, or a key wait that must be retried).
    """

    memory: Chip8Memory
    framebuffer: Framebuffer
    keys: KeyState
    timers: Timers = field(default_factory=Timers)
    random_source: RandomSource = field(default_factory=_default_random_source)
    strict_illegal: bool = False

    state: CPUState = field(default_factory=CPUState)
    instruction_count: int = 0

    def step(self) -> int:
        """Fetch, decode and execute one instruction; return the opcode."""

        state = self.state
        pc_before = state.pc
        opcode = self.memory.load16(pc_before)
        instruction = decode(opcode)

        if instruction is None:
            advance = self._unrecognized(opcode, FAMILY_TABLE[(opcode >> 12) & 0xF])
        else:
            handler_name = instruction.handler
            if debug_enabled("cpu"):
                debug_log("cpu", "pc=%03x opcode=%04x %s", pc_before, opcode, instruction.mnemonic)
            handler = getattr(self, handler_name, None)
            if handler is None:
                raise CPUError(f"handler '{handler_name}' not implemented")
            advance = handler(opcode)

        if advance:
            state.pc = (state.pc + 2) & 0xFFFF
        self.instruction_count += 1
        return opcode

    # ------------------------------------------------------------------
    # Family 0

    def op_clear_screen(self, _: int) -> bool:
        self.framebuffer.clear()
        return True

    def op_return(self, opcode: int) -> bool:
        state = self.state
        if state.sp == 0:
            self._fault(StackUnderflowError(f"return at {state.pc:#05x} with empty stack"), "stack")
            return True
        state.sp -= 1
        # Resume at the call site; the auto-advance then steps past the call.
        state.pc = state.stack[state.sp]
        return True

    # ------------------------------------------------------------------
    # Flow control

    def op_jump(self, opcode: int) -> bool:
        self.state.pc = opcode & 0x0FFF
        return False

    def op_call(self, opcode: int) -> bool:
        state = self.state
        if state.sp >= STACK_DEPTH:
            self._fault(StackOverflowError(f"call at {state.pc:#05x} exceeds stack depth {STACK_DEPTH}"), "stack")
        else:
            state.stack[state.sp] = state.pc
            state.sp += 1
        state.pc = opcode & 0x0FFF
        return False

    def op_jump_offset(self, opcode: int) -> bool:
        self.state.pc = (self.state.v[0] + (opcode & 0x0FFF)) & 0xFFFF
        return False

    def op_skip_eq_immediate(self, opcode: int) -> bool:
        if self._vx(opcode) == opcode & 0x00FF:
            self._skip()
        return True

    def op_skip_ne_immediate(self, opcode: int) -> bool:
        if self._vx(opcode) != opcode & 0x00FF:
            self._skip()
        return True

    def op_skip_eq_register(self, opcode: int) -> bool:
        if self._vx(opcode) == self._vy(opcode):
            self._skip()
        return True

    def op_skip_ne_register(self, opcode: int) -> bool:
        if self._vx(opcode) != self._vy(opcode):
            self._skip()
        return True

    # ------------------------------------------------------------------
    # Register loads

    def op_load_immediate(self, opcode: int) -> bool:
        self.state.v[_x(opcode)] = opcode & 0x00FF
        return True

    def op_add_immediate(self, opcode: int) -> bool:
        x = _x(opcode)
        self.state.v[x] = (self.state.v[x] + (opcode & 0x00FF)) & 0xFF
        return True

    def op_load_index(self, opcode: int) -> bool:
        self.state.i = opcode & 0x0FFF
        return True

    def op_random(self, opcode: int) -> bool:
        self.state.v[_x(opcode)] = self.random_source(opcode & 0x00FF) & 0xFF
        return True

    # ------------------------------------------------------------------
    # Family 8: register ALU

    def op_assign(self, opcode: int) -> bool:
        self.state.v[_x(opcode)] = self._vy(opcode)
        return True

    def op_or(self, opcode: int) -> bool:
        self.state.v[_x(opcode)] = self._vx(opcode) | self._vy(opcode)
        return True

    def op_and(self, opcode: int) -> bool:
        self.state.v[_x(opcode)] = self._vx(opcode) & self._vy(opcode)
        return True

    def op_xor(self, opcode: int) -> bool:
        self.state.v[_x(opcode)] = self._vx(opcode) ^ self._vy(opcode)
        return True

    def op_add_register(self, opcode: int) -> bool:
        total = self._vx(opcode) + self._vy(opcode)
        self.state.v[FLAG] = 1 if total // 0xFF else 0
        self.state.v[_x(opcode)] = total & 0xFF
        return True

    def op_sub_register(self, opcode: int) -> bool:
        self.state.v[_x(opcode)] = self._subtract(self._vx(opcode), self._vy(opcode))
        return True

    def op_sub_reverse(self, opcode: int) -> bool:
        self.state.v[_x(opcode)] = self._subtract(self._vy(opcode), self._vx(opcode))
        return True

    def op_shift_right(self, opcode: int) -> bool:
        v = self.state.v
        low_bit = self._vy(opcode) & 0x01
        v[_x(opcode)] = self._vy(opcode) >> 1
        # VY is masked after VX is written, so 8XX6 masks the shifted value.
        v[_y(opcode)] = self._vy(opcode) & 0x01
        v[FLAG] = low_bit
        return True

    def op_shift_left(self, opcode: int) -> bool:
        v = self.state.v
        high_bit = self._vy(opcode) & 0x80
        v[_x(opcode)] = (self._vy(opcode) << 1) & 0xFF
        v[_y(opcode)] = self._vy(opcode) & 0x80
        v[FLAG] = 1 if high_bit else 0
        return True

    # ------------------------------------------------------------------
    # Display

    def op_draw(self, opcode: int) -> bool:
        height = opcode & 0x000F
        rows = self.memory.read_block(self.state.i, height)
        collision = self.framebuffer.draw_sprite(self._vx(opcode), self._vy(opcode), rows)
        self.state.v[FLAG] = 1 if collision else 0
        if debug_enabled("video"):
            debug_log("video", "draw x=%d y=%d n=%d collision=%s", self._vx(opcode), self._vy(opcode), height, collision)
        return True

    # ------------------------------------------------------------------
    # Family E: keypad

    def op_skip_key_pressed(self, opcode: int) -> bool:
        if self.keys.is_pressed(self._vx(opcode)):
            self._skip()
        return True

    def op_skip_key_not_pressed(self, opcode: int) -> bool:
        if not self.keys.is_pressed(self._vx(opcode)):
            self._skip()
        return True

    # ------------------------------------------------------------------
    # Family F: timers, index and memory transfers

    def op_read_delay(self, opcode: int) -> bool:
        self.state.v[_x(opcode)] = self.timers.delay & 0xFF
        return True

    def op_wait_key(self, opcode: int) -> bool:
        if not self.keys.any_pressed:
            return False
        self.state.v[_x(opcode)] = self.keys.current
        return True

    def op_set_delay(self, opcode: int) -> bool:
        self.timers.delay = self._vx(opcode)
        return True

    def op_set_sound(self, opcode: int) -> bool:
        self.timers.sound = self._vx(opcode)
        return True

    def op_add_index(self, opcode: int) -> bool:
        self.state.i = (self.state.i + self._vx(opcode)) & 0xFFFF
        return True

    def op_font_glyph(self, opcode: int) -> bool:
        self.state.i = FONT_REGION.start + self._vx(opcode) * FONT_GLYPH_HEIGHT
        return True

    def op_store_bcd(self, opcode: int) -> bool:
        value = self._vx(opcode)
        address = self.state.i
        self.memory.store8(address, value // 100)
        self.memory.store8(address + 1, (value // 10) % 10)
        self.memory.store8(address + 2, value % 10)
        return True

    def op_store_registers(self, opcode: int) -> bool:
        address = self.state.i
        for index in range(_x(opcode) + 1):
            self.memory.store8(address + index, self.state.v[index])
        return True

    def op_load_registers(self, opcode: int) -> bool:
        address = self.state.i
        for index in range(_x(opcode) + 1):
            self.state.v[index] = self.memory.load8(address + index)
        return True

    # ------------------------------------------------------------------
    # Helpers

    def _vx(self, opcode: int) -> int:
        return self.state.v[_x(opcode)]

    def _vy(self, opcode: int) -> int:
        return self.state.v[_y(opcode)]

    def _skip(self) -> None:
        self.state.pc = (self.state.pc + 2) & 0xFFFF

    def _subtract(self, minuend: int, subtrahend: int) -> int:
        difference = (minuend - subtrahend) & 0xFFFF
        # VF is 0 on borrow, 1 otherwise, derived from the 16-bit difference.
        self.state.v[FLAG] = 0 if difference // 0xFF else 1
        return difference & 0xFF

    def _unrecognized(self, opcode: int, family: Family) -> bool:
        if family.nibble == 0x0:
            message = f"machine subroutine {opcode:#06x} not supported at pc={self.state.pc:#05x}"
        else:
            message = f"invalid opcode {opcode:#06x} ({family.pattern}) at pc={self.state.pc:#05x}"
        self._fault(IllegalOpcodeError(message), "cpu")
        return family.advance_on_unknown

    def _fault(self, error: CPUError, category: str) -> None:
        if self.strict_illegal:
            raise error
        log_failure(category, "%s", error)


def _x(opcode: int) -> int:
    return (opcode >> 8) & 0xF


def _y(opcode: int) -> int:
    return (opcode >> 4) & 0xF
