"""CPU package for the CHIP-8 interpreter."""

from .core import (
    Chip8CPU,
    CPUError,
    CPUState,
    IllegalOpcodeError,
    StackOverflowError,
    StackUnderflowError,
    Timers,
)
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "CPUError",
    "IllegalOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "Timers",
    "opcodes",
]
