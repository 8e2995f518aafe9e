"""pygame frontend for the CHIP-8 interpreter."""

from .app import AppConfig, Chip8App
from .platform import PygamePlatform

__all__ = ["AppConfig", "Chip8App", "PygamePlatform"]
