"""Raw CHIP-8 ROM image loading."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pychip8.bus import PROGRAM_REGION
from pychip8.utils import debug_enabled, debug_log, log_failure

MAX_ROM_SIZE = PROGRAM_REGION.length()


class RomLoadError(RuntimeError):
    """Raised by strict loads when a ROM cannot be read or does not fit."""


def read_rom(stream: BinaryIO, max_bytes: int = MAX_ROM_SIZE, *, strict: bool = False) -> bytes:
    """Read at most ``max_bytes`` from ``stream``.

    Oversized images are truncated and reported, or rejected when ``strict``.
    """

    image = stream.read(max_bytes + 1)
    if len(image) > max_bytes:
        if strict:
            raise RomLoadError(f"ROM exceeds {max_bytes} bytes")
        log_failure("loader", "ROM larger than %d bytes; truncated", max_bytes)
        image = image[:max_bytes]
    return image


def read_rom_from_path(path: Path, max_bytes: int = MAX_ROM_SIZE, *, strict: bool = False) -> bytes:
    """Read a ROM from disk, returning ``b""`` (after logging) if it cannot be opened."""

    try:
        with Path(path).open("rb") as handle:
            image = read_rom(handle, max_bytes, strict=strict)
    except OSError as exc:
        if strict:
            raise RomLoadError(f"Failed to open ROM {path}: {exc}") from exc
        log_failure("loader", "Failed to open game: %s (%s)", path, exc)
        return b""
    if debug_enabled("loader"):
        debug_log("loader", "rom=%s bytes=%d", path, len(image))
    return image


def copy_rom(image: bytes, destination: memoryview, max_bytes: int) -> int:
    """Copy ``image`` verbatim into ``destination`` and return the byte count."""

    length = min(len(image), max_bytes, len(destination))
    destination[:length] = image[:length]
    return length
