"""Monochrome 64x32 framebuffer with XOR sprite compositing."""

from __future__ import annotations

from typing import Iterable

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
PIXEL_COUNT = DISPLAY_WIDTH * DISPLAY_HEIGHT

PIXEL_ON = 0xFF
PIXEL_OFF = 0x00


class Framebuffer:
    """One byte per pixel (``0x00``/``0xFF``) so the buffer can be blitted as is.

    ``drawn`` is raised by every clear or sprite blit and stays raised until
    the consumer calls :meth:`acknowledge` after presenting the frame.
    """

    width = DISPLAY_WIDTH
    height = DISPLAY_HEIGHT

    def __init__(self) -> None:
        self._pixels = bytearray(PIXEL_COUNT)
        self.drawn = False

    def clear(self) -> None:
        self._pixels[:] = bytes(PIXEL_COUNT)
        self.drawn = True

    def draw_sprite(self, x: int, y: int, rows: Iterable[int]) -> bool:
        """XOR ``rows`` (one byte per line, MSB leftmost) onto the buffer at ``(x, y)``.

        Pixels are addressed linearly from the top-left corner, so a sprite
        overhanging the right edge continues on the next line, and the linear
        index wraps around the end of the buffer. Returns ``True`` when any
        lit pixel was switched off.
        """

        collision = False
        base = x + y * DISPLAY_WIDTH
        pixels = self._pixels
        for row, sprite_byte in enumerate(rows):
            line = base + row * DISPLAY_WIDTH
            for bit in range(8):
                if not sprite_byte & (0x80 >> bit):
                    continue
                index = (line + bit) % PIXEL_COUNT
                if pixels[index]:
                    collision = True
                pixels[index] ^= PIXEL_ON
        self.drawn = True
        return collision

    def acknowledge(self) -> None:
        self.drawn = False

    def get_pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < DISPLAY_WIDTH and 0 <= y < DISPLAY_HEIGHT):
            raise IndexError(f"pixel ({x}, {y}) outside {DISPLAY_WIDTH}x{DISPLAY_HEIGHT} display")
        return self._pixels[x + y * DISPLAY_WIDTH] != PIXEL_OFF

    def snapshot(self) -> bytes:
        return bytes(self._pixels)


__all__ = [
    "DISPLAY_HEIGHT",
    "DISPLAY_WIDTH",
    "Framebuffer",
    "PIXEL_COUNT",
    "PIXEL_OFF",
    "PIXEL_ON",
]
