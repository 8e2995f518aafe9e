"""Convert the one-byte-per-pixel framebuffer into an RGB frame."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Packed RGB24 frame produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        offset = (y * self.width + x) * 3
        return self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2]

    def to_surface(self):
        import pygame  # type: ignore

        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Expand framebuffer cells into palette colours with integer scaling."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        background, foreground = validate_palette(palette)
        self._off = bytes(background)
        self._on = bytes(foreground)

    def render(self, cells: bytes, width: int, height: int, *, scale: int = 1) -> RenderResult:
        if len(cells) < width * height:
            raise ValueError(f"framebuffer holds {len(cells)} cells, expected {width * height}")
        scale = max(1, scale)
        out = bytearray()
        for y in range(height):
            row = cells[y * width : (y + 1) * width]
            line = b"".join((self._on if cell else self._off) * scale for cell in row)
            out += line * scale
        return RenderResult(width * scale, height * scale, bytes(out))
