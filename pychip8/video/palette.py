"""Two-colour palettes for presenting the CHIP-8 display."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

RGBColor = Tuple[int, int, int]
Palette = Tuple[RGBColor, RGBColor]


MONOCHROME: Palette = ((0, 0, 0), (0xFF, 0xFF, 0xFF))
AMBER: Palette = ((0x1A, 0x0F, 0x00), (0xFF, 0xB0, 0x00))
PHOSPHOR: Palette = ((0x00, 0x14, 0x00), (0x33, 0xFF, 0x33))

PALETTES: Dict[str, Palette] = {
    "mono": MONOCHROME,
    "amber": AMBER,
    "phosphor": PHOSPHOR,
}


def validate_palette(palette: Sequence[RGBColor]) -> Palette:
    """Normalise ``palette`` to a (background, foreground) pair of RGB tuples."""

    if len(palette) != 2:
        raise ValueError("palette must contain exactly two colours (background and foreground)")
    if any(len(color) != 3 for color in palette):
        raise ValueError("palette entries must be RGB tuples")
    background, foreground = (tuple(int(channel) & 0xFF for channel in color) for color in palette)
    return background, foreground  # type: ignore[return-value]


def palette_by_name(name: str) -> Palette:
    try:
        return PALETTES[name.lower()]
    except KeyError:
        choices = ", ".join(sorted(PALETTES))
        raise ValueError(f"unknown palette {name!r} (choose from {choices})") from None
