"""Command-line entry point for the CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.ui.app import AppConfig, Chip8App
from pychip8.video import PALETTES, palette_by_name


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter. Keys: 1234/qwer/asdf/zxcv, +/- adjust speed, Esc quits.",
    )
    parser.add_argument(
        "rom",
        type=Path,
        help="Path to the CHIP-8 ROM image to load",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the interpreter in fullscreen mode",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the random number source",
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        default="mono",
        help="Display colours (default: mono)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop on unrecognized instructions instead of logging them",
    )
    return parser


def build_config(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        fullscreen=args.fullscreen,
        seed=args.seed,
        palette=palette_by_name(args.palette),
        strict=args.strict,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")
    if args.scale < 1:
        parser.error("--scale must be a positive integer")

    app = Chip8App(build_config(args))
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
