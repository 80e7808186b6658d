"""
Command line entry point.

Run:
  chipemu path/to/rom [--scale 15] [--clock 500] [--tone 440]
  chipemu --demo --headless 30
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import EmulatorConfig
from .display import render_text
from .emulator import Chip8
from .errors import Chip8Error
from .programs import GLYPH_DEMO

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chipemu", description="CHIP-8 emulator in Python by D/V")
    parser.add_argument("rom", nargs="?", help="Path to CHIP-8 ROM")
    parser.add_argument("--demo", action="store_true",
                        help="Run the built-in glyph demo instead of a ROM")
    parser.add_argument("--scale", type=int, default=15,
                        help="Pixel scale factor (default 15)")
    parser.add_argument("--clock", type=int, default=500,
                        help="CPU clock in Hz (default 500)")
    parser.add_argument("--fps", type=int, default=60,
                        help="Frame rate of the window (default 60)")
    parser.add_argument("--legacy-store", action="store_true",
                        help="Use original FX55/FX65 quirk (I increments)")
    parser.add_argument("--tone", type=int, default=440,
                        help="Beep tone frequency in Hz")
    parser.add_argument("--debug", action="store_true",
                        help="Log and skip unknown opcodes instead of halting")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the CXNN random source")
    parser.add_argument("--headless", type=int, metavar="FRAMES", default=None,
                        help="Run FRAMES 1/60 s frames without a window and print the screen")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging verbosity (default WARNING)")
    return parser


def read_rom(args: argparse.Namespace) -> bytes:
    if args.demo:
        return GLYPH_DEMO
    with open(args.rom, "rb") as f:
        return f.read()


def run_headless(chip8: Chip8, frames: int, fps: int = 60):
    dt = 1.0 / fps
    for _ in range(frames):
        chip8.tick(dt)
    print(render_text(chip8.framebuffer))


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.rom is None and not args.demo:
        parser.error("a ROM path or --demo is required")

    logging.basicConfig(level=args.log_level,
                        format="[%(levelname)s] %(message)s")
    try:
        config = EmulatorConfig.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        rom = read_rom(args)
    except OSError as e:
        print(f"Cannot read ROM: {e}", file=sys.stderr)
        return 2

    chip8 = Chip8(config)
    log.info("Starting %s at %d Hz", args.rom or "demo", config.clock_hz)
    try:
        if args.headless is not None:
            chip8.load(rom)
            run_headless(chip8, args.headless, config.fps)
        else:
            from .frontend import run
            run(chip8, rom, config)
    except Chip8Error as e:
        print(f"Emulation halted: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nExiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
