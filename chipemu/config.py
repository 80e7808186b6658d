"""Emulator settings, filled in from the command line."""
from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Optional

from .constants import CLOCK_HZ, TIMER_HZ


@dataclass
class EmulatorConfig:
    clock_hz: int = CLOCK_HZ
    timer_hz: int = TIMER_HZ
    # log and skip unknown opcodes instead of halting
    debug: bool = False
    # if True, FX55/FX65 increment I (original quirk)
    legacy_store: bool = False
    seed: Optional[int] = None
    scale: int = 15
    tone_hz: int = 440
    fps: int = 60
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.clock_hz <= 0:
            raise ValueError(f"clock must be positive, got {self.clock_hz}")
        self.scale = max(1, int(self.scale))
        self.log_level = self.log_level.upper()

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "EmulatorConfig":
        return cls(
            clock_hz=args.clock,
            debug=args.debug,
            legacy_store=args.legacy_store,
            seed=args.seed,
            scale=args.scale,
            tone_hz=args.tone,
            fps=args.fps,
            log_level=args.log_level,
        )
