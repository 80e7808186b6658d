"""
The ``Chip8`` facade ties machine, CPU and scheduler together.

Hosts load a program, feed frame times to ``tick`` and read back the
framebuffer, timers and fault state. Loading a new program is allowed at any
time between instructions and resets all three parts at once.
"""
from __future__ import annotations

import random
from typing import Optional

import numpy as np

from .config import EmulatorConfig
from .constants import FONTSET
from .cpu import Cpu
from .errors import Chip8Error
from .keypad import Keypad
from .machine import Machine
from .scheduler import Scheduler


class Chip8:
    def __init__(self, config: Optional[EmulatorConfig] = None):
        self.config = config or EmulatorConfig()
        self.machine = Machine()
        self.cpu = Cpu(self.machine, debug=self.config.debug,
                       legacy_store=self.config.legacy_store,
                       rng=random.Random(self.config.seed))
        self.scheduler = Scheduler(self.cpu, clock_hz=self.config.clock_hz,
                                   timer_hz=self.config.timer_hz)
        self.loaded = False

    def load(self, program: bytes, font: bytes = FONTSET):
        """Insert a cartridge: full reset, then font and program."""
        self.machine.load(program, font)
        self.cpu.reset()
        self.scheduler.reset()
        self.loaded = True

    def tick(self, dt: float) -> int:
        if not self.loaded:
            return 0
        return self.scheduler.advance(dt)

    def step(self):
        """Run exactly one instruction, ignoring the clock."""
        if not self.loaded:
            return None
        return self.cpu.step()

    # =============== Host-facing state ===============
    @property
    def keypad(self) -> Keypad:
        return self.machine.keypad

    @property
    def framebuffer(self) -> np.ndarray:
        return self.machine.framebuffer()

    @property
    def delay_timer(self) -> int:
        return self.machine.delay_timer

    @property
    def sound_timer(self) -> int:
        return self.machine.sound_timer

    @property
    def sound_active(self) -> bool:
        return self.machine.sound_active

    @property
    def halted(self) -> bool:
        return self.cpu.halted

    @property
    def fault(self) -> Optional[Chip8Error]:
        return self.cpu.fault

    def consume_draw_flag(self) -> bool:
        """True once after each framebuffer change."""
        flag = self.machine.draw_flag
        self.machine.draw_flag = False
        return flag
