"""
Machine state: memory, registers, call stack, timers, framebuffer and keypad.

The interpreter mutates a single explicitly owned ``Machine``; nothing lives
in module globals. All addressed accesses are bounds checked and raise
``OutOfBoundsAccess`` rather than wrapping.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

import numpy as np

from .constants import (FONT_ADDRESS, FONTSET, GLYPH_COUNT, GLYPH_SIZE,
                        MAX_PROGRAM_SIZE, MEM_SIZE, REGISTER_COUNT,
                        SCREEN_H, SCREEN_W, STACK_SIZE, START_ADDRESS)
from .errors import (LoadTooLarge, OutOfBoundsAccess, StackOverflow,
                     StackUnderflow)
from .keypad import Keypad

log = logging.getLogger(__name__)


@dataclass
class Machine:
    memory: bytearray = field(default_factory=lambda: bytearray(MEM_SIZE))
    V: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))  # V0..VF
    I: int = 0
    pc: int = START_ADDRESS
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    sp: int = 0
    delay_timer: int = 0
    sound_timer: int = 0
    display: bytearray = field(
        default_factory=lambda: bytearray(SCREEN_W * SCREEN_H))
    keypad: Keypad = field(default_factory=Keypad)
    draw_flag: bool = False
    # set by the CPU for the duration of one instruction
    executing: bool = False

    def reset(self):
        """Zero every field except the keypad, which belongs to the host."""
        self.memory = bytearray(MEM_SIZE)
        self.V = bytearray(REGISTER_COUNT)
        self.I = 0
        self.pc = START_ADDRESS
        self.stack = [0] * STACK_SIZE
        self.sp = 0
        self.delay_timer = 0
        self.sound_timer = 0
        self.display = bytearray(SCREEN_W * SCREEN_H)
        self.draw_flag = True

    def load(self, program: bytes, font: bytes = FONTSET):
        """Reset the machine and insert a new program.

        Validates everything before touching state, so a rejected load leaves
        the running program intact.
        """
        if self.executing:
            raise RuntimeError("cannot load a program in the middle of an instruction")
        if len(font) != GLYPH_COUNT * GLYPH_SIZE:
            raise ValueError(
                f"font must be {GLYPH_COUNT * GLYPH_SIZE} bytes, got {len(font)}")
        if len(program) > MAX_PROGRAM_SIZE:
            raise LoadTooLarge(len(program), MAX_PROGRAM_SIZE)

        self.reset()
        self.memory[FONT_ADDRESS:FONT_ADDRESS + len(font)] = bytes(font)
        self.memory[START_ADDRESS:START_ADDRESS + len(program)] = bytes(program)
        log.info("ROM loaded (%d bytes)", len(program))

    # =============== Memory ===============
    def read(self, address: int) -> int:
        if not 0 <= address < MEM_SIZE:
            raise OutOfBoundsAccess("memory", address)
        return self.memory[address]

    def write(self, address: int, value: int):
        if not 0 <= address < MEM_SIZE:
            raise OutOfBoundsAccess("memory", address)
        self.memory[address] = value & 0xFF

    def read_block(self, address: int, length: int) -> bytes:
        if length and not (0 <= address and address + length <= MEM_SIZE):
            raise OutOfBoundsAccess("memory", address + length - 1)
        return bytes(self.memory[address:address + length])

    def write_block(self, address: int, data: bytes):
        if data and not (0 <= address and address + len(data) <= MEM_SIZE):
            raise OutOfBoundsAccess("memory", address + len(data) - 1)
        self.memory[address:address + len(data)] = bytes(data)

    # =============== Stack ===============
    def push(self, address: int):
        if self.sp >= STACK_SIZE:
            raise StackOverflow(f"Stack overflow on CALL (depth {STACK_SIZE})")
        self.stack[self.sp] = address
        self.sp += 1

    def pop(self) -> int:
        if self.sp <= 0:
            raise StackUnderflow("Stack underflow on RET")
        self.sp -= 1
        return self.stack[self.sp]

    # =============== Timers ===============
    def decrement_timers(self):
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    @property
    def sound_active(self) -> bool:
        return self.sound_timer > 0

    # =============== Display ===============
    def clear_display(self):
        self.display = bytearray(SCREEN_W * SCREEN_H)
        self.draw_flag = True

    def pixel(self, x: int, y: int) -> int:
        if not (0 <= x < SCREEN_W and 0 <= y < SCREEN_H):
            raise OutOfBoundsAccess("pixel", y * SCREEN_W + x)
        return self.display[y * SCREEN_W + x]

    def framebuffer(self) -> np.ndarray:
        """Read-only (32, 64) uint8 copy of the display."""
        fb = np.frombuffer(bytes(self.display), dtype=np.uint8).reshape(
            SCREEN_H, SCREEN_W)
        fb.flags.writeable = False
        return fb
