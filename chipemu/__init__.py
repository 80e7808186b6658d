"""CHIP-8 virtual machine."""

from .constants import FONTSET
from .config import EmulatorConfig
from .emulator import Chip8
from .errors import (Chip8Error, InvalidOpcode, LoadTooLarge,
                     OutOfBoundsAccess, StackOverflow, StackUnderflow)
from .machine import Machine

__version__ = "0.2.0"

__all__ = [
    "Chip8", "Chip8Error", "EmulatorConfig", "FONTSET", "InvalidOpcode",
    "LoadTooLarge", "Machine", "OutOfBoundsAccess", "StackOverflow",
    "StackUnderflow",
]
