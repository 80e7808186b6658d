"""
Faults raised by the interpreter.

Every fault is local to one instruction. Apart from InvalidOpcode in debug
mode, a fault halts the machine at the instruction boundary where it was
detected; ``address`` is the address of the faulting instruction when known.
"""
from __future__ import annotations

from typing import Optional


class Chip8Error(Exception):
    """Base class for all interpreter faults."""

    def __init__(self, message: str, address: Optional[int] = None):
        super().__init__(message)
        self.address = address

    def __str__(self) -> str:
        msg = super().__str__()
        if self.address is not None:
            return f"{msg} at PC {self.address:03X}"
        return msg


class InvalidOpcode(Chip8Error):
    def __init__(self, word: int, address: Optional[int] = None):
        super().__init__(f"Unknown opcode: {word:04X}", address)
        self.word = word


class StackOverflow(Chip8Error):
    pass


class StackUnderflow(Chip8Error):
    pass


class OutOfBoundsAccess(Chip8Error):
    """A memory address, key code or register index outside its range."""

    def __init__(self, what: str, index: int, address: Optional[int] = None):
        super().__init__(f"{what} index {index:#x} out of range", address)
        self.what = what
        self.index = index


class LoadTooLarge(Chip8Error, ValueError):
    def __init__(self, size: int, limit: int):
        super().__init__(f"ROM is too large for memory ({size} > {limit} bytes)")
        self.size = size
        self.limit = limit
