"""
Fetch and decode.

``fetch`` reads the two bytes at PC, splits them into four nibbles and
advances PC past the instruction. ``decode`` maps the nibbles onto exactly
one ``Op`` and pulls out its operands. Patterns are checked most specific
first and never overlap.
"""
from __future__ import annotations

import enum
from typing import NamedTuple

from .binutils import bit8, bit12, high_nibble, low_nibble
from .errors import InvalidOpcode
from .machine import Machine


class Op(enum.Enum):
    CLS = "00E0"
    RET = "00EE"
    JP = "1NNN"
    CALL = "2NNN"
    SE_BYTE = "3XNN"
    SNE_BYTE = "4XNN"
    SE_REG = "5XY0"
    LD_BYTE = "6XNN"
    ADD_BYTE = "7XNN"
    LD_REG = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD_REG = "8XY4"
    SUB = "8XY5"
    SHR = "8XY6"
    SUBN = "8XY7"
    SHL = "8XYE"
    SNE_REG = "9XY0"
    LD_I = "ANNN"
    JP_V0 = "BNNN"
    RND = "CXNN"
    DRW = "DXYN"
    SKP = "EX9E"
    SKNP = "EXA1"
    LD_VX_DT = "FX07"
    LD_VX_K = "FX0A"
    LD_DT = "FX15"
    LD_ST = "FX18"
    ADD_I = "FX1E"
    LD_F = "FX29"
    LD_B = "FX33"
    LD_MEM = "FX55"
    LD_REGS = "FX65"


class Instruction(NamedTuple):
    n0: int
    n1: int
    n2: int
    n3: int

    @property
    def word(self) -> int:
        return (self.n0 << 12) | bit12(self.n1, self.n2, self.n3)

    def __str__(self) -> str:
        return f"{self.word:04X}"


class Decoded(NamedTuple):
    op: Op
    x: int
    y: int
    n: int
    nn: int
    nnn: int


# low nibble of the 8XY_ family
_ALU = {
    0x0: Op.LD_REG, 0x1: Op.OR, 0x2: Op.AND, 0x3: Op.XOR, 0x4: Op.ADD_REG,
    0x5: Op.SUB, 0x6: Op.SHR, 0x7: Op.SUBN, 0xE: Op.SHL,
}

# low byte of the EX__ and FX__ families
_KEYS = {0x9E: Op.SKP, 0xA1: Op.SKNP}
_MISC = {
    0x07: Op.LD_VX_DT, 0x0A: Op.LD_VX_K, 0x15: Op.LD_DT, 0x18: Op.LD_ST,
    0x1E: Op.ADD_I, 0x29: Op.LD_F, 0x33: Op.LD_B, 0x55: Op.LD_MEM,
    0x65: Op.LD_REGS,
}

# families identified by the first nibble alone
_SIMPLE = {
    0x1: Op.JP, 0x2: Op.CALL, 0x3: Op.SE_BYTE, 0x4: Op.SNE_BYTE,
    0x6: Op.LD_BYTE, 0x7: Op.ADD_BYTE, 0xA: Op.LD_I, 0xB: Op.JP_V0,
    0xC: Op.RND, 0xD: Op.DRW,
}


def fetch(machine: Machine) -> Instruction:
    """Read the instruction at PC and step PC past it."""
    hi = machine.read(machine.pc)
    lo = machine.read(machine.pc + 1)
    machine.pc = (machine.pc + 2) & 0xFFFF
    return Instruction(high_nibble(hi), low_nibble(hi),
                       high_nibble(lo), low_nibble(lo))


def _match(ins: Instruction):
    n0, n1, n2, n3 = ins
    if n0 == 0x0:
        if n1 == 0x0 and n2 == 0xE:
            return {0x0: Op.CLS, 0xE: Op.RET}.get(n3)
        return None
    if n0 in _SIMPLE:
        return _SIMPLE[n0]
    if n0 == 0x5 and n3 == 0x0:
        return Op.SE_REG
    if n0 == 0x8:
        return _ALU.get(n3)
    if n0 == 0x9 and n3 == 0x0:
        return Op.SNE_REG
    if n0 == 0xE:
        return _KEYS.get(bit8(n2, n3))
    if n0 == 0xF:
        return _MISC.get(bit8(n2, n3))
    return None


def decode(ins: Instruction) -> Decoded:
    """Classify *ins*, raising InvalidOpcode when nothing matches."""
    op = _match(ins)
    if op is None:
        raise InvalidOpcode(ins.word)
    _, x, y, n = ins
    return Decoded(op, x, y, n, bit8(y, n), bit12(x, y, n))
