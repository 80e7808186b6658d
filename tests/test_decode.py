import pytest

from chipemu.constants import START_ADDRESS
from chipemu.decode import Instruction, Op, decode, fetch
from chipemu.errors import InvalidOpcode, OutOfBoundsAccess


def nibbles(word):
    return Instruction((word >> 12) & 0xF, (word >> 8) & 0xF,
                       (word >> 4) & 0xF, word & 0xF)


def test_fetch_splits_and_advances(machine):
    machine.memory[START_ADDRESS:START_ADDRESS + 2] = b"\xD1\x25"
    ins = fetch(machine)
    assert ins == (0xD, 0x1, 0x2, 0x5)
    assert ins.word == 0xD125
    assert str(ins) == "D125"
    assert machine.pc == START_ADDRESS + 2


def test_fetch_past_end_of_memory(machine):
    machine.pc = 0xFFF
    with pytest.raises(OutOfBoundsAccess):
        fetch(machine)


CASES = [
    (0x00E0, Op.CLS), (0x00EE, Op.RET), (0x1ABC, Op.JP), (0x2ABC, Op.CALL),
    (0x3A12, Op.SE_BYTE), (0x4A12, Op.SNE_BYTE), (0x5AB0, Op.SE_REG),
    (0x6A12, Op.LD_BYTE), (0x7A12, Op.ADD_BYTE), (0x8AB0, Op.LD_REG),
    (0x8AB1, Op.OR), (0x8AB2, Op.AND), (0x8AB3, Op.XOR), (0x8AB4, Op.ADD_REG),
    (0x8AB5, Op.SUB), (0x8AB6, Op.SHR), (0x8AB7, Op.SUBN), (0x8ABE, Op.SHL),
    (0x9AB0, Op.SNE_REG), (0xA123, Op.LD_I), (0xB123, Op.JP_V0),
    (0xCA12, Op.RND), (0xDAB5, Op.DRW), (0xEA9E, Op.SKP), (0xEAA1, Op.SKNP),
    (0xFA07, Op.LD_VX_DT), (0xFA0A, Op.LD_VX_K), (0xFA15, Op.LD_DT),
    (0xFA18, Op.LD_ST), (0xFA1E, Op.ADD_I), (0xFA29, Op.LD_F),
    (0xFA33, Op.LD_B), (0xFA55, Op.LD_MEM), (0xFA65, Op.LD_REGS),
]


@pytest.mark.parametrize("word,op", CASES)
def test_every_family_decodes(word, op):
    assert decode(nibbles(word)).op is op


def test_every_op_has_a_pattern():
    assert {op for _, op in CASES} == set(Op)


def test_operands():
    d = decode(nibbles(0xD7A3))
    assert (d.x, d.y, d.n, d.nn, d.nnn) == (0x7, 0xA, 0x3, 0xA3, 0x7A3)


@pytest.mark.parametrize("word", [
    0x0000, 0x0123, 0x00E1, 0x5AB1, 0x8AB8, 0x8ABF, 0x9AB1,
    0xEA9F, 0xFA00, 0xFA66, 0xFFFF,
])
def test_invalid_opcodes(word):
    with pytest.raises(InvalidOpcode) as exc:
        decode(nibbles(word))
    assert exc.value.word == word
