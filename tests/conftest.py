import random

import pytest

from chipemu.cpu import Cpu
from chipemu.machine import Machine


def assemble(*words):
    """Pack 16-bit instruction words into program bytes."""
    out = bytearray()
    for w in words:
        out += bytes([(w >> 8) & 0xFF, w & 0xFF])
    return bytes(out)


@pytest.fixture
def machine():
    m = Machine()
    m.load(b"")
    return m


@pytest.fixture
def cpu(machine):
    return Cpu(machine, rng=random.Random(1234))


@pytest.fixture
def run(cpu):
    """Load *words* at 0x200 and execute them one by one."""
    def _run(*words, steps=None):
        cpu.machine.load(assemble(*words))
        cpu.reset()
        for _ in range(len(words) if steps is None else steps):
            cpu.step()
        return cpu.machine
    return _run
