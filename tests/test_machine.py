import numpy as np
import pytest

from chipemu.constants import (FONT_ADDRESS, FONTSET, MAX_PROGRAM_SIZE,
                               MEM_SIZE, STACK_SIZE, START_ADDRESS)
from chipemu.errors import (LoadTooLarge, OutOfBoundsAccess, StackOverflow,
                            StackUnderflow)
from chipemu.machine import Machine


def test_load_places_font_and_program():
    m = Machine()
    m.load(b"\x12\x34\x56")
    assert m.memory[FONT_ADDRESS:FONT_ADDRESS + 80] == FONTSET
    assert m.memory[START_ADDRESS:START_ADDRESS + 3] == b"\x12\x34\x56"
    assert m.pc == START_ADDRESS
    assert m.sp == 0


def test_load_resets_live_state():
    m = Machine()
    m.load(b"\x00\xE0")
    m.V[3] = 9
    m.I = 0x345
    m.delay_timer = m.sound_timer = 10
    m.push(0x222)
    m.display[5] = 1
    m.memory[0xF00] = 0xAA
    m.pc = 0x400

    m.load(b"\x60\x01")
    assert not any(m.V)
    assert m.I == 0
    assert m.delay_timer == m.sound_timer == 0
    assert m.sp == 0 and not any(m.stack)
    assert not any(m.display)
    assert m.memory[0xF00] == 0
    assert m.pc == START_ADDRESS


def test_load_keeps_host_keys():
    m = Machine()
    m.keypad.set_key(3, True)
    m.load(b"")
    assert m.keypad.is_pressed(3)


def test_load_largest_program():
    m = Machine()
    m.load(bytes([0xAB]) * MAX_PROGRAM_SIZE)
    assert m.memory[MEM_SIZE - 1] == 0xAB


def test_load_too_large_leaves_state_alone():
    m = Machine()
    m.load(b"\x60\x07")
    m.V[0] = 7
    with pytest.raises(LoadTooLarge) as exc:
        m.load(bytes(MAX_PROGRAM_SIZE + 1))
    assert isinstance(exc.value, ValueError)
    assert m.V[0] == 7
    assert m.memory[START_ADDRESS] == 0x60


def test_load_rejects_bad_font():
    with pytest.raises(ValueError):
        Machine().load(b"", font=bytes(79))


def test_load_refused_mid_instruction():
    m = Machine()
    m.executing = True
    with pytest.raises(RuntimeError):
        m.load(b"")


def test_memory_bounds():
    m = Machine()
    m.write(MEM_SIZE - 1, 0x1FF)
    assert m.read(MEM_SIZE - 1) == 0xFF
    with pytest.raises(OutOfBoundsAccess):
        m.read(MEM_SIZE)
    with pytest.raises(OutOfBoundsAccess):
        m.write(-1, 0)
    with pytest.raises(OutOfBoundsAccess):
        m.read_block(MEM_SIZE - 2, 3)
    with pytest.raises(OutOfBoundsAccess):
        m.write_block(MEM_SIZE - 1, b"\x01\x02")
    assert m.read_block(MEM_SIZE, 0) == b""


def test_stack_limits():
    m = Machine()
    for i in range(STACK_SIZE):
        m.push(0x200 + 2 * i)
    with pytest.raises(StackOverflow):
        m.push(0x300)
    assert m.sp == STACK_SIZE
    for i in reversed(range(STACK_SIZE)):
        assert m.pop() == 0x200 + 2 * i
    with pytest.raises(StackUnderflow):
        m.pop()
    assert m.sp == 0


def test_timers_floor_at_zero():
    m = Machine()
    m.delay_timer, m.sound_timer = 1, 2
    assert m.sound_active
    m.decrement_timers()
    assert (m.delay_timer, m.sound_timer) == (0, 1)
    m.decrement_timers()
    m.decrement_timers()
    assert (m.delay_timer, m.sound_timer) == (0, 0)
    assert not m.sound_active


def test_framebuffer_export_is_read_only():
    m = Machine()
    m.display[2 * 64 + 5] = 1
    fb = m.framebuffer()
    assert fb.shape == (32, 64)
    assert fb.dtype == np.uint8
    assert fb[2, 5] == 1
    assert fb.sum() == 1
    with pytest.raises(ValueError):
        fb[0, 0] = 1
