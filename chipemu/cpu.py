"""
The execute engine: one call to ``Cpu.step`` runs one instruction.

Every opcode family decoded by ``decode.Op`` has exactly one handler below;
the module refuses to import if one is missing.
"""
from __future__ import annotations

import logging
import random
from typing import Optional

from .bcd import decimal_digits
from .constants import FONT_ADDRESS, GLYPH_SIZE
from .decode import Decoded, Op, decode, fetch
from .errors import Chip8Error, InvalidOpcode, OutOfBoundsAccess
from .keypad import KeyState
from .machine import Machine
from .sprite import draw_sprite

log = logging.getLogger(__name__)


class Cpu:
    def __init__(self, machine: Machine, debug: bool = False,
                 legacy_store: bool = False, rng: Optional[random.Random] = None):
        self.machine = machine
        # if True, invalid opcodes are logged and skipped instead of halting
        self.debug = debug
        # if True, FX55/FX65 increment I (original quirk)
        self.legacy_store = legacy_store
        self.rng = rng if rng is not None else random.Random()
        self.halted = False
        self.fault: Optional[Chip8Error] = None
        self._keys: KeyState = ()

    def reset(self):
        self.halted = False
        self.fault = None

    # =============== Core fetch/decode/execute cycle ===============
    def step(self) -> Optional[Decoded]:
        """Execute one instruction.

        Returns the decoded instruction, or None when nothing ran (halted,
        or an invalid opcode skipped in debug mode). Faults halt the CPU and
        are re-raised.
        """
        if self.halted:
            return None
        m = self.machine
        address = m.pc
        m.executing = True
        try:
            self._keys = m.keypad.snapshot()
            ins = fetch(m)
            try:
                decoded = decode(ins)
            except InvalidOpcode as e:
                e.address = address
                if self.debug:
                    log.warning("%s, skipped (debug mode)", e)
                    return None
                raise
            log.debug("%03X: %s %s", address, ins, decoded.op.name)
            getattr(self, _HANDLERS[decoded.op])(decoded)
            return decoded
        except Chip8Error as e:
            if e.address is None:
                e.address = address
            self.halted = True
            self.fault = e
            log.error("Halted: %s", e)
            raise
        finally:
            m.executing = False

    # =============== Helpers ===============
    def _skip_if(self, condition: bool):
        if condition:
            self.machine.pc = (self.machine.pc + 2) & 0xFFFF

    def _key_down(self, key: int) -> bool:
        if not 0 <= key < len(self._keys):
            raise OutOfBoundsAccess("key", key)
        return self._keys[key]

    def _set_with_flag(self, x: int, value: int, flag: bool):
        # VF goes last so it survives when x is F
        self.machine.V[x] = value & 0xFF
        self.machine.V[0xF] = 1 if flag else 0

    # =============== Opcodes ===============
    def _cls(self, d: Decoded):
        self.machine.clear_display()

    def _ret(self, d: Decoded):
        self.machine.pc = self.machine.pop()

    def _jp(self, d: Decoded):
        self.machine.pc = d.nnn

    def _call(self, d: Decoded):
        self.machine.push(self.machine.pc)
        self.machine.pc = d.nnn

    def _se_byte(self, d: Decoded):
        self._skip_if(self.machine.V[d.x] == d.nn)

    def _sne_byte(self, d: Decoded):
        self._skip_if(self.machine.V[d.x] != d.nn)

    def _se_reg(self, d: Decoded):
        V = self.machine.V
        self._skip_if(V[d.x] == V[d.y])

    def _sne_reg(self, d: Decoded):
        V = self.machine.V
        self._skip_if(V[d.x] != V[d.y])

    def _ld_byte(self, d: Decoded):
        self.machine.V[d.x] = d.nn

    def _add_byte(self, d: Decoded):
        V = self.machine.V
        V[d.x] = (V[d.x] + d.nn) & 0xFF

    def _ld_reg(self, d: Decoded):
        V = self.machine.V
        V[d.x] = V[d.y]

    def _or(self, d: Decoded):
        V = self.machine.V
        V[d.x] |= V[d.y]

    def _and(self, d: Decoded):
        V = self.machine.V
        V[d.x] &= V[d.y]

    def _xor(self, d: Decoded):
        V = self.machine.V
        V[d.x] ^= V[d.y]

    def _add_reg(self, d: Decoded):
        V = self.machine.V
        total = V[d.x] + V[d.y]
        self._set_with_flag(d.x, total, total > 0xFF)

    def _sub(self, d: Decoded):
        V = self.machine.V
        vx, vy = V[d.x], V[d.y]
        self._set_with_flag(d.x, vx - vy, vx >= vy)

    def _shr(self, d: Decoded):
        vx = self.machine.V[d.x]
        self._set_with_flag(d.x, vx >> 1, vx & 0x1)

    def _subn(self, d: Decoded):
        V = self.machine.V
        vx, vy = V[d.x], V[d.y]
        self._set_with_flag(d.x, vy - vx, vy >= vx)

    def _shl(self, d: Decoded):
        vx = self.machine.V[d.x]
        self._set_with_flag(d.x, vx << 1, vx & 0x80)

    def _ld_i(self, d: Decoded):
        self.machine.I = d.nnn

    def _jp_v0(self, d: Decoded):
        self.machine.pc = (self.machine.V[0] + d.nnn) & 0xFFFF

    def _rnd(self, d: Decoded):
        self.machine.V[d.x] = self.rng.randint(0, 255) & d.nn

    def _drw(self, d: Decoded):
        m = self.machine
        collision = draw_sprite(m, m.V[d.x], m.V[d.y], d.n, m.I)
        m.V[0xF] = 1 if collision else 0

    def _skp(self, d: Decoded):
        self._skip_if(self._key_down(self.machine.V[d.x]))

    def _sknp(self, d: Decoded):
        self._skip_if(not self._key_down(self.machine.V[d.x]))

    def _ld_vx_dt(self, d: Decoded):
        self.machine.V[d.x] = self.machine.delay_timer

    def _ld_vx_k(self, d: Decoded):
        # not a real block: rewind and re-fetch on the next cycle
        if not self._key_down(self.machine.V[d.x]):
            self.machine.pc = (self.machine.pc - 2) & 0xFFFF

    def _ld_dt(self, d: Decoded):
        self.machine.delay_timer = self.machine.V[d.x]

    def _ld_st(self, d: Decoded):
        self.machine.sound_timer = self.machine.V[d.x]

    def _add_i(self, d: Decoded):
        m = self.machine
        m.I = (m.I + m.V[d.x]) & 0xFFFF

    def _ld_f(self, d: Decoded):
        m = self.machine
        m.I = FONT_ADDRESS + m.V[d.x] * GLYPH_SIZE

    def _ld_b(self, d: Decoded):
        m = self.machine
        m.write_block(m.I, bytes(decimal_digits(m.V[d.x])))

    def _ld_mem(self, d: Decoded):
        m = self.machine
        m.write_block(m.I, bytes(m.V[:d.x + 1]))
        if self.legacy_store:
            m.I = (m.I + d.x + 1) & 0xFFFF

    def _ld_regs(self, d: Decoded):
        m = self.machine
        m.V[:d.x + 1] = m.read_block(m.I, d.x + 1)
        if self.legacy_store:
            m.I = (m.I + d.x + 1) & 0xFFFF


_HANDLERS = {op: "_" + op.name.lower() for op in Op}

_missing = [op.name for op, name in _HANDLERS.items() if not hasattr(Cpu, name)]
if _missing:
    raise ImportError(f"no handler for opcodes: {', '.join(_missing)}")
