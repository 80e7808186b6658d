"""
Fixed-timestep scheduler.

The host hands over wall-clock time once per frame. That time is spent on
whole instructions at ``clock_hz``; every executed instruction in turn feeds
the 60 Hz timer accumulator. Leftovers on both sides carry over to the next
frame, so the two clocks never drift apart whatever the host frame rate.
"""
from __future__ import annotations

from .constants import CLOCK_HZ, TIMER_HZ
from .cpu import Cpu


class Scheduler:
    def __init__(self, cpu: Cpu, clock_hz: int = CLOCK_HZ, timer_hz: int = TIMER_HZ):
        if clock_hz <= 0 or timer_hz <= 0:
            raise ValueError("clock and timer frequencies must be positive")
        self.cpu = cpu
        self.clock_hz = clock_hz
        self.timer_hz = timer_hz
        self.reset()

    def reset(self):
        # pending time in instruction periods
        self._instr_acc = 0.0
        # elapsed time since the last timer tick, in 1/(clock_hz*timer_hz) s
        self._timer_acc = 0
        self.instructions = 0
        self.timer_ticks = 0

    @property
    def instruction_period(self) -> float:
        return 1.0 / self.clock_hz

    @property
    def timer_period(self) -> float:
        return 1.0 / self.timer_hz

    def advance(self, dt: float) -> int:
        """Spend *dt* seconds; returns the number of instructions executed.

        A fault raised by the CPU stops the batch and propagates.
        """
        if dt < 0:
            raise ValueError(f"negative time step: {dt}")
        if self.cpu.halted:
            return 0
        self._instr_acc += dt * self.clock_hz
        pending = int(self._instr_acc)
        self._instr_acc -= pending

        executed = 0
        try:
            for _ in range(pending):
                self.cpu.step()
                executed += 1
                self._tick_timers()
        finally:
            self.instructions += executed
        return executed

    def _tick_timers(self):
        self._timer_acc += self.timer_hz
        while self._timer_acc >= self.clock_hz:
            self._timer_acc -= self.clock_hz
            self.cpu.machine.decrement_timers()
            self.timer_ticks += 1
