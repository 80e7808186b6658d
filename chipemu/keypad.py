"""
The 16-key hexadecimal keypad.

The host input layer is the only writer. The interpreter reads one snapshot per
instruction; because the state is held as an immutable tuple that is swapped
as a whole, a snapshot is never a mix of before and after an update.
"""
from __future__ import annotations

import threading
from typing import Iterable, Tuple

from .constants import KEY_COUNT
from .errors import OutOfBoundsAccess

KeyState = Tuple[bool, ...]

_RELEASED: KeyState = (False,) * KEY_COUNT


class Keypad:
    def __init__(self):
        self._lock = threading.Lock()
        self._state: KeyState = _RELEASED

    def snapshot(self) -> KeyState:
        return self._state

    def is_pressed(self, key: int) -> bool:
        return self.snapshot()[_check_key(key)]

    def set_key(self, key: int, pressed: bool) -> None:
        key = _check_key(key)
        with self._lock:
            state = list(self._state)
            state[key] = bool(pressed)
            self._state = tuple(state)

    def set_all(self, states: Iterable[bool]) -> None:
        state = tuple(bool(s) for s in states)
        if len(state) != KEY_COUNT:
            raise ValueError(f"expected {KEY_COUNT} key states, got {len(state)}")
        with self._lock:
            self._state = state

    def clear(self) -> None:
        """Release every key, e.g. when the window loses focus."""
        with self._lock:
            self._state = _RELEASED

    def __getitem__(self, key: int) -> bool:
        return self.is_pressed(key)

    def __setitem__(self, key: int, pressed: bool) -> None:
        self.set_key(key, pressed)

    def __len__(self) -> int:
        return KEY_COUNT


def _check_key(key: int) -> int:
    if not 0 <= key < KEY_COUNT:
        raise OutOfBoundsAccess("key", key)
    return key
