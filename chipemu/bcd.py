"""Binary-coded decimal split used by FX33."""
from __future__ import annotations

from typing import Tuple


def decimal_digits(value: int) -> Tuple[int, int, int]:
    """Return the hundreds, tens and ones digits of an 8-bit *value*."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"not a byte: {value}")
    return value // 100, (value // 10) % 10, value % 10
