"""Nibble and bit helpers shared by the decoder and the sprite blitter."""


def high_nibble(byte: int) -> int:
    return (byte & 0xF0) >> 4


def low_nibble(byte: int) -> int:
    return byte & 0x0F


def nth_bit(n: int, byte: int) -> bool:
    """True if bit *n* (0 = least significant) of *byte* is set."""
    return (byte & (1 << n)) != 0


def bit8(high: int, low: int) -> int:
    return (high << 4) | low


def bit12(high: int, mid: int, low: int) -> int:
    return (high << 8) | (mid << 4) | low
