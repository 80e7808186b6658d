"""
XOR sprite blitter.

The origin wraps around the screen; the sprite body does not. Rows and
columns that would fall past the right or bottom edge are clipped.
"""
from __future__ import annotations

from .binutils import nth_bit
from .constants import SCREEN_H, SCREEN_W, SPRITE_W
from .machine import Machine


def draw_sprite(machine: Machine, x_pos: int, y_pos: int, height: int,
                address: int) -> bool:
    """Blit *height* rows read from *address* at (x_pos, y_pos).

    Returns True if any lit pixel was turned off.
    """
    sprite = machine.read_block(address, height)
    x_pos %= SCREEN_W
    y_pos %= SCREEN_H
    collision = False
    for row, byte in enumerate(sprite):
        py = y_pos + row
        if py >= SCREEN_H:
            break
        for col in range(SPRITE_W):
            px = x_pos + col
            if px >= SCREEN_W:
                break
            if not nth_bit(SPRITE_W - 1 - col, byte):
                continue
            idx = py * SCREEN_W + px
            if machine.display[idx]:
                collision = True
            machine.display[idx] ^= 1
    machine.draw_flag = True
    return collision
