"""Memory map, screen geometry and the built-in font."""

MEM_SIZE = 4096
START_ADDRESS = 0x200
FONT_ADDRESS = 0x50  # canonical address for font sprites
MAX_PROGRAM_SIZE = MEM_SIZE - START_ADDRESS

SCREEN_W, SCREEN_H = 64, 32
SPRITE_W = 8

REGISTER_COUNT = 16
STACK_SIZE = 128
KEY_COUNT = 16

GLYPH_SIZE = 5
GLYPH_COUNT = 16

CLOCK_HZ = 500
TIMER_HZ = 60

# Classic CHIP-8 4x5 font (each char 5 bytes)
FONTSET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])
