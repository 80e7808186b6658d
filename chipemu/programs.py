"""Small built-in programs."""

# Draw the glyph whose digit is in V0 at (V1, V2) = (8, 8), forever.
GLYPH_DEMO = bytes([
    0x60, 0x00,  # LD V0, 0
    0xF0, 0x29,  # LD F, V0
    0x61, 0x08,  # LD V1, 8
    0x62, 0x08,  # LD V2, 8
    0xD1, 0x25,  # DRW V1, V2, 5
    0x12, 0x00,  # JP 0x200
])
