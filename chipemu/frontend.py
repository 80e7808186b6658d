"""
pygame frontend: window, keyboard and beeper.

Keyboard mapping (common layout):

  CHIP-8  =>  Keyboard
  1 2 3 C =>  1 2 3 4
  4 5 6 D =>  Q W E R
  7 8 9 E =>  A S D F
  A 0 B F =>  Z X C V

F9 re-inserts the current ROM, Escape quits, and a ROM file dropped on the
window replaces the running one.
"""
from __future__ import annotations

import logging
import sys

import numpy as np

try:
    import pygame
except ImportError:
    print("This emulator requires pygame. Install with: pip install pygame", file=sys.stderr)
    raise

from .config import EmulatorConfig
from .constants import SCREEN_H, SCREEN_W
from .emulator import Chip8
from .errors import LoadTooLarge

log = logging.getLogger(__name__)

# Keyboard mapping: CHIP-8 key index -> pygame key
KEYMAP = {
    0x0: pygame.K_x,
    0x1: pygame.K_1,
    0x2: pygame.K_2,
    0x3: pygame.K_3,
    0x4: pygame.K_q,
    0x5: pygame.K_w,
    0x6: pygame.K_e,
    0x7: pygame.K_a,
    0x8: pygame.K_s,
    0x9: pygame.K_d,
    0xA: pygame.K_z,
    0xB: pygame.K_c,
    0xC: pygame.K_4,
    0xD: pygame.K_r,
    0xE: pygame.K_f,
    0xF: pygame.K_v,
}
KEY_LOOKUP = {pgk: k_idx for k_idx, pgk in KEYMAP.items()}

SAMPLE_RATE = 44100


def square_wave(tone_hz: int, sample_rate: int = SAMPLE_RATE,
                duration: float = 0.1, volume: float = 1.0) -> np.ndarray:
    """Signed 16-bit mono square wave of *tone_hz*."""
    t = np.arange(int(sample_rate * duration))
    wave = ((t * tone_hz * 2 / sample_rate) % 2 >= 1).astype('float32') * 2 - 1
    return (wave * volume * 32767).astype('int16')


class Frontend:
    def __init__(self, chip8: Chip8, scale: int = 10, tone_hz: int = 440):
        self.chip8 = chip8
        self.scale = max(1, int(scale))
        self.surface = pygame.display.set_mode(
            (SCREEN_W * self.scale, SCREEN_H * self.scale))
        pygame.display.set_caption("CHIPemu")
        self.clock = pygame.time.Clock()
        self.rom = b""

        # Audio setup (simple square tone)
        self.tone_hz = tone_hz
        self.sound = None
        self.beeping = False
        self._init_audio()

    def _init_audio(self):
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 1, 256)
            pygame.mixer.init()
        except pygame.error as e:
            log.warning("Audio disabled: %s", e)
            return
        self.sound = pygame.mixer.Sound(square_wave(self.tone_hz))
        self.sound.set_volume(0.2)

    def insert(self, rom: bytes):
        self.chip8.load(rom)
        self.rom = rom

    def handle_events(self) -> bool:
        """Process pending events; False once the user asked to quit."""
        keypad = self.chip8.keypad
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                is_down = event.type == pygame.KEYDOWN
                if event.key == pygame.K_ESCAPE:
                    return False
                if is_down and event.key == pygame.K_F9:
                    self.insert(self.rom)
                    log.info("Emulator reset")
                elif event.key in KEY_LOOKUP:
                    keypad.set_key(KEY_LOOKUP[event.key], is_down)
            elif event.type == pygame.WINDOWFOCUSLOST:
                # avoid stuck keys
                keypad.clear()
            elif event.type == pygame.DROPFILE:
                self.insert_file(event.file)
        return True

    def insert_file(self, path: str) -> bool:
        """Load a ROM file; on failure the running program keeps going."""
        try:
            with open(path, "rb") as f:
                self.insert(f.read())
        except (OSError, LoadTooLarge) as e:
            log.error("Cannot load %s: %s", path, e)
            return False
        log.info("Inserted %s", path)
        return True

    def render(self):
        surf = self.surface
        surf.fill((0, 0, 0))
        size = self.scale
        for y, x in np.argwhere(self.chip8.framebuffer):
            surf.fill((255, 255, 255), (int(x) * size, int(y) * size, size, size))
        pygame.display.flip()

    def update_sound(self):
        active = self.chip8.sound_active
        if self.sound is not None:
            if active and not self.beeping:
                self.sound.play(loops=-1)
            elif not active and self.beeping:
                self.sound.stop()
        self.beeping = active

    def tick(self, fps: int) -> float:
        """Wait for the next frame; returns the elapsed time in seconds."""
        return self.clock.tick(fps) / 1000.0


def run(chip8: Chip8, rom: bytes, config: EmulatorConfig):
    """Main emulation loop. Faults propagate after the window is closed."""
    pygame.init()
    pygame.display.set_allow_screensaver(True)
    try:
        frontend = Frontend(chip8, scale=config.scale, tone_hz=config.tone_hz)
        frontend.insert(rom)
        dt = 0.0
        while frontend.handle_events():
            chip8.tick(dt)
            frontend.update_sound()
            if chip8.consume_draw_flag():
                frontend.render()
            dt = frontend.tick(config.fps)
    finally:
        pygame.quit()
