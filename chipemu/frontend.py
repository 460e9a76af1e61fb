"""
Pygame frontend: window, square-wave beeper, keyboard and the 60 Hz loop.

The emulator core never imports pygame or numpy and runs headless.
"""
from __future__ import annotations

import logging
from typing import Optional

import numpy as np
import pygame

from .config import EmulatorConfig
from .keypad import Keypad
from .machine import Machine

logger = logging.getLogger(__name__)

PIXEL_ON = (255, 255, 255)
PIXEL_OFF = (0, 0, 0)


class PygameTone:
    """Looping square wave gated by ``play()`` / ``stop()``."""

    def __init__(self, tone_hz: int = 440, volume: float = 0.2):
        self.playing = False
        self.sound: Optional[pygame.mixer.Sound] = None
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as e:
            logger.warning("audio disabled: %s", e)
            return
        sr, _, channels = pygame.mixer.get_init()
        # one full second of square wave so the loop point is seamless
        t = np.arange(sr)
        wave = ((t * tone_hz * 2 / sr) % 2 >= 1).astype('float32') * 2 - 1
        wave = (wave * 32767).astype('int16')
        if channels > 1:
            wave = np.ascontiguousarray(np.repeat(wave[:, None], channels, axis=1))
        self.sound = pygame.sndarray.make_sound(wave)
        self.sound.set_volume(volume)

    def play(self):
        if self.playing or self.sound is None:
            return
        self.sound.play(loops=-1)
        self.playing = True

    def stop(self):
        if not self.playing or self.sound is None:
            return
        self.sound.stop()
        self.playing = False


class Frontend:
    def __init__(self, machine: Machine, config: EmulatorConfig, rom: bytes = b""):
        self.machine = machine
        self.config = config
        self.rom = rom
        self.keypad = Keypad(machine.key_event, config.keymap)
        self.scale = config.scale
        display = machine.display
        self.surface = pygame.display.set_mode(
            (display.width * self.scale, display.height * self.scale))
        pygame.display.set_caption("CHIPemu")
        self.clock = pygame.time.Clock()
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()
            elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                is_down = event.type == pygame.KEYDOWN
                if event.key == pygame.K_ESCAPE:
                    self.stop()
                elif event.key == pygame.K_F5 and is_down:
                    logger.info("reloading ROM")
                    self.machine.load(self.rom)
                else:
                    name = pygame.key.name(event.key)
                    if is_down:
                        self.keypad.pressed(name)
                    else:
                        self.keypad.released(name)

    def render(self):
        display = self.machine.display
        if not display.dirty:
            return
        surf = self.surface
        surf.lock()
        surf.fill(PIXEL_OFF)
        pixel_size = self.scale
        for y, row in enumerate(display.rows()):
            for x, lit in enumerate(row):
                if lit:
                    rect = pygame.Rect(x * pixel_size, y * pixel_size,
                                       pixel_size, pixel_size)
                    pygame.draw.rect(surf, PIXEL_ON, rect)
        surf.unlock()
        pygame.display.flip()
        display.dirty = False

    def run(self):
        """Drive the machine at ``config.fps`` until the window is closed."""
        self._active = True
        try:
            while self._active:
                self.handle_events()
                if not self._active:
                    break
                self.machine.tick()
                self.render()
                self.clock.tick(self.config.fps)
        finally:
            self._active = False
            self.machine.tone.stop()

    def stop(self):
        self._active = False
