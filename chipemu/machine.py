"""
Frame driver: ties the bank, display, interpreter and tone gate together.

The host calls ``tick()`` at a fixed rate (60 Hz by convention) and feeds key
transitions through ``key_event()``. Both must run on the same thread, or be
serialized by the host; the machine does no locking.
"""
from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Optional, Union

from .bank import Bank
from .cpu import Cpu
from .display import Display
from .keypad import RegisterWrite, apply_key_event

logger = logging.getLogger(__name__)

DEFAULT_SPEED = 10


class NullTone:
    """Tone sink used when the host has no audio."""

    def play(self):
        pass

    def stop(self):
        pass


class Machine:
    def __init__(self, speed: int = DEFAULT_SPEED, display: Optional[Display] = None,
                 tone=None, rng: Optional[random.Random] = None):
        self.bank = Bank()
        self.display = display if display is not None else Display()
        self.tone = tone if tone is not None else NullTone()
        self.cpu = Cpu(self.bank, self.display, rng=rng)
        self.speed = speed

    @property
    def speed(self) -> int:
        return self._speed

    @speed.setter
    def speed(self, value: int):
        if int(value) < 1:
            raise ValueError(f"speed must be a positive number of cycles, got {value!r}")
        self._speed = int(value)

    @property
    def paused(self) -> bool:
        return self.bank.is_paused

    def reset(self):
        self.bank.reset()
        self.display.clear()
        self.tone.stop()
        logger.debug("machine reset")

    def load(self, program: bytes):
        self.reset()
        self.bank.load(program)
        logger.info("loaded program (%d bytes)", len(program))

    def load_file(self, path: Union[str, Path]):
        self.load(Path(path).read_bytes())

    def key_event(self, keycode: int, pressed: bool) -> Optional[RegisterWrite]:
        return apply_key_event(self.bank, keycode, pressed)

    def step(self):
        self.cpu.step()

    def tick(self):
        """Advance one frame: timers, tone gate, then ``speed`` instructions."""
        bank = self.bank
        if bank.is_paused:
            self.tone.stop()
            return

        if bank.delay_timer > 0:
            bank.delay_timer -= 1
        if bank.sound_timer > 0:
            bank.sound_timer -= 1
            self.tone.play()
        else:
            self.tone.stop()

        for _ in range(self._speed):
            self.cpu.step()
            if bank.is_paused:
                return
