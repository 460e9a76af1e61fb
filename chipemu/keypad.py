"""
Virtual 16-key keypad: the input gate and the host key map.

Keyboard mapping (common layout):

  CHIP-8  =>  Keyboard
  1 2 3 C =>  1 2 3 4
  4 5 6 D =>  Q W E R
  7 8 9 E =>  A S D F
  A 0 B F =>  Z X C V
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, NamedTuple, Optional

from .bank import NUM_KEYS, Bank

logger = logging.getLogger(__name__)

DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

KeyListener = Callable[[int, bool], Optional["RegisterWrite"]]


class RegisterWrite(NamedTuple):
    register: int
    value: int


def apply_key_event(bank: Bank, keycode: int, pressed: bool) -> Optional[RegisterWrite]:
    """Record a press/release transition for ``keycode``.

    Reports that repeat the recorded state are ignored. A press while the
    machine waits on Fx0A stores the keycode in the waiting register and
    resumes execution; the resulting write is returned, otherwise None.
    """
    if not 0 <= keycode < NUM_KEYS:
        raise ValueError(f"keycode out of range: {keycode!r}")
    pressed = bool(pressed)
    if bank.keys[keycode] == pressed:
        return None
    bank.keys[keycode] = pressed
    if bank.paused is None or not pressed:
        return None

    write = RegisterWrite(bank.paused, keycode)
    bank.V[write.register] = write.value
    bank.paused = None
    logger.debug("key %X pressed, resuming with V%X set", keycode, write.register)
    return write


class Keypad:
    """Translates host key names into keypad codes for a listener.

    Names are compared case-insensitively; unmapped keys are ignored.
    """

    def __init__(self, listener: Optional[KeyListener] = None,
                 keymap: Optional[Dict[str, int]] = None):
        self.listener = listener
        self.keymap: Dict[str, int] = {}
        for name, code in (keymap if keymap is not None else DEFAULT_KEYMAP).items():
            self.set_key_map(name, code)

    def set_key_map(self, name: str, code: int):
        if not 0 <= code < NUM_KEYS:
            raise ValueError(f"keypad code out of range: {code!r}")
        self.keymap[name.upper()] = code

    def is_valid(self, name: str) -> bool:
        return name.upper() in self.keymap

    def lookup(self, name: str) -> Optional[int]:
        return self.keymap.get(name.upper())

    def pressed(self, name: str) -> Optional[RegisterWrite]:
        return self._forward(name, True)

    def released(self, name: str) -> Optional[RegisterWrite]:
        return self._forward(name, False)

    def _forward(self, name: str, is_down: bool) -> Optional[RegisterWrite]:
        code = self.lookup(name)
        if code is None or self.listener is None:
            return None
        return self.listener(code, is_down)
