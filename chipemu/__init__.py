"""CHIP-8 emulator: headless core plus a pygame frontend."""
from .bank import FONTSET, MEM_SIZE, START_ADDRESS, Bank
from .cpu import Cpu
from .display import SCREEN_H, SCREEN_W, Display
from .errors import (Chip8Error, OutOfBoundsError, StackError,
                     StackOverflowError, StackUnderflowError)
from .keypad import DEFAULT_KEYMAP, Keypad, RegisterWrite, apply_key_event
from .machine import Machine, NullTone

__version__ = "1.0.0"

__all__ = [
    "Bank", "Chip8Error", "Cpu", "DEFAULT_KEYMAP", "Display", "FONTSET",
    "Keypad", "MEM_SIZE", "Machine", "NullTone", "OutOfBoundsError",
    "RegisterWrite", "SCREEN_H", "SCREEN_W", "START_ADDRESS", "StackError",
    "StackOverflowError", "StackUnderflowError", "apply_key_event",
]
