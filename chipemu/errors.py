"""Exceptions raised by the CHIP-8 core."""
from __future__ import annotations


class Chip8Error(Exception):
    """Base class for every error raised by the emulator core."""


class OutOfBoundsError(Chip8Error):
    """A program does not fit in memory starting at the load address."""

    def __init__(self, size: int, capacity: int):
        super().__init__(
            f"program of {size} bytes does not fit in {capacity} bytes of program memory")
        self.size = size
        self.capacity = capacity


class StackError(Chip8Error):
    """Subroutine stack misuse (CALL too deep, RET without CALL)."""


class StackOverflowError(StackError):
    pass


class StackUnderflowError(StackError):
    pass
