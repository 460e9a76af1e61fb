"""
Register/memory bank of the CHIP-8 virtual machine.

All mutable machine state lives here as plain fields so the interpreter, the
frame driver and the input gate share one explicit object:

  memory       4096 bytes, font table at 0x000-0x04F, programs at 0x200
  V            V0..VF, 8-bit; VF doubles as the carry/borrow/collision flag
  I            16-bit index register
  pc           program counter
  stack, sp    16-entry return stack
  delay_timer  DT, sound_timer ST
  keys         per-key pressed status for keys 0x0..0xF
  paused       register index targeted by Fx0A, or None when running

Memory addresses are masked to 12 bits on every access, so PC and I arithmetic
can never index outside the 4 KiB address space.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import OutOfBoundsError, StackOverflowError, StackUnderflowError

logger = logging.getLogger(__name__)

# ==============================
# Constants
# ==============================
MEM_SIZE = 4096
ADDRESS_MASK = MEM_SIZE - 1
START_ADDRESS = 0x200
FONT_ADDRESS = 0x000
FONT_GLYPH_SIZE = 5
STACK_SIZE = 16
NUM_REGISTERS = 16
NUM_KEYS = 16

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


def _fresh_memory() -> bytearray:
    memory = bytearray(MEM_SIZE)
    memory[FONT_ADDRESS:FONT_ADDRESS + len(FONTSET)] = FONTSET
    return memory


@dataclass
class Bank:
    memory: bytearray = field(default_factory=_fresh_memory)
    V: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)
    I: int = 0
    pc: int = START_ADDRESS
    sp: int = 0
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    delay_timer: int = 0
    sound_timer: int = 0
    keys: List[bool] = field(default_factory=lambda: [False] * NUM_KEYS)
    paused: Optional[int] = None

    def reset(self):
        """Reset registers, timers, keys and pause state. Memory is kept."""
        self.V = [0] * NUM_REGISTERS
        self.I = 0
        self.pc = START_ADDRESS
        self.sp = 0
        self.stack = [0] * STACK_SIZE
        self.delay_timer = 0
        self.sound_timer = 0
        self.keys = [False] * NUM_KEYS
        self.paused = None

    def load(self, program: bytes):
        end = START_ADDRESS + len(program)
        if end > MEM_SIZE:
            raise OutOfBoundsError(len(program), MEM_SIZE - START_ADDRESS)
        self.memory[START_ADDRESS:end] = bytes(program)
        logger.debug("loaded %d bytes at 0x%03X-0x%03X",
                     len(program), START_ADDRESS, end - 1)

    # =============== Memory access ===============
    def read(self, addr: int) -> int:
        return self.memory[addr & ADDRESS_MASK]

    def write(self, addr: int, value: int):
        self.memory[addr & ADDRESS_MASK] = value & 0xFF

    def read_block(self, addr: int, length: int) -> bytes:
        return bytes(self.memory[(addr + i) & ADDRESS_MASK] for i in range(length))

    # =============== Stack ===============
    def push(self, addr: int):
        if self.sp >= STACK_SIZE:
            raise StackOverflowError(
                f"CALL with {STACK_SIZE} return addresses already on the stack")
        self.stack[self.sp] = addr
        self.sp += 1

    def pop(self) -> int:
        if self.sp == 0:
            raise StackUnderflowError("RET with an empty stack")
        self.sp -= 1
        return self.stack[self.sp]

    @property
    def is_paused(self) -> bool:
        return self.paused is not None
