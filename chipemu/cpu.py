"""
CHIP-8 interpreter engine: fetch, decode and execute.

Notes:
- PC is advanced past the instruction before it executes, so jumps and calls
  overwrite the advanced value and skips add 2 more.
- 8xy6 / 8xyE shift Vx in place (Vy is ignored).
- Fx55 / Fx65 leave I unchanged.
- Fx0A does not block: it records the target register in ``bank.paused`` and
  the frame driver stops executing until a key press clears it.
- Unknown opcodes are no-ops.
"""
from __future__ import annotations

import logging
import random
from typing import Optional

from .bank import FONT_ADDRESS, FONT_GLYPH_SIZE, NUM_KEYS, Bank
from .display import Display

logger = logging.getLogger(__name__)


class Cpu:
    def __init__(self, bank: Bank, display: Display, rng: Optional[random.Random] = None):
        self.bank = bank
        self.display = display
        self.rng = rng if rng is not None else random.Random()

    # =============== Core fetch/decode/execute cycle ===============
    def fetch(self) -> int:
        bank = self.bank
        return (bank.read(bank.pc) << 8) | bank.read(bank.pc + 1)

    def step(self):
        opcode = self.fetch()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%03X: %04X", self.bank.pc, opcode)
        self.bank.pc = (self.bank.pc + 2) & 0xFFFF
        self.perform(opcode)

    def perform(self, opcode: int):
        b = self.bank
        V = b.V

        op = opcode >> 12
        nnn = opcode & 0x0FFF
        n = opcode & 0x000F
        x = (opcode & 0x0F00) >> 8
        y = (opcode & 0x00F0) >> 4
        kk = opcode & 0x00FF

        if op == 0x0:
            if opcode == 0x00E0:  # CLS
                self.display.clear()
            elif opcode == 0x00EE:  # RET
                b.pc = b.pop()
            # 0nnn (SYS addr) is ignored
        elif op == 0x1:  # JP addr
            b.pc = nnn
        elif op == 0x2:  # CALL addr
            b.push(b.pc)
            b.pc = nnn
        elif op == 0x3:  # SE Vx, byte
            if V[x] == kk:
                self._skip()
        elif op == 0x4:  # SNE Vx, byte
            if V[x] != kk:
                self._skip()
        elif op == 0x5:  # SE Vx, Vy
            if V[x] == V[y]:
                self._skip()
        elif op == 0x6:  # LD Vx, byte
            V[x] = kk
        elif op == 0x7:  # ADD Vx, byte
            V[x] = (V[x] + kk) & 0xFF
        elif op == 0x8:
            self._alu(n, x, y)
        elif op == 0x9:  # SNE Vx, Vy
            if V[x] != V[y]:
                self._skip()
        elif op == 0xA:  # LD I, addr
            b.I = nnn
        elif op == 0xB:  # JP V0, addr
            b.pc = nnn + V[0]
        elif op == 0xC:  # RND Vx, byte
            V[x] = self.rng.randint(0, 255) & kk
        elif op == 0xD:  # DRW Vx, Vy, nibble
            sprite = b.read_block(b.I, n)
            V[0xF] = 1 if self.display.draw(sprite, V[x], V[y]) else 0
        elif op == 0xE:
            if kk == 0x9E:  # SKP Vx
                if self._is_key_down(V[x]):
                    self._skip()
            elif kk == 0xA1:  # SKNP Vx
                if not self._is_key_down(V[x]):
                    self._skip()
        elif op == 0xF:
            self._misc(kk, x)

    # =============== Opcode families ===============
    def _alu(self, n: int, x: int, y: int):
        V = self.bank.V
        if n == 0x0:  # LD Vx, Vy
            V[x] = V[y]
        elif n == 0x1:  # OR Vx, Vy
            V[x] |= V[y]
        elif n == 0x2:  # AND Vx, Vy
            V[x] &= V[y]
        elif n == 0x3:  # XOR Vx, Vy
            V[x] ^= V[y]
        elif n == 0x4:  # ADD Vx, Vy
            total = V[x] + V[y]
            V[0xF] = 1 if total > 0xFF else 0
            V[x] = total & 0xFF
        elif n == 0x5:  # SUB Vx, Vy (Vx = Vx - Vy)
            vx, vy = V[x], V[y]
            V[0xF] = 1 if vx >= vy else 0
            V[x] = (vx - vy) & 0xFF
        elif n == 0x6:  # SHR Vx {, Vy}
            vx = V[x]
            V[0xF] = vx & 0x1
            V[x] = vx >> 1
        elif n == 0x7:  # SUBN Vx, Vy (Vx = Vy - Vx)
            vx, vy = V[x], V[y]
            V[0xF] = 1 if vy >= vx else 0
            V[x] = (vy - vx) & 0xFF
        elif n == 0xE:  # SHL Vx {, Vy}
            vx = V[x]
            V[0xF] = (vx >> 7) & 0x1
            V[x] = (vx << 1) & 0xFF

    def _misc(self, kk: int, x: int):
        b = self.bank
        V = b.V
        if kk == 0x07:  # LD Vx, DT
            V[x] = b.delay_timer
        elif kk == 0x0A:  # LD Vx, K
            b.paused = x
            logger.debug("waiting for key press into V%X", x)
        elif kk == 0x15:  # LD DT, Vx
            b.delay_timer = V[x]
        elif kk == 0x18:  # LD ST, Vx
            b.sound_timer = V[x]
        elif kk == 0x1E:  # ADD I, Vx
            b.I = (b.I + V[x]) & 0xFFFF
        elif kk == 0x29:  # LD F, Vx
            b.I = FONT_ADDRESS + V[x] * FONT_GLYPH_SIZE
        elif kk == 0x33:  # LD B, Vx (BCD)
            val = V[x]
            b.write(b.I, val // 100)
            b.write(b.I + 1, (val // 10) % 10)
            b.write(b.I + 2, val % 10)
        elif kk == 0x55:  # LD [I], Vx
            for i in range(x + 1):
                b.write(b.I + i, V[i])
        elif kk == 0x65:  # LD Vx, [I]
            for i in range(x + 1):
                V[i] = b.read(b.I + i)

    # =============== Helpers ===============
    def _skip(self):
        self.bank.pc = (self.bank.pc + 2) & 0xFFFF

    def _is_key_down(self, chip8_key: int) -> bool:
        if 0 <= chip8_key < NUM_KEYS:
            return self.bank.keys[chip8_key]
        return False
