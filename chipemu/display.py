"""Monochrome pixel grid with the CHIP-8 XOR sprite blit."""
from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Optional

SCREEN_W, SCREEN_H = 64, 32

PixelHook = Callable[[int, int, int], None]


class Display:
    """A ``width`` x ``height`` grid of 0/1 pixels stored row-major.

    ``on_pixel_changed(x, y, value)`` is called for every pixel whose value
    actually changes, for renderers that update incrementally. ``dirty`` is set
    by every clear/draw and is left for the renderer to reset.
    """

    def __init__(self, width: int = SCREEN_W, height: int = SCREEN_H,
                 on_pixel_changed: Optional[PixelHook] = None):
        if width <= 0 or height <= 0:
            raise ValueError("display dimensions must be positive")
        self.width = width
        self.height = height
        self.on_pixel_changed = on_pixel_changed
        self.pixels: List[int] = [0] * (width * height)
        self.dirty = True

    def pixel(self, x: int, y: int) -> int:
        return self.pixels[(y % self.height) * self.width + (x % self.width)]

    def rows(self) -> Iterator[List[int]]:
        for y in range(self.height):
            yield self.pixels[y * self.width:(y + 1) * self.width]

    def clear(self):
        hook = self.on_pixel_changed
        if hook is not None:
            for idx, value in enumerate(self.pixels):
                if value:
                    hook(idx % self.width, idx // self.width, 0)
        self.pixels = [0] * (self.width * self.height)
        self.dirty = True

    def draw(self, sprite: Iterable[int], x: int, y: int) -> bool:
        """XOR ``sprite`` (one byte per row, MSB leftmost) onto the grid at (x, y).

        Coordinates wrap on both axes. Returns True when at least one lit pixel
        was switched off by the blit.
        """
        erased = False
        hook = self.on_pixel_changed
        for row, line in enumerate(sprite):
            py = (y + row) % self.height
            for col in range(8):
                if not (line >> (7 - col)) & 1:
                    continue
                px = (x + col) % self.width
                idx = py * self.width + px
                if self.pixels[idx]:
                    erased = True
                self.pixels[idx] ^= 1
                if hook is not None:
                    hook(px, py, self.pixels[idx])
        self.dirty = True
        return erased
