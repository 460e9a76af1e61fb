"""Emulator settings gathered from the command line and an optional key map file."""
from __future__ import annotations

import argparse
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from .bank import NUM_KEYS
from .keypad import DEFAULT_KEYMAP
from .machine import DEFAULT_SPEED


@dataclass
class EmulatorConfig:
    speed: int = DEFAULT_SPEED  # instructions per frame
    scale: int = 15
    fps: int = 60
    tone_hz: int = 440
    volume: float = 0.2
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
    verbose: bool = False

    def __post_init__(self):
        if self.speed < 1:
            raise ValueError("speed must be at least 1")
        if self.fps < 1:
            raise ValueError("fps must be at least 1")
        self.scale = max(1, int(self.scale))

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "EmulatorConfig":
        keymap = dict(DEFAULT_KEYMAP)
        if getattr(args, "keymap", None):
            keymap.update(load_keymap(args.keymap))
        return cls(
            speed=args.speed,
            scale=args.scale,
            fps=args.fps,
            tone_hz=args.tone,
            keymap=keymap,
            verbose=args.verbose,
        )


def _parse_code(value: Union[int, str]) -> int:
    if isinstance(value, str):
        code = int(value, 0)
    elif isinstance(value, int) and not isinstance(value, bool):
        code = value
    else:
        raise ValueError(f"keypad code must be an int or a string, got {value!r}")
    if not 0 <= code < NUM_KEYS:
        raise ValueError(f"keypad code out of range: {value!r}")
    return code


def load_keymap(path: Union[str, Path]) -> Dict[str, int]:
    """Load a ``{"host key name": keypad code}`` JSON object.

    Codes may be ints or strings such as ``"0xA"``.
    """
    with open(path, 'r') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: key map must be a JSON object")
    return {str(name).upper(): _parse_code(code) for name, code in data.items()}


def build_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog, description="CHIP-8 emulator")
    parser.add_argument("rom", help="Path to CHIP-8 ROM")
    parser.add_argument("--speed", type=int, default=DEFAULT_SPEED,
                        help=f"Instructions executed per frame (default {DEFAULT_SPEED})")
    parser.add_argument("--scale", type=int, default=15,
                        help="Pixel scale factor (default 15)")
    parser.add_argument("--fps", type=int, default=60,
                        help="Frame rate driving timers and execution (default 60)")
    parser.add_argument("--tone", type=int, default=440,
                        help="Beep tone frequency in Hz")
    parser.add_argument("--keymap", metavar="JSON",
                        help="JSON file overriding the keyboard mapping")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging (traces every instruction)")
    return parser
