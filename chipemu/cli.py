"""
Command line entry point.

Run:
  chipemu path/to/rom [--speed 10] [--scale 15] [--tone 440] [--keymap keys.json]

Escape quits, F5 reloads the ROM.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import EmulatorConfig, build_parser
from .errors import Chip8Error

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser(prog="chipemu")
    args = parser.parse_args(argv)

    try:
        config = EmulatorConfig.from_args(args)
    except (OSError, ValueError) as e:
        parser.error(str(e))

    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s")

    try:
        rom = Path(args.rom).read_bytes()
    except OSError as e:
        print(f"chipemu: cannot read ROM: {e}", file=sys.stderr)
        return 1

    # pygame is only needed once there is a ROM to show
    import pygame

    from .frontend import Frontend, PygameTone
    from .machine import Machine

    pygame.mixer.pre_init(44100, -16, 1, 256)
    pygame.init()
    try:
        tone = PygameTone(config.tone_hz, config.volume)
        machine = Machine(speed=config.speed, tone=tone)
        try:
            machine.load(rom)
        except Chip8Error as e:
            print(f"chipemu: {e}", file=sys.stderr)
            return 1
        frontend = Frontend(machine, config, rom)
        try:
            frontend.run()
        except Chip8Error as e:
            logger.error("execution stopped at PC %03X: %s", machine.bank.pc, e)
            return 1
    finally:
        pygame.quit()
    return 0

