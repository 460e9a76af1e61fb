import random

import pytest

from chipemu.machine import Machine


class RecordingTone:
    """Tone sink that remembers every gate change."""

    def __init__(self):
        self.playing = False
        self.calls = []

    def play(self):
        self.playing = True
        self.calls.append("play")

    def stop(self):
        self.playing = False
        self.calls.append("stop")


def assemble_words(*words: int) -> bytes:
    """Pack 16-bit opcodes into big-endian program bytes."""
    out = bytearray()
    for word in words:
        out += word.to_bytes(2, "big")
    return bytes(out)


@pytest.fixture
def assemble():
    return assemble_words


@pytest.fixture
def tone():
    return RecordingTone()


@pytest.fixture
def machine(tone):
    m = Machine(speed=1, tone=tone, rng=random.Random(1234))
    return m


@pytest.fixture
def bank(machine):
    return machine.bank


@pytest.fixture
def cpu(machine):
    return machine.cpu
