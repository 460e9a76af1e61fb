"""Input gate transitions and the host key map."""

import pytest

from chipemu.bank import Bank
from chipemu.keypad import DEFAULT_KEYMAP, Keypad, RegisterWrite, apply_key_event


def test_press_and_release_update_status() -> None:
    bank = Bank()
    assert apply_key_event(bank, 0x5, True) is None
    assert bank.keys[0x5] is True
    assert apply_key_event(bank, 0x5, False) is None
    assert bank.keys[0x5] is False


def test_press_while_waiting_writes_register_and_resumes() -> None:
    bank = Bank()
    bank.paused = 3
    write = apply_key_event(bank, 0xB, True)
    assert write == RegisterWrite(register=3, value=0xB)
    assert bank.V[3] == 0xB
    assert bank.paused is None


def test_release_while_waiting_keeps_waiting() -> None:
    bank = Bank()
    bank.keys[0x2] = True
    bank.paused = 0
    assert apply_key_event(bank, 0x2, False) is None
    assert bank.paused == 0
    assert bank.V[0] == 0


def test_key_held_before_wait_must_be_repressed() -> None:
    bank = Bank()
    apply_key_event(bank, 0x7, True)
    bank.paused = 1

    # repeated report of the held key is not a transition
    assert apply_key_event(bank, 0x7, True) is None
    assert bank.paused == 1

    apply_key_event(bank, 0x7, False)
    assert bank.paused == 1
    assert apply_key_event(bank, 0x7, True) == RegisterWrite(1, 0x7)
    assert bank.paused is None


def test_only_first_press_is_consumed() -> None:
    bank = Bank()
    bank.paused = 2
    apply_key_event(bank, 0x1, True)
    apply_key_event(bank, 0x9, True)
    assert bank.V[2] == 0x1
    assert bank.keys[0x9] is True


def test_rejects_keycode_outside_keypad() -> None:
    with pytest.raises(ValueError):
        apply_key_event(Bank(), 16, True)


def test_default_keymap_has_sixteen_keys() -> None:
    assert len(DEFAULT_KEYMAP) == 16
    assert sorted(DEFAULT_KEYMAP.values()) == list(range(16))


class TestKeypad:
    def test_forwards_mapped_keys_case_insensitively(self) -> None:
        events = []
        keypad = Keypad(lambda code, down: events.append((code, down)))
        keypad.pressed("q")
        keypad.released("Q")
        keypad.pressed("x")
        assert events == [(0x4, True), (0x4, False), (0x0, True)]

    def test_ignores_unmapped_keys(self) -> None:
        events = []
        keypad = Keypad(lambda code, down: events.append((code, down)))
        assert not keypad.is_valid("p")
        keypad.pressed("p")
        assert events == []

    def test_remap(self) -> None:
        keypad = Keypad()
        keypad.set_key_map("up", 0x2)
        assert keypad.is_valid("UP")
        assert keypad.lookup("Up") == 0x2

    def test_remap_rejects_bad_code(self) -> None:
        with pytest.raises(ValueError):
            Keypad().set_key_map("k", 0x10)

    def test_custom_map_replaces_default(self) -> None:
        keypad = Keypad(keymap={"left": 0x4})
        assert keypad.lookup("left") == 0x4
        assert not keypad.is_valid("1")

    def test_returns_register_write_from_listener(self) -> None:
        bank = Bank()
        bank.paused = 6
        keypad = Keypad(lambda code, down: apply_key_event(bank, code, down))
        assert keypad.pressed("v") == RegisterWrite(6, 0xF)
