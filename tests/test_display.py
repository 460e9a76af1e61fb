"""Display surface: XOR blit, collision reporting and toroidal wrap."""

import pytest

from chipemu.display import Display


def lit(display):
    return {(i % display.width, i // display.width)
            for i, v in enumerate(display.pixels) if v}


def test_default_size_is_64_by_32() -> None:
    display = Display()
    assert (display.width, display.height) == (64, 32)
    assert len(display.pixels) == 64 * 32


def test_rejects_empty_dimensions() -> None:
    with pytest.raises(ValueError):
        Display(0, 32)


def test_draw_msb_is_leftmost() -> None:
    display = Display()
    erased = display.draw([0b10000001], 10, 5)
    assert not erased
    assert lit(display) == {(10, 5), (17, 5)}


def test_draw_twice_restores_and_reports_erase() -> None:
    display = Display()
    sprite = [0xF0, 0x90, 0xF0]
    assert display.draw(sprite, 3, 4) is False
    assert display.draw(sprite, 3, 4) is True
    assert lit(display) == set()


def test_erase_is_aggregated_over_whole_sprite() -> None:
    display = Display()
    display.draw([0x80], 0, 2)
    # only the last row overlaps
    assert display.draw([0x01, 0x01, 0x80], 0, 0) is True
    assert display.pixel(0, 2) == 0


def test_overlap_on_unset_bits_is_not_a_collision() -> None:
    display = Display()
    display.draw([0x0F], 0, 0)
    assert display.draw([0xF0], 0, 0) is False
    assert display.pixels[:8] == [1] * 8


def test_wraps_from_bottom_right_to_top_left() -> None:
    display = Display()
    display.draw([0xC0, 0xC0], 63, 31)
    assert lit(display) == {(63, 31), (0, 31), (63, 0), (0, 0)}


def test_origin_beyond_bounds_wraps() -> None:
    display = Display()
    display.draw([0x80], 64 + 2, 32 + 3)
    assert lit(display) == {(2, 3)}


def test_clear() -> None:
    display = Display()
    display.draw([0xFF] * 4, 0, 0)
    display.dirty = False
    display.clear()
    assert lit(display) == set()
    assert display.dirty


def test_pixel_hook_sees_only_changes() -> None:
    changes = []
    display = Display(on_pixel_changed=lambda x, y, v: changes.append((x, y, v)))
    display.draw([0xA0], 0, 0)
    assert changes == [(0, 0, 1), (2, 0, 1)]

    changes.clear()
    display.clear()
    assert sorted(changes) == [(0, 0, 0), (2, 0, 0)]


def test_hook_does_not_change_logic() -> None:
    plain = Display()
    hooked = Display(on_pixel_changed=lambda x, y, v: None)
    for d in (plain, hooked):
        d.draw([0x3C, 0x42], 60, 30)
    assert plain.pixels == hooked.pixels


def test_rows() -> None:
    display = Display(8, 2)
    display.draw([0x00, 0xFF], 0, 0)
    assert list(display.rows()) == [[0] * 8, [1] * 8]
