"""Tests for the XOR framebuffer."""

from __future__ import annotations

import pytest

from pychip8.video import HEIGHT, WIDTH, Framebuffer


def count_set(fb: Framebuffer) -> int:
    return sum(1 for pixel in fb.pixels() if pixel)


def test_dimensions() -> None:
    fb = Framebuffer()

    assert (fb.width, fb.height) == (WIDTH, HEIGHT) == (64, 32)
    assert len(fb) == 64 * 32


def test_blit_msb_is_leftmost() -> None:
    fb = Framebuffer()
    fb.blit(0, 0, [0b1000_0001])

    assert fb.is_set(0, 0)
    assert fb.is_set(7, 0)
    assert count_set(fb) == 2


def test_blit_right_edge_clips_without_wrapping() -> None:
    fb = Framebuffer()

    collision = fb.blit(60, 0, [0xFF])

    assert collision is False
    assert all(fb.is_set(x, 0) for x in range(60, 64))
    assert not fb.is_set(0, 1)
    assert not fb.is_set(0, 0)
    assert count_set(fb) == 4


def test_blit_bottom_edge_clips_without_wrapping() -> None:
    fb = Framebuffer()

    fb.blit(0, 30, [0x80] * 5)

    assert fb.is_set(0, 30)
    assert fb.is_set(0, 31)
    assert not fb.is_set(0, 0)
    assert count_set(fb) == 2


def test_offscreen_bits_never_collide() -> None:
    fb = Framebuffer()
    fb.blit(63, 0, [0x80])

    # Only the leftmost bit lands on screen; it erases the pixel set above.
    assert fb.blit(63, 0, [0xFF]) is True
    assert count_set(fb) == 0
    assert fb.blit(64, 0, [0xFF]) is False
    assert fb.blit(0, 32, [0xFF]) is False
    assert count_set(fb) == 0


def test_collision_only_on_erase() -> None:
    fb = Framebuffer()
    fb.blit(0, 0, [0xF0])

    assert fb.blit(4, 0, [0xF0]) is False
    assert fb.blit(2, 0, [0x80]) is True
    assert not fb.is_set(2, 0)


def test_xor_twice_restores_original() -> None:
    fb = Framebuffer()
    fb.blit(5, 5, [0x3C, 0x42, 0x81])
    before = list(fb.pixels())

    fb.blit(10, 7, [0xAA, 0x55])
    fb.blit(10, 7, [0xAA, 0x55])

    assert list(fb.pixels()) == before


def test_clear_resets_every_pixel() -> None:
    fb = Framebuffer()
    fb.blit(0, 0, [0xFF] * 15)

    fb.clear()

    assert count_set(fb) == 0


def test_rows_render_text() -> None:
    fb = Framebuffer(8, 2)
    fb.blit(0, 0, [0xC0, 0x01])

    assert list(fb.rows()) == ["##......", ".......#"]


def test_get_pixel_bounds_checked() -> None:
    fb = Framebuffer()

    with pytest.raises(IndexError):
        fb.get_pixel(64, 0)
