"""Tests for framebuffer rendering."""

import numpy as np
import pytest
from PIL import Image
from nibble8 import framebuffer, framebuffer_to_rgb, create_color_scheme, save_frame
from nibble8.rendering import COLOR_SCHEMES


def test_rgb_shape_and_colors():
    display = np.zeros((64, 32), dtype=np.uint8)
    display[5, 2] = 1

    rgb = framebuffer_to_rgb(display, scale=2, on_color=(1, 2, 3), off_color=(9, 9, 9))

    assert rgb.shape == (64, 128, 3)
    assert tuple(rgb[4, 10]) == (1, 2, 3)  # Row y*2, column x*2
    assert tuple(rgb[5, 11]) == (1, 2, 3)
    assert tuple(rgb[0, 0]) == (9, 9, 9)


def test_unscaled():
    rgb = framebuffer_to_rgb(np.ones((64, 32), dtype=np.uint8), scale=1)
    assert rgb.shape == (32, 64, 3)
    assert (rgb == 255).all()


def test_color_schemes():
    assert create_color_scheme("classic") == ((255, 255, 255), (0, 0, 0))
    with pytest.raises(ValueError):
        create_color_scheme("plaid")


def test_save_frame(tmp_path):
    display = np.zeros((64, 32), dtype=np.uint8)
    display[0, 0] = 1
    path = tmp_path / "frame.png"

    save_frame(display, str(path), scale=4, color_scheme="green")

    image = Image.open(path)
    assert image.size == (256, 128)
    assert image.getpixel((0, 0)) == (0, 255, 0)
    assert image.getpixel((10, 10)) == (0, 0, 0)


def test_renders_state_framebuffer(fresh_state):
    state = fresh_state.replace(display=fresh_state.display.at[63, 31].set(1))

    rgb = framebuffer_to_rgb(framebuffer(state), scale=1, on_color=(7, 7, 7))

    assert rgb.dtype == np.uint8
    assert tuple(rgb[31, 63]) == (7, 7, 7)
    assert int(rgb[:31].sum()) == 0


@pytest.mark.parametrize("scheme", sorted(COLOR_SCHEMES))
def test_every_scheme_renders(scheme):
    on_color, off_color = create_color_scheme(scheme)
    display = np.zeros((64, 32), dtype=np.uint8)
    display[1, 0] = 1

    rgb = framebuffer_to_rgb(display, scale=1, on_color=on_color, off_color=off_color)

    assert tuple(rgb[0, 1]) == on_color
    assert tuple(rgb[0, 0]) == off_color
