import io

import numpy as np
import pytest
from PIL import Image

from noiselab.quantize import IMAGE_BYTES_COUNT, RESOLUTION, quantize
from noiselab.render import render_grid
from noiselab.settings import default_settings
from viz.export import (
    color_buffer_to_image,
    color_buffer_to_png_bytes,
    field_to_npy_bytes,
    field_to_png_bytes,
)


def test_color_buffer_to_image_size_and_mode():
    img = color_buffer_to_image(render_grid(default_settings("perlin")))
    assert img.size == (RESOLUTION, RESOLUTION)
    assert img.mode == "RGBA"


def test_color_buffer_to_image_keeps_pixels():
    z = np.zeros((RESOLUTION, RESOLUTION))
    z[3, 7] = -1.0
    img = color_buffer_to_image(quantize(z))
    assert img.getpixel((7, 3)) == (255, 0, 255, 255)
    assert img.getpixel((0, 0)) == (255, 255, 255, 255)


def test_color_buffer_to_image_rejects_wrong_length():
    with pytest.raises(ValueError):
        color_buffer_to_image(b"\x00" * (IMAGE_BYTES_COUNT - 4))


def test_color_buffer_to_png_bytes_roundtrip():
    data = color_buffer_to_png_bytes(quantize(np.zeros((RESOLUTION, RESOLUTION))))
    assert data[:8] == b"\x89PNG\r\n\x1a\n"
    img = Image.open(io.BytesIO(data))
    assert img.size == (RESOLUTION, RESOLUTION)


def test_field_to_png_bytes_maps_signed_range():
    z = np.array([[-1.0, 0.0, 1.0], [-5.0, 5.0, np.nan]])
    img = Image.open(io.BytesIO(field_to_png_bytes(z)))
    assert img.size == (3, 2)
    arr = np.array(img)
    assert arr[0].tolist() == [0, 127, 255]
    assert arr[1].tolist() == [0, 255, 127]


def test_field_to_png_bytes_rejects_non_2d():
    with pytest.raises(ValueError):
        field_to_png_bytes(np.zeros(4))


def test_field_to_npy_bytes_roundtrip():
    z = np.arange(6, dtype=np.float64).reshape(2, 3)
    out = np.load(io.BytesIO(field_to_npy_bytes(z)))
    assert np.array_equal(out, z)
