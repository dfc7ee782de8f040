import numpy as np
import pytest

from noiselab.quantize import IMAGE_BYTES_COUNT, RESOLUTION, quantize, scalar_to_rgba


def _px(v):
    return tuple(int(c) for c in scalar_to_rgba(np.array([v]))[0])


def test_ramp_endpoints():
    assert _px(0.0) == (255, 255, 255, 255)
    assert _px(1.0) == (0, 255, 0, 255)
    assert _px(-1.0) == (255, 0, 255, 255)


def test_ramp_midpoints_truncate():
    assert _px(0.5) == (127, 255, 127, 255)
    assert _px(-0.5) == (255, 127, 255, 255)


def test_out_of_range_saturates():
    assert _px(2.0) == (0, 255, 0, 255)
    assert _px(-3.0) == (255, 0, 255, 255)


def test_non_finite_is_white():
    assert _px(float("nan")) == (255, 255, 255, 255)
    assert _px(float("inf")) == (255, 255, 255, 255)


def test_quantize_buffer_layout():
    z = np.zeros((RESOLUTION, RESOLUTION))
    z[0, 1] = 1.0
    buf = quantize(z)
    assert isinstance(buf, bytes)
    assert len(buf) == IMAGE_BYTES_COUNT
    assert buf[0:4] == bytes([255, 255, 255, 255])
    assert buf[4:8] == bytes([0, 255, 0, 255])


def test_quantize_row_major():
    z = np.array([[0.0, 0.0], [-1.0, 0.0]])
    buf = quantize(z)
    assert len(buf) == 16
    assert buf[8:12] == bytes([255, 0, 255, 255])


def test_quantize_rejects_non_2d():
    with pytest.raises(ValueError):
        quantize(np.zeros(10))
