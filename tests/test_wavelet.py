import numpy as np
import pytest

from noiselab.wavelet import TILE_SIZE, Wavelet2D, haar_1d, haar_2d, make_tile


def test_haar_1d_known_vector():
    out = haar_1d(np.array([1.0, 3.0, 5.0, 9.0]))
    assert np.allclose(out, [2.0, 7.0, -1.0, -2.0])


def test_haar_2d_constant_tile():
    out = haar_2d(np.full((4, 4), 3.0))
    expected = np.zeros((4, 4))
    expected[:2, :2] = 3.0
    assert np.allclose(out, expected)


def test_make_tile_shape_and_read_only():
    tile = make_tile(5, size=16)
    assert tile.shape == (16, 16)
    assert np.isfinite(tile).all()
    assert not tile.flags.writeable


def test_make_tile_rejects_bad_size():
    with pytest.raises(ValueError):
        make_tile(0, size=15)
    with pytest.raises(ValueError):
        make_tile(0, size=0)


def test_make_tile_deterministic_and_seeded():
    assert np.array_equal(make_tile(1, size=8), make_tile(1, size=8))
    assert not np.allclose(make_tile(1, size=8), make_tile(2, size=8))


def test_make_tile_is_mean_centred():
    # The Haar averages keep the mean, so the coarse quadrant averages to ~0.
    tile = make_tile(9, size=32)
    assert abs(float(tile[:16, :16].mean())) < 1e-12


def test_wavelet_tile_size():
    w = Wavelet2D(seed=3)
    assert w.size == TILE_SIZE
    assert w.tile.shape == (TILE_SIZE, TILE_SIZE)


def test_wavelet_matches_tile_at_integer_points():
    w = Wavelet2D(seed=3)
    for ix, iy in [(0, 0), (5, 17), (127, 64)]:
        assert float(w.noise(float(ix), float(iy))) == float(w.tile[iy, ix])


def test_wavelet_wraps_toroidally():
    w = Wavelet2D(seed=3)
    xg, yg = np.meshgrid(np.linspace(-3.0, 3.0, 33), np.linspace(0.0, 5.0, 17))
    z = w.noise(xg, yg)
    assert np.allclose(w.noise(xg + TILE_SIZE, yg), z)
    assert np.allclose(w.noise(xg, yg - TILE_SIZE), z)


def test_wavelet_bounded_range():
    w = Wavelet2D(seed=42)
    xg, yg = np.meshgrid(np.linspace(-200, 200, 401), np.linspace(-200, 200, 401))
    z = w.noise(xg, yg)
    assert np.isfinite(z).all()
    assert float(np.abs(z).max()) <= 1.0
