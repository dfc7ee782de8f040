from __future__ import annotations

import numpy as np

from .core import hash_signed, lerp

TILE_SIZE = 128


def haar_1d(data: np.ndarray) -> np.ndarray:
    """One Haar step along the last axis.

    Pairwise averages fill the first half, pairwise half-differences the
    second half.
    """

    data = np.asarray(data, dtype=np.float64)
    even = data[..., 0::2]
    odd = data[..., 1::2]
    return np.concatenate([(even + odd) * 0.5, (even - odd) * 0.5], axis=-1)


def haar_2d(tile: np.ndarray) -> np.ndarray:
    rows = haar_1d(tile)
    return haar_1d(rows.T).T


def make_tile(seed: int, *, size: int = TILE_SIZE) -> np.ndarray:
    """Mean-centred, Haar-decomposed tile of hashed values in row-major order."""
    size = int(size)
    if size <= 0 or size % 2:
        raise ValueError("tile size must be a positive even number")

    values = np.array(
        [hash_signed(i, seed) for i in range(size * size)], dtype=np.float64
    ).reshape(size, size)
    values -= values.mean()
    tile = haar_2d(values)
    tile.flags.writeable = False
    return tile


class Wavelet2D:
    """Bilinear lookup into a periodic wavelet noise tile."""

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.tile = make_tile(self.seed)

    @property
    def size(self) -> int:
        return int(self.tile.shape[0])

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        n = self.size

        xi = np.floor(x).astype(np.int64)
        yi = np.floor(y).astype(np.int64)
        fx = x - xi
        fy = y - yi

        x0 = np.mod(xi, n)
        x1 = np.mod(xi + 1, n)
        y0 = np.mod(yi, n)
        y1 = np.mod(yi + 1, n)

        t = self.tile
        v0 = lerp(t[y0, x0], t[y0, x1], fx)
        v1 = lerp(t[y1, x0], t[y1, x1], fx)
        return lerp(v0, v1, fy)
