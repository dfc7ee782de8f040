from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .core import grad2_from_hash, grad_dot, hash2d, make_permutation

F2 = 0.5 * (math.sqrt(3.0) - 1.0)
G2 = (3.0 - math.sqrt(3.0)) / 6.0


@dataclass(frozen=True)
class SimplexCorners:
    """Triangle containing a point, in skewed lattice coordinates.

    The corners are `(i, j)`, `(i + i1, j + j1)` and `(i + 1, j + 1)`;
    `gi0..gi2` are their gradient hashes.
    """

    i: int
    j: int
    i1: int
    j1: int
    gi0: int
    gi1: int
    gi2: int


def _corner(h: np.ndarray, dx: np.ndarray, dy: np.ndarray) -> np.ndarray:
    t = np.maximum(0.5 - dx * dx - dy * dy, 0.0)
    t2 = t * t
    return t2 * t2 * grad_dot(h, dx, dy)


class Simplex2D:
    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)

    def _skew(self, x: np.ndarray, y: np.ndarray):
        s = (x + y) * F2
        i = np.floor(x + s)
        j = np.floor(y + s)

        t = (i + j) * G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        lower = x0 > y0
        i1 = lower.astype(np.int64)
        j1 = 1 - i1
        return i.astype(np.int64), j.astype(np.int64), x0, y0, i1, j1

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        i, j, x0, y0, i1, j1 = self._skew(x, y)

        x1 = x0 - i1 + G2
        y1 = y0 - j1 + G2
        x2 = x0 - 1.0 + 2.0 * G2
        y2 = y0 - 1.0 + 2.0 * G2

        p = self.perm
        # Row-major fold: j picks the outer table entry.
        gi0 = hash2d(p, j, i)
        gi1 = hash2d(p, j + j1, i + i1)
        gi2 = hash2d(p, j + 1, i + 1)

        n0 = _corner(gi0, x0, y0)
        n1 = _corner(gi1, x1, y1)
        n2 = _corner(gi2, x2, y2)
        return 70.0 * (n0 + n1 + n2)

    def gradient_at(self, i: int, j: int) -> tuple[float, float]:
        gx, gy = grad2_from_hash(hash2d(self.perm, int(j), int(i)))
        return float(gx), float(gy)

    def corners(self, x: float, y: float) -> SimplexCorners:
        i, j, _, _, i1, j1 = self._skew(
            np.asarray(float(x), dtype=np.float64),
            np.asarray(float(y), dtype=np.float64),
        )
        i = int(i)
        j = int(j)
        i1 = int(i1)
        j1 = int(j1)
        p = self.perm
        return SimplexCorners(
            i=i,
            j=j,
            i1=i1,
            j1=j1,
            gi0=int(hash2d(p, j, i)),
            gi1=int(hash2d(p, j + j1, i + i1)),
            gi2=int(hash2d(p, j + 1, i + 1)),
        )
