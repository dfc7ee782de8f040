from __future__ import annotations

import numpy as np

from .core import hash2d, make_permutation

MINKOWSKI_P = 3.0


def _distance(dx: np.ndarray, dy: np.ndarray, metric: str) -> np.ndarray:
    if metric == "euclidean":
        return np.sqrt(dx * dx + dy * dy)
    adx = np.abs(dx)
    ady = np.abs(dy)
    if metric == "manhattan":
        return adx + ady
    if metric == "chebyshev":
        return np.maximum(adx, ady)
    if metric == "minkowski":
        return (adx**MINKOWSKI_P + ady**MINKOWSKI_P) ** (1.0 / MINKOWSKI_P)
    raise ValueError(f"unknown distance metric: {metric}")


class Worley2D:
    """Cellular noise with one feature point per unit cell."""

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)

    def offset(self, cx: np.ndarray, cy: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Feature point position inside its cell, quantised to 1/256."""
        h = hash2d(self.perm, cx, cy)
        fx = ((h * 127) % 256) / 256.0
        fy = ((h * 311) % 256) / 256.0
        return fx, fy

    def feature_point(self, cx: int, cy: int) -> tuple[float, float]:
        fx, fy = self.offset(int(cx), int(cy))
        return int(cx) + float(fx), int(cy) + float(fy)

    def distances(
        self, x: np.ndarray, y: np.ndarray, *, metric: str = "euclidean"
    ) -> tuple[np.ndarray, np.ndarray]:
        """Nearest (F1) and second-nearest (F2) feature distances over 3x3 cells."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        metric = str(metric)

        xi = np.floor(x).astype(np.int64)
        yi = np.floor(y).astype(np.int64)
        xf = x - xi
        yf = y - yi

        f1 = np.full(np.shape(x), np.inf)
        f2 = np.full(np.shape(x), np.inf)

        for oy in (-1, 0, 1):
            for ox in (-1, 0, 1):
                fx, fy = self.offset(xi + ox, yi + oy)
                d = _distance(ox + fx - xf, oy + fy - yf, metric)
                f2 = np.where(d < f1, f1, np.minimum(f2, d))
                f1 = np.minimum(f1, d)

        return f1, f2
