from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .core import hash2d, hash_unit, make_permutation

JITTER = 0.8
MIN_WEIGHT = 0.001


@dataclass(frozen=True)
class Impulse:
    x: float
    y: float
    theta: float
    phi: float


class Gabor2D:
    """Sparse convolution noise with one Gabor impulse per unit cell.

    A cell's impulse (position, orientation, phase) depends only on the
    cell's `hash2d` entry, so every query sees the same impulse for it.
    """

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)
        # Per-hash impulse parameters, indexed by the cell's table entry.
        table = np.array(
            [[hash_unit(h, k) for h in range(256)] for k in range(4)],
            dtype=np.float64,
        )
        self._jitter_x = (table[0] - 0.5) * JITTER
        self._jitter_y = (table[1] - 0.5) * JITTER
        self._theta = table[2] * 2.0 * math.pi
        self._phi = table[3] * 2.0 * math.pi

    def impulse(self, cx: int, cy: int) -> Impulse:
        h = int(hash2d(self.perm, int(cx), int(cy)))
        return Impulse(
            x=int(cx) + 0.5 + float(self._jitter_x[h]),
            y=int(cy) + 0.5 + float(self._jitter_y[h]),
            theta=float(self._theta[h]),
            phi=float(self._phi[h]),
        )

    def noise(
        self,
        x: np.ndarray,
        y: np.ndarray,
        *,
        frequency: float,
        bandwidth: float,
        kernel_radius: int,
    ) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        frequency = float(frequency)
        bandwidth = float(bandwidth)
        if bandwidth <= 0.0:
            raise ValueError("bandwidth must be > 0")

        max_dist = float(kernel_radius) * bandwidth
        max_dist_sq = max_dist * max_dist
        cell_radius = int(math.ceil(max_dist))

        cell_x = np.floor(x).astype(np.int64)
        cell_y = np.floor(y).astype(np.int64)

        total = np.zeros_like(x)
        weight = np.zeros_like(x)

        for oy in range(-cell_radius, cell_radius + 1):
            for ox in range(-cell_radius, cell_radius + 1):
                cx = cell_x + ox
                cy = cell_y + oy
                h = hash2d(self.perm, cx, cy)

                dx = x - (cx + 0.5 + self._jitter_x[h])
                dy = y - (cy + 0.5 + self._jitter_y[h])
                dist_sq = dx * dx + dy * dy
                inside = dist_sq <= max_dist_sq

                theta = self._theta[h]
                gaussian = np.exp(-math.pi * dist_sq / (bandwidth * bandwidth))
                u = dx * np.cos(theta) - dy * np.sin(theta)
                harmonic = np.cos(frequency * u + self._phi[h])

                total += np.where(inside, gaussian * harmonic, 0.0)
                weight += np.where(inside, gaussian, 0.0)

        out = np.zeros_like(total)
        signal = weight > MIN_WEIGHT
        np.divide(total, np.sqrt(weight), out=out, where=signal)
        return out
