from __future__ import annotations

import numpy as np

from .gradient import Perlin2D

MIN_ANISOTROPY = 0.1


class Anisotropic2D:
    """Gradient noise stretched along one axis and rotated.

    The y axis is compressed by `1 / max(anisotropy, 0.1)` before the
    rotation, so features grow `anisotropy` times longer across the
    direction given by `angle` (radians).
    """

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.base = Perlin2D(seed=self.seed)

    @property
    def perm(self) -> np.ndarray:
        return self.base.perm

    @staticmethod
    def transform(
        x: np.ndarray, y: np.ndarray, *, angle: float, anisotropy: float
    ) -> tuple[np.ndarray, np.ndarray]:
        sx = np.asarray(x, dtype=np.float64)
        sy = np.asarray(y, dtype=np.float64) / max(float(anisotropy), MIN_ANISOTROPY)

        cos_a = np.cos(float(angle))
        sin_a = np.sin(float(angle))
        return sx * cos_a - sy * sin_a, sx * sin_a + sy * cos_a

    def noise(
        self, x: np.ndarray, y: np.ndarray, *, angle: float, anisotropy: float
    ) -> np.ndarray:
        rx, ry = self.transform(x, y, angle=angle, anisotropy=anisotropy)
        return self.base.noise(rx, ry)
