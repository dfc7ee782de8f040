from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .core import fade, grad2_from_hash, grad_dot, hash2d, lerp, make_permutation


@dataclass(frozen=True)
class Corner2D:
    gx: float
    gy: float
    dx: float
    dy: float
    dot: float


class Perlin2D:
    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)

    def noise(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        xi = np.floor(x).astype(np.int64)
        yi = np.floor(y).astype(np.int64)

        xf = x - xi
        yf = y - yi
        u = fade(xf)
        v = fade(yf)

        p = self.perm
        aa = hash2d(p, xi, yi)
        ab = hash2d(p, xi, yi + 1)
        ba = hash2d(p, xi + 1, yi)
        bb = hash2d(p, xi + 1, yi + 1)

        x_lerp0 = lerp(grad_dot(aa, xf, yf), grad_dot(ba, xf - 1.0, yf), u)
        x_lerp1 = lerp(
            grad_dot(ab, xf, yf - 1.0), grad_dot(bb, xf - 1.0, yf - 1.0), u
        )
        return lerp(x_lerp0, x_lerp1, v)

    def noise_dot_products(self, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        """Show each corner's dot product on its own quadrant of the cell.

        The quadrant containing the point picks one corner; the in-quadrant
        offset is stretched back to [0, 1), faded, and dotted with that
        corner's gradient. No blending between corners happens.
        """

        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        xi = np.floor(x).astype(np.int64)
        yi = np.floor(y).astype(np.int64)
        xf = x - xi
        yf = y - yi

        right = xf >= 0.5
        bottom = yf >= 0.5

        h = hash2d(self.perm, xi + right, yi + bottom)
        u = fade(np.where(right, xf - 0.5, xf) * 2.0)
        v = fade(np.where(bottom, yf - 0.5, yf) * 2.0)
        return grad_dot(h, u, v)

    def sample(
        self, x: np.ndarray, y: np.ndarray, *, dot_products: bool = False
    ) -> np.ndarray:
        if dot_products:
            return self.noise_dot_products(x, y)
        return self.noise(x, y)

    def gradient_at(self, ix: int, iy: int) -> tuple[float, float]:
        gx, gy = grad2_from_hash(hash2d(self.perm, int(ix), int(iy)))
        return float(gx), float(gy)

    def debug_point(self, x: float, y: float) -> dict:
        # Scalar breakdown for inspection.
        xf = float(x)
        yf = float(y)
        xi0 = math.floor(xf)
        yi0 = math.floor(yf)

        xrel = xf - xi0
        yrel = yf - yi0

        u = float(fade(np.array(xrel, dtype=np.float64)))
        v = float(fade(np.array(yrel, dtype=np.float64)))

        p = self.perm
        aa = int(hash2d(p, xi0, yi0))
        ab = int(hash2d(p, xi0, yi0 + 1))
        ba = int(hash2d(p, xi0 + 1, yi0))
        bb = int(hash2d(p, xi0 + 1, yi0 + 1))

        def corner(h: int, dx: float, dy: float) -> Corner2D:
            gx, gy = grad2_from_hash(np.array(h))
            gx = float(gx)
            gy = float(gy)
            return Corner2D(gx=gx, gy=gy, dx=dx, dy=dy, dot=(gx * dx + gy * dy))

        c00 = corner(aa, xrel, yrel)
        c10 = corner(ba, xrel - 1.0, yrel)
        c01 = corner(ab, xrel, yrel - 1.0)
        c11 = corner(bb, xrel - 1.0, yrel - 1.0)

        x_lerp0 = c00.dot + u * (c10.dot - c00.dot)
        x_lerp1 = c01.dot + u * (c11.dot - c01.dot)
        n = x_lerp0 + v * (x_lerp1 - x_lerp0)

        return {
            "seed": self.seed,
            "input": {"x": xf, "y": yf},
            "cell": {"xi0": xi0, "yi0": yi0, "xi1": xi0 + 1, "yi1": yi0 + 1},
            "relative": {"xf": xrel, "yf": yrel},
            "fade": {"u": u, "v": v},
            "hash": {"aa": aa, "ab": ab, "ba": ba, "bb": bb},
            "corners": {
                "c00": c00.__dict__,
                "c10": c10.__dict__,
                "c01": c01.__dict__,
                "c11": c11.__dict__,
            },
            "interpolation": {
                "x_lerp0": float(x_lerp0),
                "x_lerp1": float(x_lerp1),
            },
            "noise": float(n),
        }
