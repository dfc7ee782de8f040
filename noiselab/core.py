from __future__ import annotations

import numpy as np

_MASK32 = 0xFFFFFFFF

_SQ5_BIT_NOISE1 = 0xD2A80A3F
_SQ5_BIT_NOISE2 = 0xA884F197
_SQ5_BIT_NOISE3 = 0x6C736F4B
_SQ5_BIT_NOISE4 = 0xB79F3ABB
_SQ5_BIT_NOISE5 = 0x1B56C4F5


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve used by Improved Perlin Noise (2002)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def hash_u32(index: int, seed: int) -> int:
    """Squirrel Eiserloh's SquirrelNoise5 integer hash.

    Stateless: the same `(index, seed)` pair always gives the same 32-bit
    value. All arithmetic wraps modulo 2**32.
    """

    bits = (int(index) & _MASK32) * _SQ5_BIT_NOISE1 & _MASK32
    bits = (bits + (int(seed) & _MASK32)) & _MASK32
    bits ^= bits >> 9
    bits = (bits + _SQ5_BIT_NOISE2) & _MASK32
    bits ^= bits >> 11
    bits = (bits * _SQ5_BIT_NOISE3) & _MASK32
    bits ^= bits >> 13
    bits = (bits + _SQ5_BIT_NOISE4) & _MASK32
    bits ^= bits >> 15
    bits = (bits * _SQ5_BIT_NOISE5) & _MASK32
    bits ^= bits >> 17
    return bits


def hash_unit(index: int, seed: int) -> float:
    """Hash mapped into [0, 1)."""
    return hash_u32(index, seed) / 4294967296.0


def hash_signed(index: int, seed: int) -> float:
    """Hash reinterpreted as a signed 32-bit int and mapped into [-1, 1)."""
    h = hash_u32(index, seed)
    if h >= 0x80000000:
        h -= 0x100000000
    return h / 2147483648.0


def make_permutation(seed: int) -> np.ndarray:
    """Seeded Fisher-Yates shuffle of 0..255 driven by `hash_u32`."""
    seed = int(seed) & _MASK32
    p = list(range(256))
    for i in range(255, 0, -1):
        j = hash_u32(i, seed) % (i + 1)
        p[i], p[j] = p[j], p[i]
    perm = np.array(p, dtype=np.int64)
    perm.flags.writeable = False
    return perm


def hash2d(perm: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Fold two lattice coordinates into one [0, 256) table entry."""
    xi = np.asarray(x, dtype=np.int64) & 255
    yi = np.asarray(y, dtype=np.int64) & 255
    return perm[(perm[xi] + yi) & 255]


# Indexed by `hash & 7`. Diagonals are not normalised.
GRAD2 = np.array(
    [
        [1.0, 0.0],
        [1.0, 1.0],
        [0.0, 1.0],
        [-1.0, 1.0],
        [-1.0, 0.0],
        [-1.0, -1.0],
        [0.0, -1.0],
        [1.0, -1.0],
    ],
    dtype=np.float64,
)
GRAD2.flags.writeable = False


def grad2_from_hash(h: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    g = GRAD2[np.asarray(h, dtype=np.int64) & 7]
    return g[..., 0], g[..., 1]


def grad_dot(h: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    gx, gy = grad2_from_hash(h)
    return gx * x + gy * y
