from __future__ import annotations

import numpy as np

RESOLUTION = 400
HALF_RESOLUTION = RESOLUTION // 2
IMAGE_BYTES_COUNT = RESOLUTION * RESOLUTION * 4


def _channel(v: np.ndarray) -> np.ndarray:
    # Truncate toward zero and saturate, like a float -> u8 cast.
    return np.clip(np.trunc(v), 0.0, 255.0).astype(np.uint8)


def scalar_to_rgba(z: np.ndarray) -> np.ndarray:
    """Map signed scalars to RGBA on a two-sided ramp.

    Negative values run magenta (-1) to white (0) on the green channel,
    non-negative values run white (0) to green (1) on red and blue.
    Non-finite input is drawn white.
    """

    z = np.nan_to_num(np.asarray(z, dtype=np.float64), nan=0.0, posinf=0.0, neginf=0.0)
    negative = z < 0.0

    ramp_up = (z + 1.0) * 255.0
    ramp_down = 255.0 - z * 255.0

    rgba = np.empty(z.shape + (4,), dtype=np.uint8)
    rgba[..., 0] = np.where(negative, 255, _channel(ramp_down))
    rgba[..., 1] = np.where(negative, _channel(ramp_up), 255)
    rgba[..., 2] = rgba[..., 0]
    rgba[..., 3] = 255
    return rgba


def quantize(z: np.ndarray) -> bytes:
    """Row-major RGBA byte buffer for a 2D scalar field."""
    z = np.asarray(z, dtype=np.float64)
    if z.ndim != 2:
        raise ValueError("expected a 2D array")
    return scalar_to_rgba(z).tobytes()
