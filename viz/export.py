from __future__ import annotations

import io

import numpy as np
from PIL import Image

from noiselab.quantize import IMAGE_BYTES_COUNT, RESOLUTION


def color_buffer_to_image(buffer: bytes) -> Image.Image:
    """Wrap a rendered RGBA buffer as a `RESOLUTION x RESOLUTION` image."""
    if len(buffer) != IMAGE_BYTES_COUNT:
        raise ValueError(
            f"color buffer must hold {IMAGE_BYTES_COUNT} bytes, got {len(buffer)}"
        )
    return Image.frombytes("RGBA", (RESOLUTION, RESOLUTION), bytes(buffer))


def color_buffer_to_png_bytes(buffer: bytes) -> bytes:
    out = io.BytesIO()
    color_buffer_to_image(buffer).save(out, format="PNG")
    return out.getvalue()


def field_to_png_bytes(z: np.ndarray) -> bytes:
    """Convert a signed 2D scalar field to an 8-bit grayscale PNG.

    The nominal range [-1, 1] maps linearly onto [0, 255] and anything
    outside is clipped, so fields from different families stay comparable.
    """

    z = np.asarray(z, dtype=np.float64)
    if z.ndim != 2:
        raise ValueError("expected a 2D array")

    z = np.nan_to_num(z, nan=0.0, posinf=1.0, neginf=-1.0)
    img = np.clip((z + 1.0) * 127.5, 0.0, 255.0).astype(np.uint8)

    out = io.BytesIO()
    Image.fromarray(img).save(out, format="PNG")
    return out.getvalue()


def field_to_npy_bytes(z: np.ndarray) -> bytes:
    out = io.BytesIO()
    np.save(out, np.asarray(z))
    return out.getvalue()
