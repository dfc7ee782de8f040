from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Union

import numpy as np

from .anisotropic import Anisotropic2D
from .fbm import (
    domain_warp,
    fbm_cellular,
    fbm_directional,
    fbm_domain_warp,
    fbm_ridge,
    fbm_standard,
    fbm_turbulence,
    scaled,
)
from .gabor import MIN_WEIGHT, Gabor2D
from .gradient import Perlin2D
from .quantize import HALF_RESOLUTION, RESOLUTION, quantize
from .settings import (
    AnisotropicMode,
    FractalMode,
    GaborMode,
    NoiseFamily,
    Settings,
    WorleyMode,
)
from .simplex import Simplex2D
from .wavelet import Wavelet2D
from .worley import Worley2D

logger = logging.getLogger(__name__)

Kernel = Union[Perlin2D, Simplex2D, Wavelet2D, Gabor2D, Worley2D, Anisotropic2D]

_KERNELS: dict[NoiseFamily, type] = {
    NoiseFamily.PERLIN: Perlin2D,
    NoiseFamily.SIMPLEX: Simplex2D,
    NoiseFamily.WAVELET: Wavelet2D,
    NoiseFamily.GABOR: Gabor2D,
    NoiseFamily.WORLEY: Worley2D,
    NoiseFamily.ANISOTROPIC: Anisotropic2D,
}


def build_kernel(settings: Settings) -> Kernel:
    """Seed-derived kernel for one pass (permutation table or noise tile)."""
    return _KERNELS[settings.family](seed=settings.seed)


def noise_coordinates(
    scale: float, rows: slice = slice(None)
) -> tuple[np.ndarray, np.ndarray]:
    """Noise-space coordinates of the raster, centred on the middle pixel."""
    scale = float(scale)
    if scale <= 0.0:
        raise ValueError("scale must be > 0")

    coords = (np.arange(RESOLUTION, dtype=np.float64) - HALF_RESOLUTION) / scale
    return np.meshgrid(coords, coords[rows])


def _octave_args(settings: Settings) -> dict[str, Any]:
    return dict(
        octaves=settings.octaves,
        gain=settings.gain,
        lacunarity=settings.lacunarity,
        visualization=settings.visualization,
        show_octave=settings.show_octave,
    )


def _lattice_field(sample, settings: Settings, x: np.ndarray, y: np.ndarray):
    mode = FractalMode(settings.noise_type)
    args = _octave_args(settings)
    if mode is FractalMode.STANDARD:
        return fbm_standard(sample, x, y, h_exponent=settings.h_exponent, **args)
    if mode is FractalMode.TURBULENCE:
        return fbm_turbulence(sample, x, y, **args)
    if mode is FractalMode.RIDGE:
        return fbm_ridge(sample, x, y, ridge_offset=settings.ridge_offset, **args)
    return fbm_domain_warp(sample, x, y, warp_amount=settings.warp_amount, **args)


def _gabor_field(kernel: Gabor2D, settings: Settings, x: np.ndarray, y: np.ndarray):
    mode = GaborMode(settings.noise_type)
    args = _octave_args(settings)
    args.update(frequency=settings.base_frequency, floor=MIN_WEIGHT)

    def sample(xx: np.ndarray, yy: np.ndarray, f: float, i: int) -> np.ndarray:
        return kernel.noise(
            xx,
            yy,
            frequency=f,
            bandwidth=settings.bandwidth,
            kernel_radius=settings.kernel_radius,
        )

    if mode is GaborMode.STANDARD:
        return fbm_standard(sample, x, y, **args)
    if mode is GaborMode.TURBULENCE:
        return fbm_turbulence(sample, x, y, **args)
    if mode is GaborMode.ANISOTROPIC:
        a = settings.anisotropy
        return fbm_standard(sample, x * a, y / a, **args)
    return fbm_domain_warp(sample, x, y, warp_amount=settings.warp_amount, **args)


def _worley_field(kernel: Worley2D, settings: Settings, x: np.ndarray, y: np.ndarray):
    mode = WorleyMode(settings.noise_type)
    distances = partial(kernel.distances, metric=settings.distance_metric.value)
    cellular = partial(
        fbm_cellular,
        distances,
        crackle_power=settings.crackle_power,
        **_octave_args(settings),
    )
    if mode is WorleyMode.DOMAIN_WARP:
        field = partial(cellular, mode=WorleyMode.F1)
        z = domain_warp(field, x, y, warp_amount=settings.warp_amount)
    else:
        z = cellular(x, y, mode=mode)
    return np.clip(z, -1.0, 1.0)


def _anisotropic_field(
    kernel: Anisotropic2D, settings: Settings, x: np.ndarray, y: np.ndarray
):
    mode = AnisotropicMode(settings.noise_type)
    args = _octave_args(settings)
    angle = math.radians(settings.angle)
    if mode is AnisotropicMode.DIRECTIONAL:
        return fbm_directional(
            kernel,
            x,
            y,
            angle=angle,
            angle_step=math.radians(settings.angle_step),
            anisotropy=settings.anisotropy,
            **args,
        )

    sample = scaled(partial(kernel.noise, angle=angle, anisotropy=settings.anisotropy))
    if mode is AnisotropicMode.STANDARD:
        return fbm_standard(sample, x, y, h_exponent=settings.h_exponent, **args)
    if mode is AnisotropicMode.TURBULENCE:
        return fbm_turbulence(sample, x, y, **args)
    return fbm_ridge(sample, x, y, ridge_offset=settings.ridge_offset, **args)


def evaluate(
    kernel: Kernel, settings: Settings, x: np.ndarray, y: np.ndarray
) -> np.ndarray:
    """Composite noise value at noise-space points for the selected family."""
    family = settings.family
    if family is NoiseFamily.PERLIN:
        sample = scaled(partial(kernel.sample, dot_products=settings.show_dot_products))
        return _lattice_field(sample, settings, x, y)
    if family in (NoiseFamily.SIMPLEX, NoiseFamily.WAVELET):
        return _lattice_field(scaled(kernel.noise), settings, x, y)
    if family is NoiseFamily.GABOR:
        return _gabor_field(kernel, settings, x, y)
    if family is NoiseFamily.WORLEY:
        return _worley_field(kernel, settings, x, y)
    if family is NoiseFamily.ANISOTROPIC:
        return _anisotropic_field(kernel, settings, x, y)
    raise ValueError(f"unknown noise family: {family}")


def _band(kernel: Kernel, settings: Settings, rows: slice) -> np.ndarray:
    x, y = noise_coordinates(settings.scale, rows)
    return evaluate(kernel, settings, x, y)


def scalar_field(
    settings: Settings, *, workers: int = 1, kernel: Kernel | None = None
) -> np.ndarray:
    """Evaluate the full `RESOLUTION x RESOLUTION` field, row-major.

    With `workers > 1` the rows are split into contiguous bands evaluated on
    a thread pool; bands only read the shared kernel, so the result does not
    depend on the worker count.
    """

    workers = int(workers)
    if workers < 1:
        raise ValueError("workers must be >= 1")
    if kernel is None:
        kernel = build_kernel(settings)

    if workers == 1:
        return _band(kernel, settings, slice(None))

    bounds = np.linspace(0, RESOLUTION, workers + 1).astype(int)
    bands = [slice(int(a), int(b)) for a, b in zip(bounds[:-1], bounds[1:]) if b > a]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        parts = list(pool.map(partial(_band, kernel, settings), bands))
    return np.concatenate(parts, axis=0)


def render_grid(settings: Settings, *, workers: int = 1) -> bytes:
    """Recompute the whole raster from seed + settings as an RGBA buffer."""
    t0 = time.perf_counter()
    logger.debug(
        "rendering %s seed=%d mode=%s octaves=%d",
        settings.family.value,
        settings.seed,
        settings.noise_type.value,
        settings.octaves,
    )
    buffer = quantize(scalar_field(settings, workers=workers))
    logger.debug(
        "rendered %s in %.1f ms",
        settings.family.value,
        (time.perf_counter() - t0) * 1000.0,
    )
    return buffer
