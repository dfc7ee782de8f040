"""Fractal composition (fBm) over samplers `sample(x, y, frequency, octave)`."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Callable

import numpy as np

from .settings import Visualization, WorleyMode

if TYPE_CHECKING:
    from .anisotropic import Anisotropic2D

Sampler = Callable[[np.ndarray, np.ndarray, float, int], np.ndarray]
Field = Callable[[np.ndarray, np.ndarray], np.ndarray]

WARP_OFFSET_X = 5.2
WARP_OFFSET_Y = 1.3


def scaled(noise: Callable[[np.ndarray, np.ndarray], np.ndarray]) -> Sampler:
    def sample(x: np.ndarray, y: np.ndarray, frequency: float, octave: int):
        return noise(x * frequency, y * frequency)

    return sample


def includes(visualization: Visualization, octave: int, show_octave: int) -> bool:
    """Whether 1-based `octave` contributes to the visualised sum."""
    visualization = Visualization(visualization)
    if visualization is Visualization.FINAL:
        return True
    if visualization is Visualization.SINGLE_OCTAVE:
        return octave == show_octave
    return octave <= show_octave


def _normalize(total: np.ndarray, max_value: float, floor: float) -> np.ndarray:
    divisor = max(max_value, floor)
    if divisor == 0.0:
        return total
    return total / divisor


def fbm_standard(
    sample: Sampler,
    x: np.ndarray,
    y: np.ndarray,
    *,
    octaves: int,
    gain: float,
    lacunarity: float,
    h_exponent: float = 1.0,
    visualization: Visualization = Visualization.FINAL,
    show_octave: int = 1,
    frequency: float = 1.0,
    floor: float = 0.0,
) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    decay = float(gain) ** float(h_exponent)
    lacunarity = float(lacunarity)
    frequency = float(frequency)

    amplitude = 1.0
    max_value = 0.0
    total = np.zeros(np.shape(x), dtype=np.float64)

    for i in range(1, int(octaves) + 1):
        value = sample(x, y, frequency, i)
        if includes(visualization, i, show_octave):
            total = total + value * amplitude
            max_value += amplitude
        amplitude *= decay
        frequency *= lacunarity

    return _normalize(total, max_value, floor)


def fbm_turbulence(
    sample: Sampler,
    x: np.ndarray,
    y: np.ndarray,
    *,
    octaves: int,
    gain: float,
    lacunarity: float,
    visualization: Visualization = Visualization.FINAL,
    show_octave: int = 1,
    frequency: float = 1.0,
    floor: float = 0.0,
) -> np.ndarray:
    def folded(xx: np.ndarray, yy: np.ndarray, f: float, i: int) -> np.ndarray:
        return np.abs(sample(xx, yy, f, i))

    return fbm_standard(
        folded,
        x,
        y,
        octaves=octaves,
        gain=gain,
        lacunarity=lacunarity,
        visualization=visualization,
        show_octave=show_octave,
        frequency=frequency,
        floor=floor,
    )


def fbm_ridge(
    sample: Sampler,
    x: np.ndarray,
    y: np.ndarray,
    *,
    octaves: int,
    gain: float,
    lacunarity: float,
    ridge_offset: float = 1.0,
    visualization: Visualization = Visualization.FINAL,
    show_octave: int = 1,
    frequency: float = 1.0,
) -> np.ndarray:
    """Ridged multifractal.

    Each octave folds the sample into `(ridge_offset - |n|)**2`, scaled by a
    weight fed back from the previous octave's contribution
    (`clip(2 * contribution, 0, 1)`). The feedback runs for every octave,
    accumulated or not.
    """

    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    gain = float(gain)
    lacunarity = float(lacunarity)
    ridge_offset = float(ridge_offset)
    frequency = float(frequency)

    amplitude = 1.0
    max_value = 0.0
    total = np.zeros(np.shape(x), dtype=np.float64)
    weight = np.ones(np.shape(x), dtype=np.float64)

    for i in range(1, int(octaves) + 1):
        signal = ridge_offset - np.abs(sample(x, y, frequency, i))
        contribution = signal * signal * weight
        if includes(visualization, i, show_octave):
            total = total + contribution * amplitude
            max_value += amplitude
        weight = np.clip(contribution * 2.0, 0.0, 1.0)
        amplitude *= gain
        frequency *= lacunarity

    return _normalize(total, max_value, 0.0)


def fbm_directional(
    noise: Anisotropic2D,
    x: np.ndarray,
    y: np.ndarray,
    *,
    angle: float,
    angle_step: float,
    anisotropy: float,
    octaves: int,
    gain: float,
    lacunarity: float,
    visualization: Visualization = Visualization.FINAL,
    show_octave: int = 1,
) -> np.ndarray:
    """Standard accumulation with the orientation turning by `angle_step`
    radians per octave."""

    angle = float(angle)
    angle_step = float(angle_step)

    def sample(xx: np.ndarray, yy: np.ndarray, f: float, i: int) -> np.ndarray:
        return noise.noise(
            xx * f,
            yy * f,
            angle=angle + angle_step * (i - 1),
            anisotropy=anisotropy,
        )

    return fbm_standard(
        sample,
        x,
        y,
        octaves=octaves,
        gain=gain,
        lacunarity=lacunarity,
        visualization=visualization,
        show_octave=show_octave,
    )


def domain_warp(
    field: Field, x: np.ndarray, y: np.ndarray, *, warp_amount: float
) -> np.ndarray:
    """Displace the sample point by two decorrelated evaluations of `field`."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    warp_amount = float(warp_amount)

    qx = field(x, y)
    qy = field(x + WARP_OFFSET_X, y + WARP_OFFSET_Y)
    return field(x + warp_amount * qx, y + warp_amount * qy)


def fbm_domain_warp(
    sample: Sampler,
    x: np.ndarray,
    y: np.ndarray,
    *,
    warp_amount: float,
    octaves: int,
    gain: float,
    lacunarity: float,
    visualization: Visualization = Visualization.FINAL,
    show_octave: int = 1,
    frequency: float = 1.0,
    floor: float = 0.0,
) -> np.ndarray:
    """Domain-warped standard fBm; the shape exponent is held at 1.0."""
    field = partial(
        fbm_standard,
        sample,
        octaves=octaves,
        gain=gain,
        lacunarity=lacunarity,
        h_exponent=1.0,
        visualization=visualization,
        show_octave=show_octave,
        frequency=frequency,
        floor=floor,
    )
    return domain_warp(field, x, y, warp_amount=warp_amount)


def fbm_cellular(
    distances: Callable[[np.ndarray, np.ndarray], tuple[np.ndarray, np.ndarray]],
    x: np.ndarray,
    y: np.ndarray,
    *,
    mode: WorleyMode,
    octaves: int,
    gain: float,
    lacunarity: float,
    crackle_power: float = 2.0,
    visualization: Visualization = Visualization.FINAL,
    show_octave: int = 1,
) -> np.ndarray:
    """Octave loop over Worley `(f1, f2)` pairs, rescaled to a signed range.

    F1 accumulates `1 - min(f1, 1)`, F2-F1 accumulates `min(f2 - f1, 1)`
    (both mapped with `2t - 1`); Crackle accumulates `min(f1, 1)**power`
    and is mapped with `1 - 2t`. Domain warp uses F1 for all three fields.
    """

    mode = WorleyMode(mode)
    if mode is WorleyMode.DOMAIN_WARP:
        raise ValueError("domain warp is composed with domain_warp(), not looped")

    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    crackle_power = float(crackle_power)

    def sample(xx: np.ndarray, yy: np.ndarray, f: float, i: int) -> np.ndarray:
        f1, f2 = distances(xx * f, yy * f)
        if mode is WorleyMode.F1:
            return 1.0 - np.minimum(f1, 1.0)
        if mode is WorleyMode.F2_MINUS_F1:
            return np.minimum(f2 - f1, 1.0)
        return np.minimum(f1, 1.0) ** crackle_power

    t = fbm_standard(
        sample,
        x,
        y,
        octaves=octaves,
        gain=gain,
        lacunarity=lacunarity,
        visualization=visualization,
        show_octave=show_octave,
    )
    if mode is WorleyMode.CRACKLE:
        return 1.0 - t * 2.0
    return t * 2.0 - 1.0
