"""Per-family settings schema and frozen settings snapshots."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Union

logger = logging.getLogger(__name__)

SEED_MAX = 2**32 - 1


class NoiseFamily(str, enum.Enum):
    PERLIN = "perlin"
    SIMPLEX = "simplex"
    WAVELET = "wavelet"
    GABOR = "gabor"
    WORLEY = "worley"
    ANISOTROPIC = "anisotropic"


class Visualization(str, enum.Enum):
    FINAL = "final"
    SINGLE_OCTAVE = "single_octave"
    ACCUMULATED_OCTAVES = "accumulated_octaves"


class FractalMode(str, enum.Enum):
    """Accumulation modes of the lattice families (perlin, simplex, wavelet)."""

    STANDARD = "standard"
    TURBULENCE = "turbulence"
    RIDGE = "ridge"
    DOMAIN_WARP = "domain_warp"


class GaborMode(str, enum.Enum):
    STANDARD = "standard"
    TURBULENCE = "turbulence"
    ANISOTROPIC = "anisotropic"
    DOMAIN_WARP = "domain_warp"


class WorleyMode(str, enum.Enum):
    F1 = "f1"
    F2_MINUS_F1 = "f2_minus_f1"
    CRACKLE = "crackle"
    DOMAIN_WARP = "domain_warp"


class AnisotropicMode(str, enum.Enum):
    STANDARD = "standard"
    TURBULENCE = "turbulence"
    RIDGE = "ridge"
    DIRECTIONAL = "directional"


class DistanceMetric(str, enum.Enum):
    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"
    MINKOWSKI = "minkowski"


@dataclass(frozen=True)
class Slider:
    name: str
    min_value: float
    default: float
    max_value: float
    integer: bool = False


@dataclass(frozen=True)
class Radio:
    name: str
    choices: type[enum.Enum]
    default: enum.Enum


@dataclass(frozen=True)
class Checkbox:
    name: str
    default: bool = False


Field = Union[Slider, Radio, Checkbox]

_COMMON_HEAD = (
    Slider("seed", 0, 42, SEED_MAX, integer=True),
    Slider("scale", 10.0, 50.0, 200.0),
    Slider("octaves", 1, 1, 8, integer=True),
    Slider("lacunarity", 1.0, 2.0, 4.0),
    Slider("gain", 0.0, 0.5, 1.0),
)
_SHOW_OCTAVE = Slider("show_octave", 1, 1, 8, integer=True)
_VISUALIZATION = Radio("visualization", Visualization, Visualization.FINAL)
_LATTICE_SHAPE = (
    Slider("h_exponent", 0.0, 1.0, 2.0),
    Slider("ridge_offset", 0.0, 1.0, 2.0),
    Slider("warp_amount", 0.0, 4.0, 10.0),
)
_LATTICE_MODE = Radio("noise_type", FractalMode, FractalMode.STANDARD)

SCHEMAS: dict[NoiseFamily, tuple[Field, ...]] = {
    NoiseFamily.PERLIN: (
        *_COMMON_HEAD,
        *_LATTICE_SHAPE,
        _SHOW_OCTAVE,
        _VISUALIZATION,
        _LATTICE_MODE,
        Checkbox("show_grid"),
        Checkbox("show_vectors"),
        Checkbox("show_dot_products"),
    ),
    NoiseFamily.SIMPLEX: (
        *_COMMON_HEAD,
        *_LATTICE_SHAPE,
        _SHOW_OCTAVE,
        _VISUALIZATION,
        _LATTICE_MODE,
        Checkbox("show_grid"),
        Checkbox("show_vectors"),
    ),
    NoiseFamily.WAVELET: (
        *_COMMON_HEAD,
        *_LATTICE_SHAPE,
        _SHOW_OCTAVE,
        _VISUALIZATION,
        _LATTICE_MODE,
        Checkbox("show_grid"),
    ),
    NoiseFamily.GABOR: (
        *_COMMON_HEAD,
        Slider("base_frequency", 1.0, 10.0, 30.0),
        Slider("bandwidth", 0.1, 0.5, 2.0),
        Slider("kernel_radius", 1, 3, 6, integer=True),
        Slider("anisotropy", 0.1, 1.0, 5.0),
        Slider("warp_amount", 0.0, 4.0, 10.0),
        _SHOW_OCTAVE,
        _VISUALIZATION,
        Radio("noise_type", GaborMode, GaborMode.STANDARD),
        Checkbox("show_grid"),
        Checkbox("show_impulses"),
    ),
    NoiseFamily.WORLEY: (
        *_COMMON_HEAD,
        Slider("crackle_power", 0.5, 2.0, 5.0),
        Slider("warp_amount", 0.0, 0.5, 2.0),
        _SHOW_OCTAVE,
        _VISUALIZATION,
        Radio("noise_type", WorleyMode, WorleyMode.F1),
        Radio("distance_metric", DistanceMetric, DistanceMetric.EUCLIDEAN),
        Checkbox("show_grid"),
        Checkbox("show_points"),
    ),
    NoiseFamily.ANISOTROPIC: (
        *_COMMON_HEAD,
        Slider("h_exponent", 0.0, 1.0, 2.0),
        Slider("ridge_offset", 0.0, 1.0, 2.0),
        Slider("angle", 0.0, 0.0, 360.0),
        Slider("anisotropy", 0.1, 1.0, 5.0),
        Slider("angle_step", -90.0, 0.0, 90.0),
        _SHOW_OCTAVE,
        _VISUALIZATION,
        Radio("noise_type", AnisotropicMode, AnisotropicMode.STANDARD),
        Checkbox("show_grid"),
        Checkbox("show_direction"),
    ),
}


@dataclass(frozen=True)
class PerlinSettings:
    seed: int = 42
    scale: float = 50.0
    octaves: int = 1
    lacunarity: float = 2.0
    gain: float = 0.5
    h_exponent: float = 1.0
    ridge_offset: float = 1.0
    warp_amount: float = 4.0
    show_octave: int = 1
    visualization: Visualization = Visualization.FINAL
    noise_type: FractalMode = FractalMode.STANDARD
    show_grid: bool = False
    show_vectors: bool = False
    show_dot_products: bool = False

    family = NoiseFamily.PERLIN


@dataclass(frozen=True)
class SimplexSettings:
    seed: int = 42
    scale: float = 50.0
    octaves: int = 1
    lacunarity: float = 2.0
    gain: float = 0.5
    h_exponent: float = 1.0
    ridge_offset: float = 1.0
    warp_amount: float = 4.0
    show_octave: int = 1
    visualization: Visualization = Visualization.FINAL
    noise_type: FractalMode = FractalMode.STANDARD
    show_grid: bool = False
    show_vectors: bool = False

    family = NoiseFamily.SIMPLEX


@dataclass(frozen=True)
class WaveletSettings:
    seed: int = 42
    scale: float = 50.0
    octaves: int = 1
    lacunarity: float = 2.0
    gain: float = 0.5
    h_exponent: float = 1.0
    ridge_offset: float = 1.0
    warp_amount: float = 4.0
    show_octave: int = 1
    visualization: Visualization = Visualization.FINAL
    noise_type: FractalMode = FractalMode.STANDARD
    show_grid: bool = False

    family = NoiseFamily.WAVELET


@dataclass(frozen=True)
class GaborSettings:
    seed: int = 42
    scale: float = 50.0
    octaves: int = 1
    lacunarity: float = 2.0
    gain: float = 0.5
    base_frequency: float = 10.0
    bandwidth: float = 0.5
    kernel_radius: int = 3
    anisotropy: float = 1.0
    warp_amount: float = 4.0
    show_octave: int = 1
    visualization: Visualization = Visualization.FINAL
    noise_type: GaborMode = GaborMode.STANDARD
    show_grid: bool = False
    show_impulses: bool = False

    family = NoiseFamily.GABOR


@dataclass(frozen=True)
class WorleySettings:
    seed: int = 42
    scale: float = 50.0
    octaves: int = 1
    lacunarity: float = 2.0
    gain: float = 0.5
    crackle_power: float = 2.0
    warp_amount: float = 0.5
    show_octave: int = 1
    visualization: Visualization = Visualization.FINAL
    noise_type: WorleyMode = WorleyMode.F1
    distance_metric: DistanceMetric = DistanceMetric.EUCLIDEAN
    show_grid: bool = False
    show_points: bool = False

    family = NoiseFamily.WORLEY


@dataclass(frozen=True)
class AnisotropicSettings:
    seed: int = 42
    scale: float = 50.0
    octaves: int = 1
    lacunarity: float = 2.0
    gain: float = 0.5
    h_exponent: float = 1.0
    ridge_offset: float = 1.0
    angle: float = 0.0
    anisotropy: float = 1.0
    angle_step: float = 0.0
    show_octave: int = 1
    visualization: Visualization = Visualization.FINAL
    noise_type: AnisotropicMode = AnisotropicMode.STANDARD
    show_grid: bool = False
    show_direction: bool = False

    family = NoiseFamily.ANISOTROPIC


Settings = Union[
    PerlinSettings,
    SimplexSettings,
    WaveletSettings,
    GaborSettings,
    WorleySettings,
    AnisotropicSettings,
]

SETTINGS_TYPES: dict[NoiseFamily, type] = {
    NoiseFamily.PERLIN: PerlinSettings,
    NoiseFamily.SIMPLEX: SimplexSettings,
    NoiseFamily.WAVELET: WaveletSettings,
    NoiseFamily.GABOR: GaborSettings,
    NoiseFamily.WORLEY: WorleySettings,
    NoiseFamily.ANISOTROPIC: AnisotropicSettings,
}

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}


def as_family(family: NoiseFamily | str) -> NoiseFamily:
    try:
        return NoiseFamily(family)
    except ValueError:
        raise ValueError(f"unknown noise family: {family}") from None


def _parse_slider(field: Slider, raw: Any) -> int | float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{field.name}: expected a number, got {raw!r}") from None
    if value != value:
        raise ValueError(f"{field.name}: expected a number, got NaN")

    clamped = max(field.min_value, min(field.max_value, value))
    if clamped != value:
        logger.debug("clamped %s from %r to %r", field.name, value, clamped)
    if field.integer:
        return int(clamped)
    return float(clamped)


def _parse_radio(field: Radio, raw: Any) -> enum.Enum:
    if isinstance(raw, field.choices):
        return raw
    try:
        return field.choices(str(raw).strip().lower())
    except ValueError:
        options = ", ".join(m.value for m in field.choices)
        raise ValueError(
            f"{field.name}: unknown option {raw!r} (expected one of {options})"
        ) from None


def _parse_checkbox(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in _TRUTHY


def parse_settings(
    family: NoiseFamily | str, raw: Mapping[str, Any] | None = None
) -> Settings:
    """Build an immutable settings snapshot from raw control values.

    Missing fields take their defaults, sliders are clamped into range and
    `show_octave` is kept within `[1, octaves]`.
    """

    family = as_family(family)
    raw = dict(raw or {})
    values: dict[str, Any] = {}

    for field in SCHEMAS[family]:
        if field.name not in raw:
            values[field.name] = field.default
            continue
        value = raw.pop(field.name)
        if isinstance(field, Slider):
            values[field.name] = _parse_slider(field, value)
        elif isinstance(field, Radio):
            values[field.name] = _parse_radio(field, value)
        else:
            values[field.name] = _parse_checkbox(value)

    if raw:
        logger.debug("ignored unknown %s settings: %s", family.value, sorted(raw))

    values["show_octave"] = max(1, min(int(values["octaves"]), int(values["show_octave"])))
    return SETTINGS_TYPES[family](**values)


def default_settings(family: NoiseFamily | str) -> Settings:
    return parse_settings(family, {})
