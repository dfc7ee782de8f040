"""Overlay geometry in raster pixel coordinates; nothing here draws."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .gabor import Gabor2D
from .gradient import Perlin2D
from .quantize import HALF_RESOLUTION, RESOLUTION
from .render import build_kernel
from .settings import NoiseFamily, Settings
from .simplex import F2, G2, Simplex2D
from .worley import Worley2D

MIN_SPACING_PX = 4.0
MARKER_COLOR = "#ee0000"


@dataclass(frozen=True)
class Arrow:
    x0: float
    y0: float
    x1: float
    y1: float
    head_length: float
    color: str = MARKER_COLOR


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    color: str = MARKER_COLOR


@dataclass
class Overlays:
    grid: list[float] = field(default_factory=list)
    arrows: list[Arrow] = field(default_factory=list)
    circles: list[Circle] = field(default_factory=list)


def to_pixel(nx: float, ny: float, scale: float) -> tuple[float, float]:
    return HALF_RESOLUTION + nx * scale, HALF_RESOLUTION + ny * scale


def _inside(px: float, py: float) -> bool:
    return 0.0 <= px <= RESOLUTION and 0.0 <= py <= RESOLUTION


def grid_lines(scale: float) -> list[float]:
    """Pixel offsets of the unit lattice lines (same for x and y)."""
    scale = float(scale)
    if scale <= 0.0:
        raise ValueError("scale must be > 0")
    n = int(HALF_RESOLUTION / scale)
    offsets = {HALF_RESOLUTION + s * scale * i for i in range(n + 1) for s in (-1, 1)}
    return sorted(offsets)


def octave_scales(settings: Settings) -> list[float]:
    """Pixel spacing of the unit lattice at each octave."""
    out = []
    for i in range(int(settings.octaves)):
        s = float(settings.scale) / float(settings.lacunarity) ** i
        if s >= MIN_SPACING_PX:
            out.append(s)
    return out


def gradient_arrows(kernel: Perlin2D, settings: Settings) -> list[Arrow]:
    arrows = []
    for s in octave_scales(settings):
        half_range = int(math.floor(HALF_RESOLUTION / s))
        offset = s / 3.0
        for iy in range(-half_range, half_range + 1):
            for ix in range(-half_range, half_range + 1):
                gx, gy = kernel.gradient_at(ix, iy)
                px, py = to_pixel(ix, iy, s)
                arrows.append(Arrow(px, py, px + gx * offset, py + gy * offset, s / 5.0))
    return arrows


def _unskew(i: int, j: int) -> tuple[float, float]:
    t = (i + j) * G2
    return i - t, j - t


def simplex_triangle(
    kernel: Simplex2D, px: float, py: float, scale: float
) -> list[tuple[float, float]]:
    """Pixel positions of the three corners of the simplex containing a pixel."""
    nx = (float(px) - HALF_RESOLUTION) / scale
    ny = (float(py) - HALF_RESOLUTION) / scale
    c = kernel.corners(nx, ny)
    lattice = [(c.i, c.j), (c.i + c.i1, c.j + c.j1), (c.i + 1, c.j + 1)]
    return [to_pixel(*_unskew(i, j), scale) for i, j in lattice]


def simplex_arrows(kernel: Simplex2D, settings: Settings) -> list[Arrow]:
    arrows = []
    for s in octave_scales(settings):
        half = HALF_RESOLUTION / s
        reach = int(math.ceil(half * (1.0 + 2.0 * F2)))
        offset = s / 3.0
        for j in range(-reach, reach + 1):
            for i in range(-reach, reach + 1):
                ux, uy = _unskew(i, j)
                if abs(ux) > half or abs(uy) > half:
                    continue
                gx, gy = kernel.gradient_at(i, j)
                px, py = to_pixel(ux, uy, s)
                arrows.append(Arrow(px, py, px + gx * offset, py + gy * offset, offset / 2.0))
    return arrows


def feature_points(kernel: Worley2D, settings: Settings) -> list[Circle]:
    circles = []
    for s in octave_scales(settings):
        half_range = int(math.floor(HALF_RESOLUTION / s))
        for cy in range(-half_range - 1, half_range + 1):
            for cx in range(-half_range - 1, half_range + 1):
                fx, fy = kernel.feature_point(cx, cy)
                px, py = to_pixel(fx, fy, s)
                if _inside(px, py):
                    circles.append(Circle(px, py, s / 10.0))
    return circles


def impulse_arrows(kernel: Gabor2D, settings: Settings) -> list[Arrow]:
    """Gabor impulses with their orientation.

    Octaves change the harmonic frequency, not the impulse lattice, so a
    single layer covers every octave.
    """

    s = float(settings.scale)
    half_range = int(math.floor(HALF_RESOLUTION / s))
    length = s / 3.0
    arrows = []
    for cy in range(-half_range - 1, half_range + 1):
        for cx in range(-half_range - 1, half_range + 1):
            imp = kernel.impulse(cx, cy)
            px, py = to_pixel(imp.x, imp.y, s)
            if not _inside(px, py):
                continue
            tx = px + math.cos(imp.theta) * length
            ty = py + math.sin(imp.theta) * length
            arrows.append(Arrow(px, py, tx, ty, s / 8.0))
    return arrows


def direction_indicator(settings: Settings, *, length: float = 80.0) -> list[Arrow]:
    """Main stretch direction and its perpendicular, scaled by anisotropy."""
    angle = math.radians(float(settings.angle))
    cx = cy = float(HALF_RESOLUTION)

    main = Arrow(
        cx,
        cy,
        cx + math.cos(angle) * length,
        cy + math.sin(angle) * length,
        15.0,
        "#00ff00",
    )
    perp = angle + math.pi / 2.0
    perp_length = length * float(settings.anisotropy)
    side = Arrow(
        cx,
        cy,
        cx + math.cos(perp) * perp_length,
        cy + math.sin(perp) * perp_length,
        10.0,
        "#0088ff",
    )
    return [main, side]


def overlays_for(settings: Settings, kernel=None) -> Overlays:
    """Collect the overlays switched on in a settings snapshot."""
    out = Overlays()
    if settings.show_grid:
        out.grid = grid_lines(settings.scale)

    family = settings.family
    wants = {
        NoiseFamily.PERLIN: "show_vectors",
        NoiseFamily.SIMPLEX: "show_vectors",
        NoiseFamily.GABOR: "show_impulses",
        NoiseFamily.WORLEY: "show_points",
        NoiseFamily.ANISOTROPIC: "show_direction",
    }.get(family)
    if wants is None or not getattr(settings, wants):
        return out

    if family is NoiseFamily.ANISOTROPIC:
        out.arrows = direction_indicator(settings)
        return out

    if kernel is None:
        kernel = build_kernel(settings)
    if family is NoiseFamily.PERLIN:
        out.arrows = gradient_arrows(kernel, settings)
    elif family is NoiseFamily.SIMPLEX:
        out.arrows = simplex_arrows(kernel, settings)
    elif family is NoiseFamily.GABOR:
        out.arrows = impulse_arrows(kernel, settings)
    else:
        out.circles = feature_points(kernel, settings)
    return out
