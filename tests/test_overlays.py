import math

import pytest

from noiselab.gabor import Gabor2D
from noiselab.gradient import Perlin2D
from noiselab.overlays import (
    MIN_SPACING_PX,
    direction_indicator,
    feature_points,
    gradient_arrows,
    grid_lines,
    impulse_arrows,
    octave_scales,
    overlays_for,
    simplex_arrows,
    simplex_triangle,
    to_pixel,
)
from noiselab.quantize import HALF_RESOLUTION, RESOLUTION
from noiselab.settings import parse_settings
from noiselab.simplex import Simplex2D
from noiselab.worley import Worley2D


def test_to_pixel_centre():
    assert to_pixel(0.0, 0.0, 50.0) == (HALF_RESOLUTION, HALF_RESOLUTION)
    assert to_pixel(1.0, -1.0, 50.0) == (HALF_RESOLUTION + 50.0, HALF_RESOLUTION - 50.0)


def test_grid_lines_cover_raster():
    lines = grid_lines(50.0)
    assert lines[0] == 0.0
    assert lines[-1] == RESOLUTION
    assert HALF_RESOLUTION in lines
    assert len(lines) == 9


def test_grid_lines_reject_bad_scale():
    with pytest.raises(ValueError):
        grid_lines(0.0)


def test_octave_scales_skip_dense_lattices():
    s = parse_settings("perlin", {"scale": 50, "octaves": 6, "lacunarity": 2.0})
    scales = octave_scales(s)
    assert scales == [50.0, 25.0, 12.5, 6.25]
    assert all(v >= MIN_SPACING_PX for v in scales)


def test_gradient_arrows_match_kernel():
    s = parse_settings("perlin", {"scale": 50, "show_vectors": True})
    k = Perlin2D(seed=s.seed)
    arrows = gradient_arrows(k, s)
    assert len(arrows) == 81

    centre = next(a for a in arrows if (a.x0, a.y0) == (HALF_RESOLUTION, HALF_RESOLUTION))
    gx, gy = k.gradient_at(0, 0)
    assert math.isclose(centre.x1, HALF_RESOLUTION + gx * 50.0 / 3.0)
    assert math.isclose(centre.y1, HALF_RESOLUTION + gy * 50.0 / 3.0)


def test_simplex_triangle_at_centre():
    k = Simplex2D(seed=42)
    corners = simplex_triangle(k, HALF_RESOLUTION, HALF_RESOLUTION, 50.0)
    assert len(corners) == 3
    assert corners[0] == (HALF_RESOLUTION, HALF_RESOLUTION)


def test_simplex_arrows_stay_in_view():
    s = parse_settings("simplex", {"scale": 80, "show_vectors": True})
    arrows = simplex_arrows(Simplex2D(seed=s.seed), s)
    assert arrows
    for a in arrows:
        assert 0.0 <= a.x0 <= RESOLUTION
        assert 0.0 <= a.y0 <= RESOLUTION


def test_feature_points_inside_raster():
    s = parse_settings("worley", {"scale": 40, "show_points": True})
    k = Worley2D(seed=s.seed)
    circles = feature_points(k, s)
    assert circles
    for c in circles:
        assert 0.0 <= c.x <= RESOLUTION
        assert 0.0 <= c.y <= RESOLUTION
    px, py = to_pixel(*k.feature_point(0, 0), 40.0)
    assert any(math.isclose(c.x, px) and math.isclose(c.y, py) for c in circles)


def test_impulse_arrows_point_along_orientation():
    s = parse_settings("gabor", {"scale": 100, "show_impulses": True})
    k = Gabor2D(seed=s.seed)
    arrows = impulse_arrows(k, s)
    assert arrows
    imp = k.impulse(0, 0)
    px, py = to_pixel(imp.x, imp.y, 100.0)
    a = next(a for a in arrows if math.isclose(a.x0, px) and math.isclose(a.y0, py))
    angle = math.atan2(a.y1 - a.y0, a.x1 - a.x0) % (2 * math.pi)
    assert math.isclose(angle, imp.theta, abs_tol=1e-9)


def test_direction_indicator_scaled_by_anisotropy():
    s = parse_settings("anisotropic", {"angle": 0, "anisotropy": 2.0, "show_direction": True})
    main, side = direction_indicator(s)
    assert (main.x1, main.y1) == (HALF_RESOLUTION + 80.0, HALF_RESOLUTION)
    assert math.isclose(side.x1, HALF_RESOLUTION, abs_tol=1e-9)
    assert math.isclose(side.y1, HALF_RESOLUTION + 160.0)


def test_overlays_for_respects_toggles():
    assert overlays_for(parse_settings("perlin", {})).arrows == []
    assert overlays_for(parse_settings("perlin", {"show_grid": True})).grid == grid_lines(50.0)
    assert len(overlays_for(parse_settings("perlin", {"show_vectors": True})).arrows) == 81
    assert overlays_for(parse_settings("worley", {"show_points": True})).circles
    assert len(overlays_for(parse_settings("anisotropic", {"show_direction": True})).arrows) == 2
