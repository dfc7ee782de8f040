import numpy as np
import pytest

from noiselab.quantize import HALF_RESOLUTION, IMAGE_BYTES_COUNT, RESOLUTION
from noiselab.render import build_kernel, evaluate, noise_coordinates, render_grid, scalar_field
from noiselab.settings import (
    SCHEMAS,
    NoiseFamily,
    Radio,
    Visualization,
    default_settings,
    parse_settings,
)


def _modes(family):
    radio = next(f for f in SCHEMAS[family] if isinstance(f, Radio) and f.name == "noise_type")
    return list(radio.choices)


def test_noise_coordinates_centred():
    x, y = noise_coordinates(50.0)
    assert x.shape == (RESOLUTION, RESOLUTION)
    assert x[0, HALF_RESOLUTION] == 0.0
    assert y[HALF_RESOLUTION, 0] == 0.0
    assert x[0, 0] == -HALF_RESOLUTION / 50.0
    assert y[-1, 0] == (RESOLUTION - 1 - HALF_RESOLUTION) / 50.0


def test_noise_coordinates_rejects_bad_scale():
    with pytest.raises(ValueError):
        noise_coordinates(0.0)


def test_render_grid_length_and_determinism():
    s = default_settings("perlin")
    a = render_grid(s)
    b = render_grid(s)
    assert len(a) == IMAGE_BYTES_COUNT
    assert a == b


def test_render_grid_centre_pixel_is_white():
    s = parse_settings("perlin", {"seed": 42, "scale": 50})
    buf = render_grid(s)
    i = (HALF_RESOLUTION * RESOLUTION + HALF_RESOLUTION) * 4
    assert buf[i : i + 4] == bytes([255, 255, 255, 255])


def test_render_grid_seed_changes_output():
    a = render_grid(parse_settings("perlin", {"seed": 1}))
    b = render_grid(parse_settings("perlin", {"seed": 2}))
    assert a != b


def test_render_grid_independent_of_worker_count():
    s = parse_settings("perlin", {"octaves": 3, "noise_type": "ridge"})
    assert render_grid(s, workers=1) == render_grid(s, workers=3)


def test_scalar_field_workers_on_cellular():
    s = parse_settings("worley", {"octaves": 2})
    k = build_kernel(s)
    a = scalar_field(s, workers=1, kernel=k)
    b = scalar_field(s, workers=4, kernel=k)
    assert np.allclose(a, b)


def test_scalar_field_rejects_bad_worker_count():
    with pytest.raises(ValueError):
        scalar_field(default_settings("perlin"), workers=0)


@pytest.mark.parametrize("family", list(NoiseFamily))
def test_every_mode_is_finite(family):
    x, y = np.meshgrid(np.linspace(-2, 2, 12), np.linspace(-2, 2, 12))
    kernel = build_kernel(default_settings(family))
    for mode in _modes(family):
        s = parse_settings(family, {"noise_type": mode, "octaves": 3})
        z = evaluate(kernel, s, x, y)
        assert z.shape == x.shape
        assert np.isfinite(z).all()


@pytest.mark.parametrize("family", list(NoiseFamily))
def test_every_family_renders(family):
    buf = render_grid(default_settings(family), workers=2)
    assert len(buf) == IMAGE_BYTES_COUNT


@pytest.mark.parametrize("mode", ["f1", "f2_minus_f1", "crackle", "domain_warp"])
def test_worley_field_is_clamped(mode):
    x, y = np.meshgrid(np.linspace(-3, 3, 24), np.linspace(-3, 3, 24))
    s = parse_settings("worley", {"noise_type": mode, "octaves": 2})
    z = evaluate(build_kernel(s), s, x, y)
    assert z.min() >= -1.0
    assert z.max() <= 1.0


def test_single_octave_view_of_first_octave_matches_one_octave_render():
    one = parse_settings("simplex", {"octaves": 1})
    many = parse_settings(
        "simplex",
        {"octaves": 4, "show_octave": 1, "visualization": Visualization.SINGLE_OCTAVE},
    )
    assert render_grid(one) == render_grid(many)


def test_accumulated_up_to_last_octave_matches_final():
    final = parse_settings("wavelet", {"octaves": 3})
    acc = parse_settings(
        "wavelet",
        {"octaves": 3, "show_octave": 3, "visualization": "accumulated_octaves"},
    )
    assert render_grid(final) == render_grid(acc)


def test_dot_products_view_changes_perlin_render():
    plain = parse_settings("perlin", {})
    dots = parse_settings("perlin", {"show_dot_products": True})
    assert render_grid(plain) != render_grid(dots)


def test_anisotropic_angle_changes_render():
    a = render_grid(parse_settings("anisotropic", {"anisotropy": 3.0}))
    b = render_grid(parse_settings("anisotropic", {"anisotropy": 3.0, "angle": 45}))
    assert a != b
