from .anisotropic import Anisotropic2D
from .gabor import Gabor2D
from .gradient import Perlin2D
from .quantize import RESOLUTION, quantize, scalar_to_rgba
from .render import build_kernel, render_grid, scalar_field
from .settings import NoiseFamily, default_settings, parse_settings
from .simplex import Simplex2D
from .wavelet import Wavelet2D
from .worley import Worley2D

__all__ = [
    "Anisotropic2D",
    "Gabor2D",
    "NoiseFamily",
    "Perlin2D",
    "RESOLUTION",
    "Simplex2D",
    "Wavelet2D",
    "Worley2D",
    "build_kernel",
    "default_settings",
    "parse_settings",
    "quantize",
    "render_grid",
    "scalar_field",
    "scalar_to_rgba",
]
