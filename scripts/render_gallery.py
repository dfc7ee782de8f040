from __future__ import annotations

import logging
import sys
from pathlib import Path

logger = logging.getLogger("gallery")

# One showcase per family: (file stem, family, overrides).
SCENES = [
    ("perlin_fbm", "perlin", dict(octaves=5, noise_type="standard")),
    ("perlin_ridge", "perlin", dict(octaves=5, noise_type="ridge")),
    ("simplex_warp", "simplex", dict(octaves=4, noise_type="domain_warp")),
    ("wavelet_turbulence", "wavelet", dict(octaves=4, noise_type="turbulence")),
    ("gabor_anisotropic", "gabor", dict(noise_type="anisotropic", anisotropy=2.5)),
    ("worley_crackle", "worley", dict(octaves=3, noise_type="crackle")),
    (
        "anisotropic_directional",
        "anisotropic",
        dict(octaves=4, noise_type="directional", anisotropy=3.0, angle_step=25.0),
    ),
]


def main() -> None:
    root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(root))

    from noiselab.render import render_grid
    from noiselab.settings import parse_settings
    from viz.export import color_buffer_to_png_bytes

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )

    out_dir = root / "assets"
    out_dir.mkdir(parents=True, exist_ok=True)

    for stem, family, overrides in SCENES:
        settings = parse_settings(family, overrides)
        data = color_buffer_to_png_bytes(render_grid(settings, workers=4))
        path = out_dir / f"{stem}.png"
        path.write_bytes(data)
        logger.info("wrote %s (%d bytes)", path, len(data))


if __name__ == "__main__":
    main()
