from __future__ import annotations

import sys
import time
from pathlib import Path


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark of a full 400x400 recomputation per family.

    Every family runs with 4 octaves in its default mode, once on a single
    thread and once split over 4 worker threads.
    """

    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

    from noiselab.render import render_grid
    from noiselab.settings import NoiseFamily, parse_settings

    for family in NoiseFamily:
        settings = parse_settings(family, dict(octaves=4))
        _timeit(
            f"{family.value}: render_grid (1 worker)",
            lambda: render_grid(settings, workers=1),
        )
        _timeit(
            f"{family.value}: render_grid (4 workers)",
            lambda: render_grid(settings, workers=4),
        )


if __name__ == "__main__":
    main()
