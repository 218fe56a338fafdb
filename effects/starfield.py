"""
VoidFX — Starfield Generator
Sparse point lights scattered by thresholding the hash at three scales.
"""

import numpy as np

from effects.noise import hash21, step

# (scale, threshold, weight): small, medium, large stars
STAR_LAYERS = (
    (500.0, 0.98, 0.6),
    (200.0, 0.985, 1.0),
    (100.0, 0.99, 1.6),
)


def stars(x, y, seed: float = 0.0):
    """Star intensity at (x, y). 0 for empty sky, unbounded above 1.

    Each layer offsets the scaled coordinate by the seed so different seeds
    give independent skies.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
    for scale, threshold, weight in STAR_LAYERS:
        h = hash21(x * scale + seed, y * scale + seed)
        total = total + step(threshold, h) * weight
    return total
