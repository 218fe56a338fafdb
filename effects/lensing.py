"""
VoidFX — Gravitational Lensing Compositor

Post pass over an offscreen render target: background pixels are pulled
toward the lens center and swirled inside `radius`. A thin shadow ring at
half the radius darkens toward black.
"""

import numpy as np

from effects.distortion import distort
from effects.noise import smoothstep

SHADOW_DEPTH = 0.6
SHADOW_WIDTH = 0.2


def lensing(x, y, params, source) -> np.ndarray:
    """Lensed resample of `source`. Zero strength is an exact passthrough."""
    wx, wy = distort(
        x, y, params.center, params.strength, params.time,
        swirl_radius=params.radius, swirl_speed=params.rotation_speed,
    )
    sampled = source.sample(wx, wy)

    dx = np.asarray(x, dtype=np.float64) - params.center[0]
    dy = np.asarray(y, dtype=np.float64) - params.center[1]
    dist = np.sqrt(dx * dx + dy * dy)
    edge = params.radius * 0.5
    shadow = smoothstep(edge * (1.0 - SHADOW_WIDTH), edge, dist) * (1.0 - smoothstep(edge, edge * (1.0 + SHADOW_WIDTH), dist))
    darken = 1.0 - shadow * min(params.strength, 1.0) * SHADOW_DEPTH

    out = sampled.copy()
    out[..., :3] = sampled[..., :3] * np.expand_dims(darken, -1).astype(np.float32)
    return out
