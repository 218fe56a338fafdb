"""
VoidFX — Screen Distortion Compositor
Warps the whole rendered frame toward the player and adds a faint blue glow.
"""

import numpy as np

from effects.distortion import distort

GLOW_TINT = (0.3, 0.5, 1.0)
GLOW_GAIN = 0.15
GLOW_FALLOFF = 60.0


def focal_uv(params) -> tuple[float, float]:
    """Focal position converted from pixels to normalized space."""
    fx, fy = params.focal_position
    sw, sh = params.screen_size
    return fx / sw, fy / sh


def screen_distortion(x, y, params, source) -> np.ndarray:
    """Resample `source` through the distortion field.

    With zero strength the output is exactly source.sample(x, y).

    Returns:
        (..., 4) float32 RGBA; alpha comes from the source.
    """
    center = focal_uv(params)
    wx, wy = distort(x, y, center, params.distortion_strength, params.time)
    sampled = source.sample(wx, wy)

    dx = np.asarray(x, dtype=np.float64) - center[0]
    dy = np.asarray(y, dtype=np.float64) - center[1]
    glow = np.exp(-(dx * dx + dy * dy) * GLOW_FALLOFF) * params.distortion_strength * GLOW_GAIN
    glow_rgb = np.asarray(GLOW_TINT, dtype=np.float32) * np.expand_dims(glow, -1).astype(np.float32)

    out = sampled.copy()
    out[..., :3] = sampled[..., :3] + glow_rgb
    return out
