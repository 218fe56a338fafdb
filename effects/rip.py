"""
VoidFX — Space-Time Rip Compositor

A tear along the segment start_point -> end_point. tear_distance() is a
signed distance-like value, negative inside the tear. Its edge bulges
mid-span, tapers at both ends, and churns with three layers of fractal
noise plus periodic sharp spikes.

From that value the compositor derives a void mask (solid black core), an
exponential glow, an electric noise overlay and vertical energy streaks near
the edge, and flares chosen per discrete time bucket.
"""

import numpy as np

from effects.noise import fractal_noise, fractal_noise_max, hash21, mix, smoothstep

# Width parameter is in hundredths of frame height
WIDTH_SCALE = 0.01
TAPER_POWER = 0.6
SPIKE_COUNT = 7.0
SPIKE_POWER = 16.0
SPIKE_GAIN = 0.5

VOID_EDGE = 0.004
GLOW_FALLOFF = 40.0
EDGE_BAND = 0.03
ALPHA_FALLOFF = 25.0
VOID_ALPHA_REDUCTION = 0.05

FLARE_BUCKETS_PER_SECOND = 2.0
FLARE_THRESHOLD = 0.6
FLARE_SPREAD = 0.002

# (frequency along tear, time drift, weight), coarse to micro jaggedness
JAG_LAYERS = (
    (4.0, 0.5, 0.6),
    (12.0, -0.9, 0.3),
    (32.0, 1.7, 0.15),
)


def _segment_coords(x, y, params):
    """Normalized position along the tear (0-1) and distance to the segment."""
    ax, ay = params.start_point
    bx, by = params.end_point
    ex, ey = bx - ax, by - ay
    length_sq = max(ex * ex + ey * ey, 1e-12)
    px = np.asarray(x, dtype=np.float64) - ax
    py = np.asarray(y, dtype=np.float64) - ay
    s = np.clip((px * ex + py * ey) / length_sq, 0.0, 1.0)
    qx = px - s * ex
    qy = py - s * ey
    return s, np.sqrt(qx * qx + qy * qy)


def _edge_half_width(s, t, params):
    """Half-width of the tear at position s, including jaggedness and spikes."""
    profile = np.sin(s * np.pi) ** TAPER_POWER
    jag = np.zeros_like(s)
    for i, (freq, drift, weight) in enumerate(JAG_LAYERS):
        n = fractal_noise(s * freq + t * drift, t * 0.3 + i * 7.31, 3)
        jag = jag + (n / fractal_noise_max(3) - 0.5) * weight
    spikes = np.abs(np.sin(s * np.pi * SPIKE_COUNT + t * 2.0)) ** SPIKE_POWER * SPIKE_GAIN
    half = params.width * WIDTH_SCALE * 0.5 * profile
    return np.maximum(half * (1.0 + jag * params.distortion_strength + spikes), 0.0)


def tear_distance(x, y, params) -> np.ndarray:
    """Signed distance to the tear edge; negative inside, zero on the edge."""
    t = params.time * params.animation_speed
    s, offset = _segment_coords(x, y, params)
    return offset - _edge_half_width(s, t, params)


def flare_for_bucket(bucket: int) -> tuple[float, float]:
    """Flare (strength, position along tear) for an integer time bucket.

    Strength is 0 for most buckets. Same bucket, same flare.
    """
    bucket = float(int(bucket))
    roll = float(hash21(bucket, 1.0))
    position = float(hash21(bucket, 7.3))
    strength = max(roll - FLARE_THRESHOLD, 0.0) / (1.0 - FLARE_THRESHOLD)
    return strength, position


def time_bucket(params) -> int:
    return int(np.floor(params.time * params.animation_speed * FLARE_BUCKETS_PER_SECOND))


def space_time_rip(x, y, params) -> np.ndarray:
    """Evaluate the tear at normalized coordinates.

    Args:
        x, y: UV coordinates (floats or arrays).
        params: SpaceTimeRipParams block.

    Returns:
        (..., 4) float32 RGBA. Inside the tear color is black and alpha is
        (1 - VOID_ALPHA_REDUCTION) of the distance falloff.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    x, y = np.broadcast_arrays(x, y)
    t = params.time * params.animation_speed

    s, offset = _segment_coords(x, y, params)
    dist = offset - _edge_half_width(s, t, params)
    outside = np.maximum(dist, 0.0)
    near_edge = 1.0 - smoothstep(0.0, EDGE_BAND, np.abs(dist))

    void = 1.0 - smoothstep(0.0, VOID_EDGE, dist)
    glow = np.exp(-outside * GLOW_FALLOFF) * params.glow_intensity
    electric = fractal_noise(x * 40.0 + t * 3.0, y * 40.0 - t * 2.0, 2) * near_edge
    streak_phase = x * 120.0 + t * 4.0 + fractal_noise(x * 6.0, t * 0.5, 2) * 3.0
    streaks = np.abs(np.sin(streak_phase)) ** 24.0 * near_edge * 0.8

    strength, position = flare_for_bucket(time_bucket(params))
    along = s - position
    flare = strength * np.exp(-along * along / FLARE_SPREAD) * np.exp(-np.abs(dist) * 30.0)

    combined = glow + electric * 0.6 + streaks + flare

    wobble = 1.0 + 0.15 * np.sin(t * np.array([1.3, 1.7, 2.1]) + np.array([0.0, 2.0, 4.0]))
    pulse = 0.85 + 0.15 * np.sin(t * 3.0)
    tint = np.asarray(params.glow_color[:3], dtype=np.float64) * params.glow_color[3] * wobble * pulse
    energy = tint * np.expand_dims(combined, -1)

    rgb = mix(energy, 0.0, np.expand_dims(void, -1))
    alpha = np.exp(-outside * ALPHA_FALLOFF) * (1.0 - VOID_ALPHA_REDUCTION * void)
    alpha = np.clip(alpha, 0.0, 1.0)

    return np.concatenate([rgb, np.expand_dims(alpha, -1)], axis=-1).astype(np.float32)
