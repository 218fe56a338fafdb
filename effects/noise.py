"""
VoidFX — Noise Primitives
Deterministic hash, smoothed value noise, and fractal (multi-octave) noise.

Every function accepts Python floats or numpy arrays and broadcasts, so the
same call evaluates one sample or a whole frame of pixels.
"""

import numpy as np

# Classic shader hash constants: fract(sin(dot(p, K)) * M)
_HASH_K = (127.1, 311.7)
_HASH_M = 43758.5453

FRACTAL_PERSISTENCE = 0.6
FRACTAL_LACUNARITY = 2.0
FRACTAL_START_AMPLITUDE = 0.5


def fract(x):
    """Fractional part, x - floor(x)."""
    x = np.asarray(x, dtype=np.float64)
    return x - np.floor(x)


def mix(a, b, t):
    """Linear blend between a and b (GLSL mix)."""
    return a * (1.0 - t) + b * t


def smoothstep(edge0, edge1, x):
    """Hermite step: 0 below edge0, 1 above edge1, 3t²-2t³ in between.

    Degenerate edges (edge0 == edge1) behave like a hard step at edge0.
    """
    x = np.asarray(x, dtype=np.float64)
    span = np.asarray(edge1, dtype=np.float64) - edge0
    safe = np.where(span == 0.0, 1.0, span)
    t = np.clip((x - edge0) / safe, 0.0, 1.0)
    t = np.where(span == 0.0, (x >= edge0).astype(np.float64), t)
    return t * t * (3.0 - 2.0 * t)


def step(edge, x):
    """0.0 where x < edge, else 1.0."""
    return (np.asarray(x) >= edge).astype(np.float64)


def hash21(x, y):
    """Pseudo-random value in [0, 1) for a 2-D point.

    Not continuous in value or derivative; identical input always gives
    identical output.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    h = fract(np.sin(x * _HASH_K[0] + y * _HASH_K[1]) * _HASH_M)
    # x - floor(x) rounds up to 1.0 for tiny negative inputs
    return np.where(h >= 1.0, 0.0, h)


def value_noise(x, y):
    """Smoothed lattice noise in [0, 1], C¹ across lattice boundaries.

    Hashes the four integer corners around the point and blends them
    bilinearly with a 3t²-2t³ easing on the fractional part.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    ix, iy = np.floor(x), np.floor(y)
    fx, fy = x - ix, y - iy

    a = hash21(ix, iy)
    b = hash21(ix + 1.0, iy)
    c = hash21(ix, iy + 1.0)
    d = hash21(ix + 1.0, iy + 1.0)

    ux = fx * fx * (3.0 - 2.0 * fx)
    uy = fy * fy * (3.0 - 2.0 * fy)

    return mix(mix(a, b, ux), mix(c, d, ux), uy)


def fractal_noise(x, y, octaves: int = 4):
    """Sum of value-noise octaves, low to high frequency.

    Amplitude starts at 0.5 and is multiplied by 0.6 per octave while the
    frequency doubles. The result is not renormalized; its upper bound is
    0.5 * (1 - 0.6**octaves) / 0.4.
    """
    octaves = int(octaves)
    if octaves < 1:
        raise ValueError(f"octaves must be >= 1, got {octaves}")
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    value = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
    amplitude = FRACTAL_START_AMPLITUDE
    frequency = 1.0
    for _ in range(octaves):
        value = value + value_noise(x * frequency, y * frequency) * amplitude
        amplitude *= FRACTAL_PERSISTENCE
        frequency *= FRACTAL_LACUNARITY
    return value


def fractal_noise_max(octaves: int) -> float:
    """Upper bound of fractal_noise for the given octave count."""
    return FRACTAL_START_AMPLITUDE * (1.0 - FRACTAL_PERSISTENCE ** int(octaves)) / (1.0 - FRACTAL_PERSISTENCE)
