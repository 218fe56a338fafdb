"""
VoidFX — Distortion Field
Gravitational pull warp with a swirl near the focal point.

The field returns a new sampling coordinate, not a color. Callers resample a
procedural pattern or a SourceImage at the warped coordinate.
"""

import numpy as np

# Floor on distance-to-center; keeps 1/d² and the normalization finite
MIN_DISTANCE = 0.001

PULL_SCALE = 5e-4
BREATHE_AMOUNT = 0.15
BREATHE_RATE = 0.5
SWIRL_BASE = 1.5
SWIRL_TIME_GAIN = 0.25


def pull_magnitude(dist, strength: float, time: float):
    """Inverse-square pull, breathing slowly with time, never past the center."""
    dist = np.maximum(np.asarray(dist, dtype=np.float64), MIN_DISTANCE)
    breathe = 1.0 + BREATHE_AMOUNT * np.sin(time * BREATHE_RATE)
    pull = strength * PULL_SCALE * breathe / (dist * dist)
    return np.minimum(pull, dist)


def swirl_angle(dist, strength: float, time: float,
                swirl_radius: float = 0.2, swirl_speed: float = 1.0):
    """Rotation applied to the pull direction inside swirl_radius.

    Weight (1 - d/R)² falls to zero with zero slope at d = R, so the swirl
    and pure radial branches meet without a seam.
    """
    dist = np.asarray(dist, dtype=np.float64)
    radius = max(float(swirl_radius), MIN_DISTANCE)
    weight = np.clip(1.0 - dist / radius, 0.0, 1.0) ** 2
    return strength * weight * (SWIRL_BASE + time * swirl_speed * SWIRL_TIME_GAIN)


def distort(x, y, center, strength: float, time: float,
            swirl_radius: float = 0.2, swirl_speed: float = 1.0):
    """Warp (x, y) toward center.

    Args:
        x, y: Normalized sample coordinates (floats or arrays).
        center: (cx, cy) focal point in the same space.
        strength: Pull strength. 0 returns the input coordinates unchanged.
        time: Elapsed seconds, drives breathing and swirl.
        swirl_radius: Distance below which the swirl is superimposed.
        swirl_speed: How fast the swirl angle grows with time.

    Returns:
        (wx, wy) warped coordinates, broadcast to the input shape.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    cx, cy = float(center[0]), float(center[1])

    dx = cx - x
    dy = cy - y
    dist = np.maximum(np.sqrt(dx * dx + dy * dy), MIN_DISTANCE)
    dir_x = dx / dist
    dir_y = dy / dist

    offset = pull_magnitude(dist, strength, time)
    angle = swirl_angle(dist, strength, time, swirl_radius, swirl_speed)
    cos_a = np.cos(angle)
    sin_a = np.sin(angle)
    rot_x = dir_x * cos_a - dir_y * sin_a
    rot_y = dir_x * sin_a + dir_y * cos_a

    return x + rot_x * offset, y + rot_y * offset
