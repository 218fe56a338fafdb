"""
VoidFX — Black Hole Compositor

Radial zones around the center, inner to outer:
    event horizon -> accretion disk -> Einstein ring -> lensed stars -> outer glow

Each zone is a (name, blend, opacity, color) record evaluated in fixed order.
Disk and ring combine by channel-wise max, stars and glow add on top, and
alpha is the clamped sum of zone opacities. The event horizon occludes:
it forces black and full alpha wherever it is opaque. Beyond OUTER_RADIUS
the sample is transparent black regardless of everything else.
"""

from dataclasses import dataclass
from typing import Callable

import numpy as np

from effects.distortion import MIN_DISTANCE
from effects.noise import fractal_noise, fractal_noise_max, mix, smoothstep
from effects.starfield import stars

OUTER_RADIUS = 0.5

HORIZON_EDGE = 0.01
DISK_INNER_EDGE = 0.02
DISK_OUTER_FADE = 0.05
DISK_INNER_HUE = (1.0, 0.55, 0.15)
RING_WIDTH = 0.012
RING_OPACITY = 0.6
STAR_FADE_IN = 0.06
STAR_FADE_OUT = 0.08
STAR_SEED = 17.0
STAR_TINT = (0.9, 0.95, 1.0)
GLOW_OPACITY = 0.35
GLOW_FALLOFF = 4.0


@dataclass(frozen=True)
class _Sample:
    """Polar view of the sample positions relative to the center."""
    x: np.ndarray
    y: np.ndarray
    dist: np.ndarray
    angle: np.ndarray
    params: object


@dataclass(frozen=True)
class Zone:
    name: str
    blend: str  # "occlude", "max" or "add"
    opacity: Callable[[_Sample], np.ndarray]
    color: Callable[[_Sample, np.ndarray], np.ndarray]


def _rgb(color) -> np.ndarray:
    return np.asarray(color[:3], dtype=np.float64)


def _tint(color) -> np.ndarray:
    """Color scaled by its own alpha channel."""
    return _rgb(color) * color[3]


def _black(s: _Sample, opacity: np.ndarray) -> np.ndarray:
    return np.zeros(s.dist.shape + (3,), dtype=np.float64)


# --- Event horizon ---

def horizon_opacity(s: _Sample) -> np.ndarray:
    r = s.params.radius
    return 1.0 - smoothstep(r, r + HORIZON_EDGE, s.dist)


# --- Accretion disk ---

def _disk_position(s: _Sample) -> np.ndarray:
    p = s.params
    span = max(p.accretion_radius - p.radius, MIN_DISTANCE)
    return np.clip((s.dist - p.radius) / span, 0.0, 1.0)


def _disk_pattern(s: _Sample) -> np.ndarray:
    """Angular bands plus turbulence, rotating with time * rotation_speed."""
    p = s.params
    spin = p.time * p.rotation_speed
    t = _disk_position(s)
    bands = 0.5 + 0.5 * np.sin(s.angle * 5.0 + spin * 2.0 - t * 12.0)
    # Noise sampled on the unit circle so there is no seam at angle = ±pi
    a = s.angle - spin
    turb = fractal_noise(np.cos(a) * 2.5 + t * 4.0, np.sin(a) * 2.5 + t * 4.0, 3)
    return 0.6 * bands + 0.4 * turb / fractal_noise_max(3)


def disk_opacity(s: _Sample) -> np.ndarray:
    p = s.params
    inner = smoothstep(p.radius, p.radius + DISK_INNER_EDGE, s.dist)
    outer = 1.0 - smoothstep(p.accretion_radius - DISK_OUTER_FADE, p.accretion_radius, s.dist)
    return inner * outer * (0.55 + 0.45 * _disk_pattern(s))


def disk_color(s: _Sample, opacity: np.ndarray) -> np.ndarray:
    # Squared position keeps most of the disk on the inner hue
    t = np.expand_dims(_disk_position(s), -1)
    hue = mix(_rgb(DISK_INNER_HUE), _tint(s.params.glow_color), t * t)
    return hue * np.expand_dims(opacity * 1.4, -1)


# --- Einstein ring ---

def _ring_profile(s: _Sample) -> np.ndarray:
    offset = (s.dist - s.params.accretion_radius) / RING_WIDTH
    return np.exp(-offset * offset)


def ring_opacity(s: _Sample) -> np.ndarray:
    return RING_OPACITY * _ring_profile(s)


def ring_color(s: _Sample, opacity: np.ndarray) -> np.ndarray:
    tint = mix(_tint(s.params.glow_color), np.ones(3), 0.5)
    return tint * np.expand_dims(_ring_profile(s) * 1.5, -1)


# --- Lensed stars ---

def _lensed_star_intensity(s: _Sample) -> np.ndarray:
    """Starlight sampled along a bent, slowly rotating angle."""
    p = s.params
    mask = smoothstep(p.accretion_radius, p.accretion_radius + STAR_FADE_IN, s.dist)
    mask = mask * (1.0 - smoothstep(OUTER_RADIUS - STAR_FADE_OUT, OUTER_RADIUS, s.dist))

    angle = s.angle + p.time * 0.05 + np.sin(p.time * p.rotation_speed * 0.5 + s.dist * 8.0) * 0.08
    bend = p.distortion_strength * 0.002 / np.maximum(s.dist - p.radius, MIN_DISTANCE)
    reach = s.dist + bend
    sx = p.center[0] + np.cos(angle) * reach
    sy = p.center[1] + np.sin(angle) * reach
    return stars(sx, sy, STAR_SEED) * mask


def stars_opacity(s: _Sample) -> np.ndarray:
    return np.minimum(_lensed_star_intensity(s), 1.0) * 0.9


def stars_color(s: _Sample, opacity: np.ndarray) -> np.ndarray:
    return _rgb(STAR_TINT) * np.expand_dims(_lensed_star_intensity(s), -1)


# --- Outer glow ---

def glow_opacity(s: _Sample) -> np.ndarray:
    p = s.params
    falloff = np.exp(-np.maximum(s.dist - p.radius, 0.0) * GLOW_FALLOFF)
    fade = 1.0 - smoothstep(OUTER_RADIUS * 0.7, OUTER_RADIUS, s.dist)
    return GLOW_OPACITY * falloff * fade


def glow_color(s: _Sample, opacity: np.ndarray) -> np.ndarray:
    return _tint(s.params.glow_color) * np.expand_dims(opacity * 1.2, -1)


ZONES = (
    Zone("event_horizon", "occlude", horizon_opacity, _black),
    Zone("accretion_disk", "max", disk_opacity, disk_color),
    Zone("einstein_ring", "max", ring_opacity, ring_color),
    Zone("lensed_stars", "add", stars_opacity, stars_color),
    Zone("outer_glow", "add", glow_opacity, glow_color),
)


def _polar(x, y, params) -> _Sample:
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    x, y = np.broadcast_arrays(x, y)
    dx = x - params.center[0]
    dy = y - params.center[1]
    return _Sample(
        x=x, y=y,
        dist=np.sqrt(dx * dx + dy * dy),
        angle=np.arctan2(dy, dx),
        params=params,
    )


def zone_opacities(x, y, params) -> dict:
    """Opacity of every zone at (x, y), keyed by zone name."""
    s = _polar(x, y, params)
    return {zone.name: zone.opacity(s) for zone in ZONES}


def black_hole(x, y, params) -> np.ndarray:
    """Evaluate the black hole at normalized coordinates.

    Args:
        x, y: UV coordinates (floats or arrays).
        params: BlackHoleParams block.

    Returns:
        (..., 4) float32 RGBA, color unclamped, alpha in [0, 1].
    """
    s = _polar(x, y, params)
    shape = s.dist.shape

    maxed = np.zeros(shape + (3,), dtype=np.float64)
    added = np.zeros(shape + (3,), dtype=np.float64)
    alpha = np.zeros(shape, dtype=np.float64)
    occlusion = np.zeros(shape, dtype=np.float64)

    for zone in ZONES:
        opacity = zone.opacity(s)
        alpha = alpha + opacity
        if zone.blend == "occlude":
            occlusion = np.maximum(occlusion, opacity)
            continue
        color = zone.color(s, opacity)
        if zone.blend == "max":
            maxed = np.maximum(maxed, color)
        else:
            added = added + color

    rgb = (maxed + added) * np.expand_dims(1.0 - occlusion, -1)
    alpha = np.clip(alpha, 0.0, 1.0)

    outside = s.dist > OUTER_RADIUS
    rgb = np.where(np.expand_dims(outside, -1), 0.0, rgb)
    alpha = np.where(outside, 0.0, alpha)

    return np.concatenate([rgb, np.expand_dims(alpha, -1)], axis=-1).astype(np.float32)
