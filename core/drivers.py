"""
VoidFX — Parameter Drivers
Per-frame mapping from game state to effect parameter blocks.

The host calls these once per frame, between frames, and hands the
resulting blocks to the frame driver. All functions are pure: the same
state and time give the same block.
"""

import math

from pydantic import BaseModel, ConfigDict, Field

from core.params import BlackHoleParams, LensingParams, ScreenDistortionParams, SpaceTimeRipParams

# Glow tiers, checked in order: first match wins
SHIELD_HIGH_COLOR = (0.1, 0.33, 1.0, 1.0)
SHIELD_LOW_COLOR = (0.8, 0.0, 1.0, 1.0)
HEALTHY_COLOR = (1.0, 0.8, 0.2, 1.0)
CRITICAL_COLOR = (1.0, 0.3, 0.2, 1.0)

MIN_SHIELD_FACTOR = 0.1
RIP_BASE_WIDTH = 6.0
RIP_WIDTH_PULSE = 0.2


class PlayerState(BaseModel):
    """Snapshot of the player values the effects react to."""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    hp: float = Field(default=100.0, ge=0.0, le=100.0)
    energy: float = Field(default=100.0, ge=0.0, le=100.0)
    shield: float = Field(default=0.0, ge=0.0, le=100.0)
    speed: float = Field(default=0.0, ge=0.0)


def _rebuild(base, updates: dict):
    """Copy of a parameter block with updates applied and re-validated."""
    return type(base)(**{**base.model_dump(), **updates})


def _clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


def shield_factor(state: PlayerState) -> float:
    return _clamp(state.shield / 100.0, MIN_SHIELD_FACTOR, 1.0)


def glow_for_state(state: PlayerState) -> tuple:
    """Black hole tint: blue with strong shields, violet with weak ones,
    gold when unshielded but healthy, red otherwise."""
    if state.shield > 50:
        return SHIELD_HIGH_COLOR
    if state.shield > 0:
        return SHIELD_LOW_COLOR
    if state.hp > 50:
        return HEALTHY_COLOR
    return CRITICAL_COLOR


def blackhole_from_state(state: PlayerState, time: float,
                         base: BlackHoleParams = None) -> BlackHoleParams:
    """Black hole block for the player's current state.

    Stronger shields shrink the horizon and deepen the lensing.
    """
    base = base or BlackHoleParams()
    sf = shield_factor(state)
    return _rebuild(base, {
        "time": float(time),
        "radius": 0.15 - 0.06 * sf,
        "distortion_strength": 3.0 + 5.0 * sf,
        "rotation_speed": 0.2 * state.speed + math.pi,
        "glow_color": glow_for_state(state),
    })


def rip_from_state(time: float, base: SpaceTimeRipParams = None) -> SpaceTimeRipParams:
    """Rip block with its slow width pulse applied."""
    base = base or SpaceTimeRipParams()
    return _rebuild(base, {
        "time": float(time),
        "width": RIP_BASE_WIDTH * (1.0 + RIP_WIDTH_PULSE * math.sin(time)),
    })


def screen_distortion_strength(state: PlayerState) -> float:
    """0.5 at empty shield and energy, 1.0 at full."""
    return 0.5 + 0.3 * _clamp(state.shield / 100.0) + 0.2 * _clamp(state.energy / 100.0)


def screen_distortion_from_state(state: PlayerState, time: float, focal_position,
                                 screen_size) -> ScreenDistortionParams:
    return ScreenDistortionParams(
        time=float(time),
        focal_position=tuple(focal_position),
        distortion_strength=screen_distortion_strength(state),
        screen_size=tuple(screen_size),
    )


def lensing_center(world_x: float, world_y: float, viewport) -> tuple[float, float]:
    """World position (origin at viewport center) to lens UV.

    Args:
        viewport: (width, height) in world units.
    """
    w, h = viewport
    if w <= 0 or h <= 0:
        raise ValueError(f"Viewport must be positive, got {viewport}")
    return (world_x + w / 2.0) / w, (world_y + h / 2.0) / h


def lensing_from_state(world_x: float, world_y: float, viewport, time: float,
                       base: LensingParams = None) -> LensingParams:
    base = base or LensingParams()
    return _rebuild(base, {
        "time": float(time),
        "center": lensing_center(world_x, world_y, viewport),
    })
