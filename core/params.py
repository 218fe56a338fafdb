"""
VoidFX — Effect Parameter Models

Pydantic models for the per-frame parameter blocks, one variant per effect.
Each block is supplied once per frame by the host and is read-only to the
pixel code. Field constraints catch malformed values when the block is
built; cross-field ordering checks live in core.safety and run at the
frame boundary.

Defaults are the startup values the game used for each material.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

Vec2 = tuple[float, float]
Color = tuple[float, float, float, float]


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class EffectParams(BaseModel):
    """Common behavior for all parameter blocks.

    Frozen: a block never changes during a frame's evaluation. Use
    with_time() to derive the next frame's block.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="forbid")

    time: float = Field(
        default=0.0,
        description="Elapsed seconds. Passed explicitly; nothing reads a clock.",
    )

    def with_time(self, time: float):
        """Return a copy of this block at a different elapsed time.

        The copy is re-validated, so a non-finite time raises ValidationError.
        """
        return type(self).model_validate({**self.model_dump(), "time": time})


def _check_color(value: Color) -> Color:
    for channel in value:
        if not 0.0 <= channel <= 1.0:
            raise ValueError(f"Color channels must be within 0-1, got {value}")
    return value


# ---------------------------------------------------------------------------
# Per-effect blocks
# ---------------------------------------------------------------------------

class BlackHoleParams(EffectParams):
    """Black hole with accretion disk, Einstein ring and lensed stars.

    Radii are in UV units around `center`. The compositing assumes
    radius < accretion_radius < 0.5 (the outer cutoff).
    """
    effect: Literal["blackhole"] = "blackhole"
    center: Vec2 = Field(default=(0.5, 0.5), description="Center in UV space.")
    radius: float = Field(default=0.1, ge=0.0, description="Event horizon radius.")
    accretion_radius: float = Field(default=0.2, ge=0.0, description="Outer accretion disk radius.")
    distortion_strength: float = Field(default=5.0, ge=0.0, description="Lensing bend applied to background stars.")
    rotation_speed: float = Field(default=0.5, description="Angular speed of disk pattern and star field.")
    glow_color: Color = Field(default=(0.2, 0.7, 1.0, 1.0), description="RGBA tint for ring, disk edge and glow; alpha scales its strength.")

    @field_validator("glow_color")
    @classmethod
    def check_glow_color(cls, v: Color) -> Color:
        return _check_color(v)


class SpaceTimeRipParams(EffectParams):
    """Horizontal tear between two points with an energy glow."""
    effect: Literal["spacetimerip"] = "spacetimerip"
    start_point: Vec2 = Field(default=(0.0, 0.5), description="Tear start in UV space.")
    end_point: Vec2 = Field(default=(1.0, 0.5), description="Tear end in UV space.")
    width: float = Field(
        default=8.0,
        ge=0.0,
        description="Peak tear width in hundredths of frame height.",
    )
    glow_intensity: float = Field(default=0.8, ge=0.0, description="Glow strength around the edge.")
    distortion_strength: float = Field(default=1.5, ge=0.0, description="Jaggedness of the tear edge.")
    glow_color: Color = Field(default=(0.6, 0.0, 1.0, 0.8), description="RGBA energy tint; alpha scales the glow.")
    animation_speed: float = Field(default=0.7, ge=0.0, description="Time multiplier for churn and flares.")

    @field_validator("glow_color")
    @classmethod
    def check_glow_color(cls, v: Color) -> Color:
        return _check_color(v)


class ScreenDistortionParams(EffectParams):
    """Full-screen warp around a focal point given in pixels."""
    effect: Literal["screendistortion"] = "screendistortion"
    focal_position: Vec2 = Field(default=(400.0, 300.0), description="Focal point in pixels.")
    distortion_strength: float = Field(default=1.0, ge=0.0, description="Pull strength. 0 = passthrough.")
    screen_size: Vec2 = Field(default=(800.0, 600.0), description="Screen (width, height) in pixels.")

    @field_validator("screen_size")
    @classmethod
    def check_screen_size(cls, v: Vec2) -> Vec2:
        if v[0] <= 0 or v[1] <= 0:
            raise ValueError(f"screen_size must be positive, got {v}")
        return v


class LensingParams(EffectParams):
    """Lensing pass over an offscreen render target."""
    effect: Literal["lensing"] = "lensing"
    center: Vec2 = Field(default=(0.5, 0.5), description="Lens center in UV space.")
    strength: float = Field(default=0.5, ge=0.0, description="Pull strength. 0 = passthrough.")
    rotation_speed: float = Field(default=0.2, description="Swirl growth rate.")
    radius: float = Field(default=0.15, ge=0.0, description="Swirl radius; matches the black hole radius.")


# ---------------------------------------------------------------------------
# Tagged union
# ---------------------------------------------------------------------------

AnyEffectParams = Annotated[
    Union[BlackHoleParams, SpaceTimeRipParams, ScreenDistortionParams, LensingParams],
    Field(discriminator="effect"),
]

_PARAMS_ADAPTER: TypeAdapter = TypeAdapter(AnyEffectParams)

PARAMS_BY_EFFECT: dict[str, type[EffectParams]] = {
    "blackhole": BlackHoleParams,
    "spacetimerip": SpaceTimeRipParams,
    "screendistortion": ScreenDistortionParams,
    "lensing": LensingParams,
}


def parse_params(data: dict[str, Any]) -> EffectParams:
    """Build the right parameter block from a dict carrying an 'effect' tag.

    Raises:
        pydantic.ValidationError: Unknown tag or invalid field values.
    """
    return _PARAMS_ADAPTER.validate_python(data)


def params_for(effect: str, **overrides: Any) -> EffectParams:
    """Default block for `effect` with keyword overrides applied."""
    if effect not in PARAMS_BY_EFFECT:
        available = ", ".join(sorted(PARAMS_BY_EFFECT))
        raise ValueError(f"Unknown effect: {effect}. Available: {available}")
    return PARAMS_BY_EFFECT[effect](**overrides)
