"""
VoidFX — Frame Boundary Guards
Checks run once per frame before any pixel is evaluated.
Catches inconsistent parameter blocks, oversized renders, and missing inputs.
The per-pixel code never raises; everything that can fail fails here.
"""

import logging

from effects.blackhole import OUTER_RADIUS

logger = logging.getLogger(__name__)

# --- Configurable Limits ---
MAX_RENDER_DIM = 8192      # Maximum width or height of a rendered frame
MAX_RENDER_PIXELS = 33_554_432  # 8192 x 4096
MAX_WORKERS = 32           # Maximum render threads
MAX_SEQUENCE_FRAMES = 10_000


class ParameterError(Exception):
    """Raised when a parameter block or render request fails a boundary check."""
    pass


def validate_params(params) -> None:
    """Cross-field checks that pydantic field constraints cannot express.

    Args:
        params: Any effect parameter block.

    Raises:
        ParameterError: If the block would render a visually broken result.
    """
    effect = getattr(params, "effect", None)

    if effect == "blackhole":
        if params.radius >= params.accretion_radius:
            raise ParameterError(
                f"Event horizon radius ({params.radius}) must be smaller than "
                f"accretion radius ({params.accretion_radius})."
            )
        if params.accretion_radius >= OUTER_RADIUS:
            raise ParameterError(
                f"Accretion radius ({params.accretion_radius}) must be inside "
                f"the outer cutoff ({OUTER_RADIUS})."
            )

    elif effect == "spacetimerip":
        if tuple(params.start_point) == tuple(params.end_point):
            raise ParameterError(
                f"Tear start and end are the same point: {params.start_point}"
            )

    elif effect == "lensing":
        if params.radius > OUTER_RADIUS:
            raise ParameterError(
                f"Lensing radius ({params.radius}) exceeds the outer cutoff ({OUTER_RADIUS})."
            )


def validate_render_size(width: int, height: int) -> None:
    """Check frame dimensions against the configured limits.

    Raises:
        ParameterError: If either side is non-positive or the frame is too large.
    """
    if width <= 0 or height <= 0:
        raise ParameterError(f"Frame size must be positive, got {width}x{height}")
    if width > MAX_RENDER_DIM or height > MAX_RENDER_DIM:
        raise ParameterError(
            f"Frame {width}x{height} exceeds {MAX_RENDER_DIM}px per side."
        )
    if width * height > MAX_RENDER_PIXELS:
        raise ParameterError(
            f"Frame {width}x{height} has {width * height} pixels, max is {MAX_RENDER_PIXELS}. "
            f"Render at a lower resolution."
        )


def validate_workers(workers: int) -> int:
    """Return a usable worker count.

    Raises:
        ParameterError: If workers is outside 1..MAX_WORKERS.
    """
    if not 1 <= workers <= MAX_WORKERS:
        raise ParameterError(f"workers must be between 1 and {MAX_WORKERS}, got {workers}")
    return workers


def validate_frame_count(frames: int) -> None:
    if not 1 <= frames <= MAX_SEQUENCE_FRAMES:
        raise ParameterError(
            f"Sequence needs 1-{MAX_SEQUENCE_FRAMES} frames, got {frames}"
        )


def require_source(effect_name: str, source) -> None:
    """Raise if an effect that resamples a source image was given none."""
    if source is None:
        raise ParameterError(
            f"Effect '{effect_name}' resamples a source image; pass source=..."
        )


def preflight(effect_name: str, params, width: int, height: int,
              source=None, needs_source: bool = False, validate: bool = True) -> None:
    """Run all frame-boundary checks for one render.

    Size and source checks always run. Parameter ordering checks run unless
    validate is False, in which case the bypass is logged.
    """
    validate_render_size(width, height)
    if needs_source:
        require_source(effect_name, source)
    if validate:
        validate_params(params)
    else:
        logger.warning("Parameter validation bypassed for %s", effect_name)
