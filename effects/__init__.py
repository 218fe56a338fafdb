"""
VoidFX — Effects Registry
Uniform interface over the compositors.
Every effect is a function: (x, y, params[, source]) -> (..., 4) float32 RGBA
"""

from core.params import (
    BlackHoleParams,
    LensingParams,
    ScreenDistortionParams,
    SpaceTimeRipParams,
)
from effects.blackhole import black_hole
from effects.lensing import lensing
from effects.rip import space_time_rip
from effects.screen import screen_distortion


EFFECTS = {
    "blackhole": {
        "fn": black_hole,
        "model": BlackHoleParams,
        "category": "procedural",
        "needs_source": False,
        "description": "Black hole with event horizon, accretion disk, Einstein ring, lensed stars and glow",
    },
    "spacetimerip": {
        "fn": space_time_rip,
        "model": SpaceTimeRipParams,
        "category": "procedural",
        "needs_source": False,
        "description": "Jagged tear in space with a black void, electric edge, streaks and flares",
    },
    "screendistortion": {
        "fn": screen_distortion,
        "model": ScreenDistortionParams,
        "category": "post",
        "needs_source": True,
        "description": "Warp the whole frame toward a focal point with a faint blue glow",
    },
    "lensing": {
        "fn": lensing,
        "model": LensingParams,
        "category": "post",
        "needs_source": True,
        "description": "Gravitational lensing swirl around a point with a shadow ring",
    },
}

CATEGORIES = {
    "procedural": "Procedural (generates its own pixels)",
    "post": "Post-process (resamples a source image)",
}


def _default_params(entry) -> dict:
    defaults = entry["model"]().model_dump()
    defaults.pop("effect", None)
    return defaults


def get_effect(name: str):
    """Get an effect by name. Returns (fn, default_params).

    Raises ValueError if effect doesn't exist.
    """
    if name not in EFFECTS:
        available = ", ".join(sorted(EFFECTS.keys()))
        raise ValueError(f"Unknown effect: {name}. Available: {available}")
    entry = EFFECTS[name]
    return entry["fn"], _default_params(entry)


def needs_source(name: str) -> bool:
    """True if the effect resamples a source image."""
    get_effect(name)
    return EFFECTS[name]["needs_source"]


def _describe(name: str, entry) -> dict:
    return {
        "name": name,
        "description": entry["description"],
        "params": _default_params(entry),
        "category": entry["category"],
        "needs_source": entry["needs_source"],
    }


def list_effects(category: str = None) -> list[dict]:
    """List all available effects with descriptions.

    Args:
        category: Optional filter, only return effects in this category.
    """
    return [
        _describe(name, entry)
        for name, entry in EFFECTS.items()
        if not category or entry["category"] == category
    ]


def list_categories() -> list[str]:
    """Return ordered list of category keys."""
    return list(CATEGORIES.keys())


def search_effects(query: str, max_query_len: int = 200) -> list[dict]:
    """Search effects by name or description substring."""
    if len(query) > max_query_len:
        raise ValueError(f"Search query too long (max {max_query_len} chars)")
    query_lower = query.lower()
    return [
        _describe(name, entry)
        for name, entry in EFFECTS.items()
        if query_lower in name or query_lower in entry["description"].lower()
    ]


def make_params(effect_name: str, **overrides):
    """Validated parameter block for an effect: defaults plus overrides.

    Raises:
        ValueError: Unknown effect.
        pydantic.ValidationError: Bad override values.
    """
    get_effect(effect_name)
    return EFFECTS[effect_name]["model"](**overrides)


def apply_effect(effect_name: str, x, y, params=None, source=None, **overrides):
    """Evaluate a named effect at UV coordinates.

    Args:
        effect_name: Registry key.
        x, y: UV coordinates (floats or arrays).
        params: Parameter block. Built from defaults and overrides if None.
        source: SourceImage, required by post-process effects.

    Returns:
        (..., 4) float32 RGBA.
    """
    fn, _ = get_effect(effect_name)
    entry = EFFECTS[effect_name]
    if params is None:
        params = make_params(effect_name, **overrides)
    elif overrides:
        params = entry["model"](**{**params.model_dump(), **overrides})
    if not isinstance(params, entry["model"]):
        raise ValueError(
            f"Effect '{effect_name}' needs {entry['model'].__name__}, "
            f"got {type(params).__name__}"
        )

    if entry["needs_source"]:
        from core.safety import require_source
        require_source(effect_name, source)
        return fn(x, y, params, source)
    return fn(x, y, params)
