"""
VoidFX — Frame Driver

Evaluates an effect once per pixel of a render target and collects the
RGBA samples into a frame. Pixel evaluation is pure, so row bands can be
handed to worker threads with no locking; every band sees the same
read-only parameter block and source image.

  1. Boundary checks (core.safety.preflight)
  2. Pixel-center UV grid
  3. Evaluate per band, stack bands in row order
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import numpy as np
from PIL import Image

from core.safety import preflight, validate_frame_count, validate_workers
from effects import EFFECTS, apply_effect, get_effect

logger = logging.getLogger(__name__)


def uv_grid(width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Pixel-center UV coordinates, each shaped (height, width).

    Row 0 is the top of the frame (v grows downward, as in the render target).
    """
    u = (np.arange(width, dtype=np.float64) + 0.5) / width
    v = (np.arange(height, dtype=np.float64) + 0.5) / height
    return np.meshgrid(u, v)


def _band_bounds(height: int, bands: int) -> list[tuple[int, int]]:
    edges = np.linspace(0, height, bands + 1).astype(int)
    return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]


def render_frame(effect_name: str, params, width: int, height: int,
                 source=None, workers: int = 1, validate: bool = True) -> np.ndarray:
    """Render one frame of an effect.

    Args:
        effect_name: Registry key (see effects.EFFECTS).
        params: Parameter block for the effect, carrying the frame's time.
        width, height: Output size in pixels.
        source: SourceImage for post-process effects.
        workers: Threads to split rows across. Output does not depend on it.
        validate: Run parameter ordering checks. False renders anyway.

    Returns:
        (height, width, 4) float32 RGBA, color unclamped.

    Raises:
        ValueError: Unknown effect.
        ParameterError: Boundary check failed.
    """
    get_effect(effect_name)
    preflight(
        effect_name, params, width, height,
        source=source,
        needs_source=EFFECTS[effect_name]["needs_source"],
        validate=validate,
    )
    validate_workers(workers)

    u, v = uv_grid(width, height)
    bands = _band_bounds(height, min(workers, height))
    logger.debug("Rendering %s at %dx%d in %d band(s)", effect_name, width, height, len(bands))

    def _render_band(bounds):
        top, bottom = bounds
        return apply_effect(effect_name, u[top:bottom], v[top:bottom], params=params, source=source)

    if len(bands) == 1:
        return _render_band(bands[0])

    with ThreadPoolExecutor(max_workers=len(bands)) as pool:
        parts = list(pool.map(_render_band, bands))
    return np.concatenate(parts, axis=0)


def frame_times(frames: int, fps: float = 30.0, start: float = 0.0) -> list[float]:
    """Elapsed time for each frame of a sequence."""
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")
    return [start + i / fps for i in range(frames)]


def render_sequence(effect_name: str, params, width: int, height: int, times,
                    source=None, workers: int = 1, validate: bool = True,
                    progress_callback=None):
    """Yield one frame per entry in `times`.

    The parameter block is re-timed for each frame; nothing else changes.

    Args:
        progress_callback: Optional fn(frame_index, total_frames).
    """
    times = list(times)
    validate_frame_count(len(times))
    for i, t in enumerate(times):
        frame = render_frame(
            effect_name, params.with_time(t), width, height,
            source=source, workers=workers, validate=validate,
        )
        if progress_callback:
            progress_callback(i, len(times))
        yield frame


def to_uint8(frame: np.ndarray) -> np.ndarray:
    """Clamp to [0, 1] and quantize to 8-bit."""
    return (np.clip(frame, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)


def save_png(frame: np.ndarray, path) -> Path:
    """Write an RGBA float frame as PNG. Creates parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(to_uint8(frame)).save(path)
    logger.debug("Saved %s", path)
    return path
