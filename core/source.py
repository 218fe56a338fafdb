"""
VoidFX — Source Image Access
Read-only RGBA image with bilinear, clamp-to-edge sampling in UV space.

The screen-distortion and lensing passes resample an externally rendered
frame through this. Sampling goes through cv2.remap so a whole frame of
warped coordinates is resolved in one call.
"""

from pathlib import Path

import cv2
import numpy as np
from PIL import Image

# cv2.remap rejects maps larger than SHRT_MAX; other shapes are folded
_MAX_REMAP_DIM = 32767
_FOLD_COLUMNS = 1024


def _fold_shape(n: int) -> tuple[int, int]:
    """(rows, cols) grid holding n samples, both sides below _MAX_REMAP_DIM."""
    cols = max(min(n, _FOLD_COLUMNS), -(-n // (_MAX_REMAP_DIM - 1)))
    return -(-n // cols), cols


class SourceImage:
    """RGBA float32 pixels in [0, 1], shape (H, W, 4).

    Texel centers sit at ((i + 0.5) / W, (j + 0.5) / H). Coordinates outside
    [0, 1] repeat the edge texels.
    """

    def __init__(self, pixels: np.ndarray):
        pixels = np.ascontiguousarray(pixels, dtype=np.float32)
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"SourceImage needs (H, W, 4) pixels, got {pixels.shape}")
        self._pixels = pixels

    @classmethod
    def from_array(cls, frame: np.ndarray) -> "SourceImage":
        """Wrap a uint8 or float frame with 3 or 4 channels."""
        frame = np.asarray(frame)
        if frame.ndim == 2:
            frame = np.dstack([frame, frame, frame])
        if frame.dtype == np.uint8:
            frame = frame.astype(np.float32) / 255.0
        else:
            frame = frame.astype(np.float32)
        if frame.shape[2] == 3:
            alpha = np.ones(frame.shape[:2] + (1,), dtype=np.float32)
            frame = np.concatenate([frame, alpha], axis=2)
        return cls(frame)

    @classmethod
    def open(cls, path) -> "SourceImage":
        """Load any image Pillow can read."""
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Source image not found: {path}")
        with Image.open(path) as img:
            frame = np.array(img.convert("RGBA"))
        return cls.from_array(frame)

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    def sample(self, u, v) -> np.ndarray:
        """Bilinear sample at UV coordinates.

        Args:
            u, v: Floats or broadcast-compatible arrays.

        Returns:
            (..., 4) float32 RGBA with the broadcast shape of u and v.
        """
        u = np.asarray(u, dtype=np.float64)
        v = np.asarray(v, dtype=np.float64)
        u, v = np.broadcast_arrays(u, v)
        shape = u.shape

        map_x = (u * self.width - 0.5).astype(np.float32)
        map_y = (v * self.height - 0.5).astype(np.float32)

        if len(shape) == 2 and 0 < shape[0] < _MAX_REMAP_DIM and 0 < shape[1] < _MAX_REMAP_DIM:
            out = self._remap(map_x, map_y)
            return out.reshape(shape + (4,))

        flat_x = map_x.ravel()
        flat_y = map_y.ravel()
        n = flat_x.size
        if n == 0:
            return np.zeros(shape + (4,), dtype=np.float32)
        rows, cols = _fold_shape(n)
        pad = rows * cols - n
        grid_x = np.pad(flat_x, (0, pad), mode="edge").reshape(rows, cols)
        grid_y = np.pad(flat_y, (0, pad), mode="edge").reshape(rows, cols)
        out = self._remap(grid_x, grid_y).reshape(-1, 4)[:n]
        return out.reshape(shape + (4,))

    def _remap(self, map_x: np.ndarray, map_y: np.ndarray) -> np.ndarray:
        return cv2.remap(
            self._pixels, map_x, map_y,
            cv2.INTER_LINEAR, borderMode=cv2.BORDER_REPLICATE,
        )
