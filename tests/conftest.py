"""
Conftest: shared fixtures for all VoidFX test modules.

1. Project root on sys.path so `core` and `effects` import without install
2. Synthetic source images (gradient, not blank) for the post-process effects
3. Default parameter blocks for every effect
"""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.params import BlackHoleParams, LensingParams, ScreenDistortionParams, SpaceTimeRipParams
from core.source import SourceImage


def _make_test_frame(width=64, height=48):
    """Generate a synthetic RGBA test frame (gradient, not blank)."""
    frame = np.zeros((height, width, 4), dtype=np.uint8)
    frame[:, :, 0] = np.linspace(0, 255, width, dtype=np.uint8)  # R gradient
    frame[:, :, 1] = np.linspace(0, 255, height, dtype=np.uint8)[:, None]  # G gradient
    frame[:, :, 2] = 128  # constant B
    frame[:, :, 3] = 255
    return frame


@pytest.fixture
def test_frame():
    return _make_test_frame()


@pytest.fixture
def gradient_source():
    return SourceImage.from_array(_make_test_frame())


@pytest.fixture
def uv_samples():
    """A spread of UV points covering the frame and a little beyond."""
    rng = np.random.default_rng(1234)
    return rng.uniform(-0.1, 1.1, size=(2, 500))


@pytest.fixture
def blackhole_params():
    """The scenario setup: horizon 0.1, accretion 0.4, centered."""
    return BlackHoleParams(radius=0.1, accretion_radius=0.4, center=(0.5, 0.5), time=1.25)


@pytest.fixture
def rip_params():
    return SpaceTimeRipParams(time=2.0)


@pytest.fixture
def screen_params():
    return ScreenDistortionParams(time=0.5)


@pytest.fixture
def lensing_params():
    return LensingParams(time=0.5)
