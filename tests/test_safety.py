"""
VoidFX -- Frame boundary guard tests.

Run with: pytest tests/test_safety.py -v
"""

import logging

import pytest

from core.params import BlackHoleParams, LensingParams, ScreenDistortionParams, SpaceTimeRipParams
from core.safety import (
    MAX_RENDER_DIM,
    MAX_SEQUENCE_FRAMES,
    MAX_WORKERS,
    ParameterError,
    preflight,
    require_source,
    validate_frame_count,
    validate_params,
    validate_render_size,
    validate_workers,
)


class TestParameterOrdering:

    def test_defaults_pass(self):
        for params in (BlackHoleParams(), SpaceTimeRipParams(), ScreenDistortionParams(), LensingParams()):
            validate_params(params)

    def test_horizon_must_be_inside_accretion(self):
        with pytest.raises(ParameterError, match="accretion"):
            validate_params(BlackHoleParams(radius=0.3, accretion_radius=0.2))
        with pytest.raises(ParameterError):
            validate_params(BlackHoleParams(radius=0.2, accretion_radius=0.2))

    def test_accretion_inside_outer_cutoff(self):
        with pytest.raises(ParameterError, match="outer cutoff"):
            validate_params(BlackHoleParams(radius=0.1, accretion_radius=0.6))

    def test_degenerate_tear(self):
        with pytest.raises(ParameterError, match="same point"):
            validate_params(SpaceTimeRipParams(start_point=(0.3, 0.3), end_point=(0.3, 0.3)))

    def test_lensing_radius(self):
        validate_params(LensingParams(radius=0.5))
        with pytest.raises(ParameterError):
            validate_params(LensingParams(radius=0.51))


class TestRenderLimits:

    def test_valid_sizes(self):
        validate_render_size(1, 1)
        validate_render_size(1920, 1080)

    @pytest.mark.parametrize("w,h", [(0, 10), (10, 0), (-5, 10)])
    def test_non_positive(self, w, h):
        with pytest.raises(ParameterError, match="positive"):
            validate_render_size(w, h)

    def test_too_wide(self):
        with pytest.raises(ParameterError):
            validate_render_size(MAX_RENDER_DIM + 1, 10)

    def test_too_many_pixels(self):
        with pytest.raises(ParameterError, match="pixels"):
            validate_render_size(MAX_RENDER_DIM, MAX_RENDER_DIM)

    def test_workers(self):
        assert validate_workers(1) == 1
        assert validate_workers(MAX_WORKERS) == MAX_WORKERS
        with pytest.raises(ParameterError):
            validate_workers(0)
        with pytest.raises(ParameterError):
            validate_workers(MAX_WORKERS + 1)

    def test_frame_count(self):
        validate_frame_count(1)
        with pytest.raises(ParameterError):
            validate_frame_count(0)
        with pytest.raises(ParameterError):
            validate_frame_count(MAX_SEQUENCE_FRAMES + 1)


class TestPreflight:

    def test_missing_source(self):
        with pytest.raises(ParameterError, match="source"):
            require_source("lensing", None)

    def test_preflight_checks_source(self):
        with pytest.raises(ParameterError, match="source"):
            preflight("screendistortion", ScreenDistortionParams(), 8, 8, needs_source=True)

    def test_preflight_validates_by_default(self):
        with pytest.raises(ParameterError):
            preflight("blackhole", BlackHoleParams(radius=0.3, accretion_radius=0.2), 8, 8)

    def test_bypass_is_logged(self, caplog):
        bad = BlackHoleParams(radius=0.3, accretion_radius=0.2)
        with caplog.at_level(logging.WARNING, logger="core.safety"):
            preflight("blackhole", bad, 8, 8, validate=False)
        assert "bypassed" in caplog.text

    def test_bypass_still_checks_size(self):
        with pytest.raises(ParameterError):
            preflight("blackhole", BlackHoleParams(), 0, 8, validate=False)
