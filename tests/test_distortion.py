"""
VoidFX -- Distortion field tests.

Run with: pytest tests/test_distortion.py -v
"""

import numpy as np
import pytest

from effects.distortion import MIN_DISTANCE, distort, pull_magnitude, swirl_angle


class TestIdentityAtZeroStrength:

    def test_exact_identity(self, uv_samples):
        x, y = uv_samples
        for center in [(0.5, 0.5), (0.0, 1.0), (0.31, 0.77)]:
            for t in (0.0, 3.7, 120.0):
                wx, wy = distort(x, y, center, 0.0, t)
                assert np.array_equal(wx, x)
                assert np.array_equal(wy, y)

    def test_identity_at_center(self):
        wx, wy = distort(0.5, 0.5, (0.5, 0.5), 0.0, 1.0)
        assert float(wx) == 0.5
        assert float(wy) == 0.5


class TestPull:

    def test_moves_toward_center(self):
        center = (0.5, 0.5)
        x = np.array([0.8, 0.2, 0.5])
        y = np.array([0.5, 0.5, 0.9])
        # Outside the swirl radius the warp is purely radial
        wx, wy = distort(x, y, center, 1.0, 0.0, swirl_radius=0.05)
        before = np.hypot(x - 0.5, y - 0.5)
        after = np.hypot(wx - 0.5, wy - 0.5)
        assert np.all(after < before)

    def test_radial_outside_swirl(self):
        wx, wy = distort(0.8, 0.5, (0.5, 0.5), 2.0, 0.0, swirl_radius=0.1)
        assert float(wy) == pytest.approx(0.5, abs=1e-12)
        assert float(wx) < 0.8

    def test_never_overshoots_center(self):
        d = np.array([0.002, 0.01, 0.05])
        pull = pull_magnitude(d, 1000.0, 0.0)
        assert np.all(pull <= d)

    def test_breathes_with_time(self):
        assert float(pull_magnitude(0.3, 1.0, 0.0)) != float(pull_magnitude(0.3, 1.0, np.pi))

    def test_inverse_square(self):
        near = float(pull_magnitude(0.2, 1.0, 0.0))
        far = float(pull_magnitude(0.4, 1.0, 0.0))
        assert near == pytest.approx(4.0 * far)


class TestSwirl:

    def test_zero_outside_radius(self):
        assert float(swirl_angle(0.3, 5.0, 2.0, swirl_radius=0.2)) == 0.0

    def test_grows_toward_center(self):
        angles = swirl_angle(np.array([0.15, 0.1, 0.05]), 5.0, 0.0, swirl_radius=0.2)
        assert np.all(np.diff(angles) > 0)

    def test_grows_with_time(self):
        early = float(swirl_angle(0.05, 1.0, 0.0))
        late = float(swirl_angle(0.05, 1.0, 10.0))
        assert late > early


class TestNumericalStability:

    def test_finite_at_center(self):
        wx, wy = distort(0.5, 0.5, (0.5, 0.5), 10.0, 1.0)
        assert np.isfinite(wx) and np.isfinite(wy)

    def test_finite_near_center(self):
        offsets = np.array([0.0, 1e-12, 1e-6, MIN_DISTANCE / 2])
        wx, wy = distort(0.5 + offsets, np.full(4, 0.5), (0.5, 0.5), 50.0, 3.0)
        assert np.all(np.isfinite(wx))
        assert np.all(np.isfinite(wy))

    def test_shape_preserved(self):
        x = np.zeros((4, 5))
        wx, wy = distort(x, 0.25, (0.5, 0.5), 1.0, 0.0)
        assert wx.shape == (4, 5)
        assert wy.shape == (4, 5)


class TestSwirlSeam:

    @pytest.mark.parametrize("radius", [0.1, 0.2])
    @pytest.mark.parametrize("strength", [0.5, 2.0, 5.0])
    def test_continuous_across_swirl_radius(self, radius, strength):
        eps = 1e-6
        center = (0.5, 0.5)
        theta = np.linspace(0.0, 2.0 * np.pi, 12, endpoint=False)
        for t in (0.0, 5.0, 50.0):
            inside_x = center[0] + (radius - eps) * np.cos(theta)
            inside_y = center[1] + (radius - eps) * np.sin(theta)
            outside_x = center[0] + (radius + eps) * np.cos(theta)
            outside_y = center[1] + (radius + eps) * np.sin(theta)
            ix, iy = distort(inside_x, inside_y, center, strength, t, swirl_radius=radius)
            ox, oy = distort(outside_x, outside_y, center, strength, t, swirl_radius=radius)
            assert np.abs(ix - ox).max() < 100 * eps
            assert np.abs(iy - oy).max() < 100 * eps

    def test_swirl_angle_vanishes_at_radius(self):
        angle = swirl_angle(np.array([0.2 - 1e-4, 0.2, 0.2 + 1e-4]), 5.0, 10.0, swirl_radius=0.2)
        assert angle[1] == 0.0
        assert angle[0] < 1e-5
