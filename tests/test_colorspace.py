# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""Tests for RGB ↔ HSL conversions."""

import numpy as np
import pytest

from colorfilter.solve.colorspace import hsl_to_rgb, rgb_to_hsl


class TestRGBToHSL:
    """rgb_to_hsl must match the standard max/min formulation."""

    def test_black(self):
        assert rgb_to_hsl(0, 0, 0) == (0.0, 0.0, 0.0)

    def test_white(self):
        h, s, l = rgb_to_hsl(255, 255, 255)
        assert (h, s) == (0.0, 0.0)
        assert l == pytest.approx(100.0)

    def test_mid_gray_has_no_hue(self):
        h, s, l = rgb_to_hsl(128, 128, 128)
        assert h == 0.0
        assert s == 0.0
        assert l == pytest.approx(128 / 255 * 100)

    @pytest.mark.parametrize("rgb, hue", [
        ((255, 0, 0), 0.0),
        ((255, 255, 0), 60.0),
        ((0, 255, 0), 120.0),
        ((0, 255, 255), 180.0),
        ((0, 0, 255), 240.0),
        ((255, 0, 255), 300.0),
    ])
    def test_primary_hues(self, rgb, hue):
        h, s, l = rgb_to_hsl(*rgb)
        assert h == pytest.approx(hue)
        assert s == pytest.approx(100.0)
        assert l == pytest.approx(50.0)

    def test_target_yellow(self):
        h, s, l = rgb_to_hsl(255, 204, 0)
        assert h == pytest.approx(48.0)
        assert s == pytest.approx(100.0)
        assert l == pytest.approx(50.0)

    def test_red_with_blue_above_green_wraps_positive(self):
        """Max on red with g < b must land in (300, 360), not negative."""
        h, _, _ = rgb_to_hsl(255, 0, 100)
        assert 300.0 < h < 360.0

    def test_light_color_saturation(self):
        """Lightness above 50% uses the (2 - max - min) denominator."""
        _, s, l = rgb_to_hsl(255, 200, 200)
        assert l > 50.0
        assert s == pytest.approx(100.0)

    def test_ranges(self):
        rng = np.random.default_rng(42)
        for r, g, b in rng.uniform(0, 255, (200, 3)):
            h, s, l = rgb_to_hsl(r, g, b)
            assert 0.0 <= h < 360.0
            assert 0.0 <= s <= 100.0 + 1e-9
            assert 0.0 <= l <= 100.0 + 1e-9


class TestHSLToRGB:

    def test_achromatic(self):
        assert hsl_to_rgb(0, 0, 50) == (127.5, 127.5, 127.5)

    def test_pure_blue(self):
        np.testing.assert_allclose(hsl_to_rgb(240, 100, 50), (0, 0, 255), atol=1e-9)

    def test_hue_taken_modulo_360(self):
        np.testing.assert_allclose(hsl_to_rgb(480, 100, 50), hsl_to_rgb(120, 100, 50))

    def test_inverse_of_rgb_to_hsl(self):
        rng = np.random.default_rng(7)
        for rgb in rng.uniform(0, 255, (100, 3)):
            recovered = hsl_to_rgb(*rgb_to_hsl(*rgb))
            np.testing.assert_allclose(recovered, rgb, atol=1e-8)
