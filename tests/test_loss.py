# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""Tests for the RGB + HSL loss."""

import numpy as np
import pytest

from colorfilter.schema import BLACK, Color, ParameterVector
from colorfilter.solve.loss import LOSS_PRECISION, FilterLoss, color_loss, filter_loss
from colorfilter.solve.pipeline import apply_filters


class TestColorLoss:

    def test_identical_is_zero(self):
        c = Color(255, 204, 0)
        assert color_loss(c, c) == 0.0

    def test_black_vs_white(self):
        # 3 * 255 for RGB, 100 for lightness, no hue or saturation
        assert color_loss(BLACK, Color(255, 255, 255)) == pytest.approx(865.0)

    def test_hue_contributes_in_degrees(self):
        red = Color(255, 0, 0)
        green = Color(0, 255, 0)
        # 255 + 255 for R/G, 120 degrees of hue
        assert color_loss(red, green) == pytest.approx(630.0)

    def test_symmetric(self):
        a, b = Color(10, 200, 30), Color(90, 20, 250)
        assert color_loss(a, b) == color_loss(b, a)

    def test_alpha_ignored(self):
        assert color_loss(Color(1, 2, 3, 0.1), Color(1, 2, 3, 1.0)) == 0.0

    def test_rounded_to_fixed_precision(self):
        loss = color_loss(Color(10.123456789, 0, 0), Color(0, 0, 0))
        assert loss == round(loss, LOSS_PRECISION)

    def test_non_negative(self):
        rng = np.random.default_rng(11)
        for a, b in rng.uniform(0, 255, (200, 2, 3)):
            assert color_loss(Color(*a), Color(*b)) >= 0.0


class TestFilterLoss:

    def test_neutral_filters_match_black(self):
        assert filter_loss(BLACK, (0, 0, 100, 0, 100, 100)) == 0.0

    def test_synthetic_target_is_zero(self):
        """A target produced by the pipeline has zero loss at its own parameters."""
        p = ParameterVector(63, 41, 2650, 27, 88, 112)
        target = apply_filters(p)
        assert FilterLoss(target)(p.as_array()) == 0.0

    def test_matches_color_loss(self):
        target = Color(255, 204, 0)
        p = ParameterVector(50, 20, 3750, 50, 100, 100)
        assert filter_loss(target, p.as_tuple()) == color_loss(target, apply_filters(p))

    def test_counts_evaluations(self):
        loss = FilterLoss(Color(255, 204, 0))
        for _ in range(3):
            loss([50, 20, 3750, 50, 100, 100])
        assert loss.evaluations == 3

    def test_deterministic(self):
        loss = FilterLoss(Color(12, 140, 220))
        values = np.array([20.5, 60.1, 900.0, 33.3, 140.0, 95.0])
        assert loss(values) == loss(values)
