# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""Tests for the SPSA optimizer."""

import numpy as np
import pytest

from colorfilter.schema import PARAMETER_RANGES, Color
from colorfilter.solve.loss import FilterLoss
from colorfilter.solve.spsa import SPSAGains, SPSAResult, draw_signs, spsa

WIDE = SPSAGains(A=5.0, a=(60.0, 180.0, 18000.0, 600.0, 1.2, 1.2), c=15.0)
INITIAL = (50.0, 20.0, 3750.0, 50.0, 100.0, 100.0)
YELLOW = Color(255, 204, 0)


def _run(seed, iterations=200, stop_loss=1.0, target=YELLOW, initial=INITIAL):
    return spsa(
        FilterLoss(target),
        WIDE,
        initial,
        iterations,
        rng=np.random.default_rng(seed),
        stop_loss=stop_loss,
    )


class TestSPSAGains:

    def test_coefficients_normalized(self):
        gains = SPSAGains(A=1, a=(1, 2, 3, 4, 5, 6), c=2)
        assert gains.a == (1.0, 2.0, 3.0, 4.0, 5.0, 6.0)

    def test_wrong_coefficient_count(self):
        with pytest.raises(ValueError, match="step coefficients"):
            SPSAGains(A=1, a=(1, 2, 3), c=2)

    def test_non_positive_perturbation(self):
        with pytest.raises(ValueError, match="Perturbation"):
            SPSAGains(A=1, a=(1,) * 6, c=0)


class TestDrawSigns:

    def test_only_plus_minus_one(self):
        signs = draw_signs(np.random.default_rng(0), 1000)
        assert set(np.unique(signs)) == {-1.0, 1.0}

    def test_independent_per_dimension(self):
        """Signs are not one shared draw broadcast over all dimensions."""
        rng = np.random.default_rng(1)
        draws = [draw_signs(rng) for _ in range(50)]
        assert any(len(set(d)) == 2 for d in draws)

    def test_seeded_reproducible(self):
        a = draw_signs(np.random.default_rng(5))
        b = draw_signs(np.random.default_rng(5))
        np.testing.assert_array_equal(a, b)


class TestSPSA:

    def test_seeded_runs_are_identical(self):
        assert _run(123) == _run(123)

    def test_returns_result(self):
        result = _run(0)
        assert isinstance(result, SPSAResult)
        assert len(result.values) == 6
        assert result.loss >= 0.0

    def test_best_values_in_range(self):
        for seed in range(5):
            result = _run(seed)
            for v, (low, high) in zip(result.values, PARAMETER_RANGES):
                assert low <= v <= high

    def test_best_tracking_is_monotonic(self):
        result = _run(9, iterations=300, stop_loss=0.0)
        history = np.array(result.history)
        assert len(history) == result.iterations == 300
        assert np.all(np.diff(history) <= 0.0)
        assert result.loss == history[-1]

    def test_loss_matches_recorded_values(self):
        result = _run(4)
        assert FilterLoss(YELLOW)(np.array(result.values)) == result.loss

    def test_early_stop(self):
        result = _run(0, iterations=1000, stop_loss=1e9)
        assert result.iterations == 1

    def test_respects_iteration_budget(self):
        result = _run(2, iterations=25, stop_loss=0.0)
        assert result.iterations == 25

    def test_out_of_range_initial_is_fixed(self):
        result = _run(3, iterations=1, stop_loss=0.0, initial=(-50, 500, 1e6, -10, 900, -3))
        for v, (low, high) in zip(result.values, PARAMETER_RANGES):
            assert low <= v <= high

    def test_zero_iterations_rejected(self):
        with pytest.raises(ValueError, match="iterations"):
            _run(0, iterations=0)

    def test_improves_on_starting_point(self):
        loss = FilterLoss(YELLOW)
        start = loss(np.array(INITIAL))
        results = [_run(seed, iterations=1000) for seed in range(3)]
        assert min(r.loss for r in results) < start

    def test_minimizes_simple_bowl(self):
        """On a smooth separable loss the search heads for the minimum."""
        target = np.array(INITIAL) + np.array([-20.0, 40.0, -50.0, -10.0, -20.0, 20.0])

        def bowl(values):
            return float(np.sum(np.abs(values - target)))

        gains = SPSAGains(A=5.0, a=(20.0,) * 6, c=2.0)
        start = bowl(np.array(INITIAL))
        result = spsa(bowl, gains, INITIAL, 2000, rng=np.random.default_rng(0), stop_loss=0.0)
        assert result.loss < start / 2
