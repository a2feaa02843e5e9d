# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
Two-stage filter solver and the top-level entry points.

    wide stage:   up to 3 SPSA restarts from a fixed guess, 1000 iterations each
    narrow stage: one 500-iteration SPSA pass seeded from the wide best, with
                  step sizes scaled by the wide loss

This is a best-effort local search. The returned loss tells the caller how
good the match is; anything above QUALITY_THRESHOLD is low confidence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from colorfilter.runtime.cache import ResultCache
from colorfilter.runtime.formatter import FilterFormat, to_filter
from colorfilter.schema import (
    PARAMETER_NAMES,
    QUALITY_THRESHOLD,
    ColorLike,
    ParameterVector,
    SolveResult,
    parse_color,
)
from colorfilter.solve.loss import FilterLoss
from colorfilter.solve.spsa import SPSAGains, SPSAResult, spsa

logger = logging.getLogger(__name__)

RandomSource = Union[np.random.Generator, int, None]


@dataclass(frozen=True)
class SolverConfig:
    """Iteration budgets, thresholds and gain constants for the solver."""

    # Wide stage
    wide_gains: SPSAGains = SPSAGains(A=5.0, a=(60.0, 180.0, 18000.0, 600.0, 1.2, 1.2), c=15.0)
    initial_guess: tuple[float, ...] = (50.0, 20.0, 3750.0, 50.0, 100.0, 100.0)
    wide_iterations: int = 1000
    wide_attempts: int = 3
    # Restarts stop once the best wide loss is at or below this
    wide_restart_loss: float = 25.0

    # Narrow stage: A = wide loss, a_j = factor_j * (wide loss + 1)
    narrow_iterations: int = 500
    narrow_c: float = 2.0
    narrow_step_factors: tuple[float, ...] = (0.25, 0.25, 1.0, 0.25, 0.2, 0.2)

    # Stop a stage once its best loss drops below this
    early_stop_loss: float = 1.0

    # Results above this are reported as low quality and never cached
    quality_threshold: float = QUALITY_THRESHOLD
    # Extra full wide+narrow runs while the best loss is above quality_threshold
    quality_retries: int = 2

    def __post_init__(self) -> None:
        if len(self.initial_guess) != len(PARAMETER_NAMES):
            raise ValueError(
                f"initial_guess needs {len(PARAMETER_NAMES)} values, got {len(self.initial_guess)}"
            )
        if len(self.narrow_step_factors) != len(PARAMETER_NAMES):
            raise ValueError(
                f"narrow_step_factors needs {len(PARAMETER_NAMES)} values, "
                f"got {len(self.narrow_step_factors)}"
            )
        for name in ("wide_iterations", "wide_attempts", "narrow_iterations"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be >= 1, got {getattr(self, name)}")
        if self.quality_retries < 0:
            raise ValueError(f"quality_retries must be >= 0, got {self.quality_retries}")

    def narrow_gains(self, wide_loss: float) -> SPSAGains:
        """Gains for the narrow stage, scaled by the wide-stage loss."""
        scale = wide_loss + 1.0
        return SPSAGains(
            A=wide_loss,
            a=tuple(f * scale for f in self.narrow_step_factors),
            c=self.narrow_c,
        )


class Solver:
    """
    Finds filter parameters that turn black into ``target``.

    The target and its HSL view are fixed per instance; every method is
    otherwise stateless apart from the random source.

    Example:
        >>> solver = Solver(Color(255, 204, 0), rng=7)
        >>> result = solver.solve()
        >>> result.loss < 20
        True
    """

    def __init__(
        self,
        target: ColorLike,
        *,
        config: Optional[SolverConfig] = None,
        rng: RandomSource = None,
    ) -> None:
        self.target = parse_color(target)
        self.config = config or SolverConfig()
        self.rng = np.random.default_rng(rng)
        self.loss = FilterLoss(self.target)

    def _stop_loss(self, loss_target: float) -> float:
        return loss_target if loss_target > 0 else self.config.early_stop_loss

    def spsa(
        self,
        gains: SPSAGains,
        values: tuple[float, ...],
        iterations: int,
        stop_loss: float,
    ) -> SPSAResult:
        return spsa(
            self.loss,
            gains,
            values,
            iterations,
            rng=self.rng,
            stop_loss=stop_loss,
        )

    def solve_wide(self, stop_loss: Optional[float] = None) -> SPSAResult:
        """Restart SPSA from the initial guess until the loss is acceptable."""
        cfg = self.config
        if stop_loss is None:
            stop_loss = cfg.early_stop_loss

        best: Optional[SPSAResult] = None
        for attempt in range(cfg.wide_attempts):
            if best is not None and best.loss <= cfg.wide_restart_loss:
                break
            result = self.spsa(cfg.wide_gains, cfg.initial_guess, cfg.wide_iterations, stop_loss)
            logger.debug(
                "[Solver] %s wide attempt %d: loss=%.5f after %d iterations",
                self.target.hex, attempt + 1, result.loss, result.iterations,
            )
            if best is None or result.loss < best.loss:
                best = result
        return best

    def solve_narrow(self, wide: SPSAResult, stop_loss: Optional[float] = None) -> SPSAResult:
        """
        Refine a wide-stage result.

        Skipped when the wide loss is already below ``stop_loss``. Never
        returns anything worse than ``wide``.
        """
        cfg = self.config
        if stop_loss is None:
            stop_loss = cfg.early_stop_loss
        if wide.loss < stop_loss:
            return wide

        narrow = self.spsa(
            cfg.narrow_gains(wide.loss),
            wide.values,
            cfg.narrow_iterations,
            stop_loss,
        )
        logger.debug(
            "[Solver] %s narrow: loss=%.5f after %d iterations",
            self.target.hex, narrow.loss, narrow.iterations,
        )
        if narrow.loss > wide.loss:
            return wide
        return narrow

    def solve(self, loss_target: float = 0) -> SolveResult:
        """
        Run the wide stage, then the narrow refinement.

        Args:
            loss_target: Early-stop loss for both stages; 0 uses the
                configured default

        Returns:
            SolveResult with the best parameters and their loss
        """
        stop_loss = self._stop_loss(loss_target)
        wide = self.solve_wide(stop_loss)
        narrow = self.solve_narrow(wide, stop_loss)
        return SolveResult(
            parameters=ParameterVector.from_array(narrow.values),
            loss=narrow.loss,
            wide_loss=wide.loss,
        )


def solve(
    color: ColorLike,
    loss_target: float = 0,
    *,
    config: Optional[SolverConfig] = None,
    rng: RandomSource = None,
) -> SolveResult:
    """
    Find filter parameters reproducing ``color`` from black.

    Args:
        color: Target color (Color, hex string or channel tuple)
        loss_target: Early-stop loss; 0 uses the configured default
        config: Solver settings (uses defaults if None)
        rng: numpy Generator or seed; None draws fresh OS entropy

    A run whose loss is above the quality threshold is repeated with fresh
    perturbations, up to ``config.quality_retries`` times; the best run wins.

    Returns:
        SolveResult. A loss above 20 is a low-confidence result, not an error.

    Raises:
        InvalidArgument: If ``color`` is not a well-formed color
    """
    target = parse_color(color)
    cfg = config or SolverConfig()
    solver = Solver(target, config=cfg, rng=rng)

    best = solver.solve(loss_target)
    for retry in range(cfg.quality_retries):
        if best.loss <= cfg.quality_threshold:
            break
        result = solver.solve(loss_target)
        logger.debug(
            "[Solver] %s retry %d: loss=%.5f (best %.5f)",
            target.hex, retry + 1, result.loss, best.loss,
        )
        if result.loss < best.loss:
            best = result
    return best


def color_to_filter(
    color: ColorLike,
    *,
    cache: Optional[ResultCache] = None,
    loss_target: float = 0,
    config: Optional[SolverConfig] = None,
    rng: RandomSource = None,
    format: FilterFormat = FilterFormat.CSS,
) -> str:
    """
    Rendered filter for ``color``, consulting ``cache`` first.

    On a miss the color is solved and rendered; the rendering is stored
    only if the loss is within the quality threshold. A failing cache
    store is logged and otherwise ignored.

    Cache entries hold renderings, so a cache should only be shared
    between calls using the same ``format``.

    Example:
        >>> cache = ResultCache()
        >>> css = color_to_filter("#ffcc00", cache=cache)
        >>> color_to_filter("#ffcc00", cache=cache) == css
        True
    """
    target = parse_color(color)
    cfg = config or SolverConfig()

    if cache is not None:
        cached = cache.lookup(target)
        if cached is not None:
            logger.debug("[Solver] %s cache hit", target.hex)
            return cached

    result = solve(target, loss_target, config=cfg, rng=rng)
    rendered = to_filter(result.parameters, format=format)

    if result.loss > cfg.quality_threshold:
        logger.warning(
            "[Solver] %s low quality result (loss=%.2f > %.2f), not cached",
            target.hex, result.loss, cfg.quality_threshold,
        )
        return rendered

    if cache is not None:
        try:
            cache.store(target, rendered)
        except Exception:
            logger.warning("[Solver] %s cache store failed", target.hex, exc_info=True)

    return rendered
