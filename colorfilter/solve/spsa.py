# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
Simultaneous Perturbation Stochastic Approximation.

Each iteration perturbs all six parameters at once by ±c_k, estimates the
gradient from two loss evaluations, and takes one step per parameter:

    c_k   = c / k^γ            (γ = 1/6)
    g_j   = (L(x + c_k·Δ) − L(x − c_k·Δ)) / (2·c_k) · Δ_j
    a_k,j = a_j / (A + k)^α    (α = 1)
    x_j  ← fix(x_j − a_k,j · g_j)

Δ is a vector of independent ±1 draws, resampled every iteration. Both
perturbed points and the updated vector go through the clamp/wrap policy.

The best (values, loss) pair seen is kept separately from the current
iterate, so the search may wander past an interim best without losing it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

import numpy as np
from numpy.typing import NDArray

from colorfilter.schema import PARAMETER_NAMES, fix_parameters


ALPHA = 1.0
GAMMA = 1.0 / 6.0

LossFunction = Callable[[NDArray[np.float64]], float]


@dataclass(frozen=True)
class SPSAGains:
    """
    Gain-sequence constants for one SPSA run.

    Attributes:
        A: Stability constant added to k in the step-size denominator
        a: Step-size numerators, one per parameter
        c: Perturbation magnitude numerator
    """
    A: float
    a: tuple[float, ...]
    c: float

    def __post_init__(self) -> None:
        if len(self.a) != len(PARAMETER_NAMES):
            raise ValueError(
                f"Expected {len(PARAMETER_NAMES)} step coefficients, got {len(self.a)}"
            )
        if self.c <= 0.0:
            raise ValueError(f"Perturbation magnitude must be > 0, got {self.c}")
        object.__setattr__(self, "a", tuple(float(v) for v in self.a))


@dataclass(frozen=True)
class SPSAResult:
    """
    Best point found by one SPSA run.

    Attributes:
        values: Best parameter values (in range)
        loss: Loss at ``values``
        iterations: Iterations actually run (fewer than requested on early stop)
        history: Best loss after each iteration (non-increasing)
    """
    values: tuple[float, ...]
    loss: float
    iterations: int
    history: tuple[float, ...] = field(default=(), repr=False)


def draw_signs(rng: np.random.Generator, size: int = len(PARAMETER_NAMES)) -> NDArray[np.float64]:
    """Independent ±1 draws, one per dimension."""
    return np.where(rng.random(size) < 0.5, -1.0, 1.0)


def spsa(
    loss: LossFunction,
    gains: SPSAGains,
    initial: Sequence[float],
    iterations: int,
    *,
    rng: np.random.Generator,
    stop_loss: float = 1.0,
) -> SPSAResult:
    """
    Minimize ``loss`` starting from ``initial``.

    Args:
        loss: Maps a six-element array to a non-negative loss
        gains: Gain-sequence constants
        initial: Starting values (fixed into range before use)
        iterations: Maximum number of iterations
        rng: Source of the ±1 perturbation signs
        stop_loss: Stop as soon as the best loss drops below this

    Returns:
        SPSAResult with the best values seen
    """
    if iterations < 1:
        raise ValueError(f"iterations must be >= 1, got {iterations}")

    a = np.asarray(gains.a, dtype=np.float64)
    values = fix_parameters(initial)
    best_values = values.copy()
    best_loss = float("inf")
    history: list[float] = []

    k = 0
    for k in range(1, iterations + 1):
        ck = gains.c / k ** GAMMA
        signs = draw_signs(rng, len(values))

        high = fix_parameters(values + ck * signs)
        low = fix_parameters(values - ck * signs)
        gdiff = loss(high) - loss(low)

        gradient = gdiff / (2.0 * ck) * signs
        ak = a / (gains.A + k) ** ALPHA
        values = fix_parameters(values - ak * gradient)

        current = loss(values)
        if current < best_loss:
            best_loss = current
            best_values = values.copy()
        history.append(best_loss)

        if best_loss < stop_loss:
            break

    return SPSAResult(
        values=tuple(float(v) for v in best_values),
        loss=best_loss,
        iterations=k,
        history=tuple(history),
    )
