# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
Loss between a filtered color and the target.

    loss = |ΔR| + |ΔG| + |ΔB| + |Δhue| + |Δsaturation| + |Δlightness|

RGB in [0, 255], hue in degrees (no wrap-around), saturation and lightness
in percent. The sum is rounded to LOSS_PRECISION decimal places so that
comparisons inside the optimizer are reproducible.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from colorfilter.schema import BLACK, Color
from colorfilter.solve.colorspace import rgb_to_hsl
from colorfilter.solve.pipeline import apply_filters_array


LOSS_PRECISION = 5


def _distance(
    target_rgb: tuple[float, float, float],
    target_hsl: tuple[float, float, float],
    r: float,
    g: float,
    b: float,
) -> float:
    h, s, l = rgb_to_hsl(r, g, b)
    total = (
        abs(r - target_rgb[0])
        + abs(g - target_rgb[1])
        + abs(b - target_rgb[2])
        + abs(h - target_hsl[0])
        + abs(s - target_hsl[1])
        + abs(l - target_hsl[2])
    )
    return round(total, LOSS_PRECISION)


def color_loss(target: Color, candidate: Color) -> float:
    """
    Distance between two colors (alpha ignored).

    Returns:
        Non-negative loss; 0 means identical RGB and HSL
    """
    return _distance(target.rgb, target.hsl, candidate.r, candidate.g, candidate.b)


class FilterLoss:
    """
    Loss of parameter vectors against a fixed target.

    Caches the target's RGB and HSL views so each evaluation only converts
    the candidate.

    Example:
        >>> loss = FilterLoss(Color(255, 204, 0))
        >>> loss([50, 20, 3750, 50, 100, 100])
    """

    def __init__(self, target: Color, base: Color = BLACK) -> None:
        self.target = target
        self.base = base
        self._target_rgb = target.rgb
        self._target_hsl = target.hsl
        self.evaluations = 0

    def __call__(self, values: Union[Sequence[float], NDArray[np.float64]]) -> float:
        self.evaluations += 1
        rgba = apply_filters_array(values, self.base)
        return _distance(
            self._target_rgb,
            self._target_hsl,
            float(rgba[0]),
            float(rgba[1]),
            float(rgba[2]),
        )


def filter_loss(target: Color, values: Union[Sequence[float], NDArray[np.float64]]) -> float:
    """Loss of ``values`` applied to black, against ``target``."""
    return FilterLoss(target)(values)
