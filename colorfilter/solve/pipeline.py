# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
The six-stage filter pipeline.

Stage order is fixed and matches CSS ``filter`` evaluation:

    invert → sepia → saturate → hue-rotate → brightness → contrast

Matrix stages (invert, sepia, saturate, hue-rotate) use ColorMatrix; the
brightness and contrast stages are per-channel affine maps. Every stage
clamps its output to [0, 255].

Each stage is exposed as a pure ``Color -> Color`` function taking the
amount in the same unit as ParameterVector (percent, or degrees for
hue-rotate). ``apply_filters`` runs the whole chain on arrays to avoid
building intermediate Color objects inside the optimizer loop.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from colorfilter.schema import BLACK, HUE_UNIT_DEGREES, Color, ParameterVector
from colorfilter.solve.matrix import (
    hue_rotate_matrix,
    invert_matrix,
    saturate_matrix,
    sepia_matrix,
)


def _round_half_up(values: NDArray[np.float64]) -> NDArray[np.float64]:
    return np.floor(values + 0.5)


def _linear(
    rgba: NDArray[np.float64],
    slope: float,
    intercept: float = 0.0,
) -> NDArray[np.float64]:
    out = rgba.copy()
    out[:3] = np.clip(rgba[:3] * slope + intercept * 255.0, 0.0, 255.0)
    return out


# =============================================================================
# Array stages
# =============================================================================


def _invert(rgba: NDArray[np.float64], amount: float) -> NDArray[np.float64]:
    out = invert_matrix(amount / 100.0).apply_array(rgba)
    out[:3] = _round_half_up(out[:3])
    return out


def _sepia(rgba: NDArray[np.float64], amount: float) -> NDArray[np.float64]:
    return sepia_matrix(amount / 100.0).apply_array(rgba)


def _saturate(rgba: NDArray[np.float64], amount: float) -> NDArray[np.float64]:
    return saturate_matrix(amount / 100.0).apply_array(rgba)


def _hue_rotate(rgba: NDArray[np.float64], degrees: float) -> NDArray[np.float64]:
    return hue_rotate_matrix(degrees).apply_array(rgba)


def _brightness(rgba: NDArray[np.float64], amount: float) -> NDArray[np.float64]:
    return _linear(rgba, amount / 100.0)


def _contrast(rgba: NDArray[np.float64], amount: float) -> NDArray[np.float64]:
    slope = amount / 100.0
    return _linear(rgba, slope, 0.5 - 0.5 * slope)


# =============================================================================
# Public stages
# =============================================================================


def invert(color: Color, amount: float) -> Color:
    """
    Invert by ``amount`` percent.

    With upper = amount/100·255 and lower = 255 − upper, each channel maps to
    ``round(255 − (lower + channel·(upper − lower)/255))``.
    """
    return _to_color(_invert(color.as_array(), amount))


def sepia(color: Color, amount: float) -> Color:
    """Sepia tone by ``amount`` percent (100 = full sepia)."""
    return _to_color(_sepia(color.as_array(), amount))


def saturate(color: Color, amount: float) -> Color:
    """Scale saturation by ``amount`` percent (100 = unchanged)."""
    return _to_color(_saturate(color.as_array(), amount))


def hue_rotate(color: Color, degrees: float) -> Color:
    """Rotate hue by ``degrees``."""
    return _to_color(_hue_rotate(color.as_array(), degrees))


def brightness(color: Color, amount: float) -> Color:
    """``channel' = clamp(channel · amount/100)``."""
    return _to_color(_brightness(color.as_array(), amount))


def contrast(color: Color, amount: float) -> Color:
    """``channel' = clamp(channel · amount/100 + (0.5 − 0.5·amount/100)·255)``."""
    return _to_color(_contrast(color.as_array(), amount))


def _to_color(rgba: NDArray[np.float64]) -> Color:
    return Color(*(float(v) for v in rgba))


# =============================================================================
# Full chain
# =============================================================================


def apply_filters_array(
    values: Union[Sequence[float], NDArray[np.float64]],
    base: Color = BLACK,
) -> NDArray[np.float64]:
    """
    Run the pipeline for raw parameter values.

    Args:
        values: Six amounts in ParameterVector order and units
            (hue_rotate in internal units, converted to degrees here)
        base: Starting color (black unless testing)

    Returns:
        RGBA array of shape (4,)
    """
    rgba = base.as_array()
    rgba = _invert(rgba, values[0])
    rgba = _sepia(rgba, values[1])
    rgba = _saturate(rgba, values[2])
    rgba = _hue_rotate(rgba, values[3] * HUE_UNIT_DEGREES)
    rgba = _brightness(rgba, values[4])
    rgba = _contrast(rgba, values[5])
    return rgba


def apply_filters(parameters: ParameterVector, base: Color = BLACK) -> Color:
    """
    Apply all six stages to ``base``.

    Example:
        >>> apply_filters(ParameterVector(100, 0, 100, 0, 100, 100))
        Color(r=255.0, g=255.0, b=255.0, a=1.0)
    """
    return _to_color(apply_filters_array(parameters.as_tuple(), base))
