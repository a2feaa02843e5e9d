# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
5x4 color matrices.

Layout follows feColorMatrix: four rows (one per output channel R, G, B, A),
five columns (weights for input R, G, B, A and a constant offset). A matrix
is applied to the augmented vector (R, G, B, A, 1) with channels in [0, 255]
for RGB and [0, 1] for alpha; the offset column is scaled accordingly.

Coefficients are the CSS Filter Effects shorthand definitions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from colorfilter.schema import Color


MATRIX_SHAPE = (4, 5)

# Offset column scale per output row
_OFFSET_SCALE = np.array([255.0, 255.0, 255.0, 1.0], dtype=np.float64)
_CHANNEL_HIGH = np.array([255.0, 255.0, 255.0, 1.0], dtype=np.float64)


@dataclass(frozen=True, eq=False)
class ColorMatrix:
    """
    A fixed-shape 5x4 affine color matrix.

    Attributes:
        values: Array of shape (4, 5)
    """
    values: NDArray[np.float64]

    def __post_init__(self) -> None:
        values = np.array(self.values, dtype=np.float64)
        if values.shape != MATRIX_SHAPE:
            raise ValueError(f"Color matrix must have shape {MATRIX_SHAPE}, got {values.shape}")
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

    @classmethod
    def from_rgb(cls, rgb: NDArray[np.float64] | list[list[float]]) -> ColorMatrix:
        """
        Build from a 3x3 RGB block.

        Alpha passes through unchanged and there is no offset.
        """
        block = np.asarray(rgb, dtype=np.float64)
        if block.shape != (3, 3):
            raise ValueError(f"RGB block must have shape (3, 3), got {block.shape}")
        values = np.zeros(MATRIX_SHAPE, dtype=np.float64)
        values[:3, :3] = block
        values[3, 3] = 1.0
        return cls(values)

    def apply(self, color: Color) -> Color:
        """Apply to a color, clamping each output channel to its range."""
        out = self.apply_array(color.as_array())
        return Color(*(float(v) for v in out))

    def apply_array(self, rgba: NDArray[np.float64]) -> NDArray[np.float64]:
        """Apply to an RGBA array of shape (4,); output is clamped."""
        out = self.values[:, :4] @ rgba + self.values[:, 4] * _OFFSET_SCALE
        return np.clip(out, 0.0, _CHANNEL_HIGH)


# =============================================================================
# Stage matrices
# =============================================================================

# Luminance weights shared by the saturate and hue-rotate definitions
_LUMA = np.array([0.213, 0.715, 0.072], dtype=np.float64)

_SEPIA = np.array([
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
], dtype=np.float64)


def sepia_matrix(amount: float) -> ColorMatrix:
    """
    Sepia matrix for a normalized amount (1.0 = full sepia).

    Linear interpolation between identity and the sepia target.
    """
    amount = min(max(amount, 0.0), 1.0)
    return ColorMatrix.from_rgb(np.eye(3) + (_SEPIA - np.eye(3)) * amount)


def saturate_matrix(amount: float) -> ColorMatrix:
    """
    Saturation matrix for a normalized amount (1.0 = unchanged).

    0 collapses to luminance gray; values above 1 oversaturate.
    """
    gray = np.tile(_LUMA, (3, 1))
    return ColorMatrix.from_rgb(gray + (np.eye(3) - gray) * amount)


def hue_rotate_matrix(degrees: float) -> ColorMatrix:
    """Hue rotation matrix for an angle in degrees."""
    rad = math.radians(degrees)
    cos = math.cos(rad)
    sin = math.sin(rad)
    return ColorMatrix.from_rgb([
        [
            0.213 + cos * 0.787 - sin * 0.213,
            0.715 - cos * 0.715 - sin * 0.715,
            0.072 - cos * 0.072 + sin * 0.928,
        ],
        [
            0.213 - cos * 0.213 + sin * 0.143,
            0.715 + cos * 0.285 + sin * 0.140,
            0.072 - cos * 0.072 - sin * 0.283,
        ],
        [
            0.213 - cos * 0.213 - sin * 0.787,
            0.715 - cos * 0.715 + sin * 0.715,
            0.072 + cos * 0.928 + sin * 0.072,
        ],
    ])


def invert_matrix(amount: float) -> ColorMatrix:
    """
    Invert matrix for a normalized amount (1.0 = full inversion).

    ``channel' = amount * 255 + channel * (1 - 2 * amount)``. The pipeline's
    invert stage rounds after applying this.
    """
    amount = min(max(amount, 0.0), 1.0)
    values = np.zeros(MATRIX_SHAPE, dtype=np.float64)
    for i in range(3):
        values[i, i] = 1.0 - 2.0 * amount
        values[i, 4] = amount
    values[3, 3] = 1.0
    return ColorMatrix(values)
