# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
Schema definitions for the color-to-filter solver.

All types in this module are immutable (frozen dataclasses).
"""

from colorfilter.schema.filter_solution import (
    BLACK,
    HUE_INDEX,
    HUE_UNIT_DEGREES,
    PARAMETER_NAMES,
    PARAMETER_RANGES,
    QUALITY_THRESHOLD,
    Color,
    ColorLike,
    InvalidArgument,
    ParameterVector,
    SolveResult,
    fix_parameter,
    fix_parameters,
    parse_color,
)

__all__ = [
    # Constants
    "BLACK",
    "HUE_INDEX",
    "HUE_UNIT_DEGREES",
    "PARAMETER_NAMES",
    "PARAMETER_RANGES",
    "QUALITY_THRESHOLD",
    # Core types
    "Color",
    "ColorLike",
    "ParameterVector",
    "SolveResult",
    # Errors
    "InvalidArgument",
    # Helpers
    "fix_parameter",
    "fix_parameters",
    "parse_color",
]
