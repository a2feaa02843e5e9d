# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
Colorfilter -- Solve CSS filter chains that paint black as a target color.

Finds invert/sepia/saturate/hue-rotate/brightness/contrast amounts which,
applied to black, approximate the target. Useful for recoloring black
icons and SVGs where only ``filter`` is available.

Quick start::

    from colorfilter import ResultCache, color_to_filter, solve

    result = solve("#ffcc00")
    result.loss          # < 20 is a usable match
    result.parameters    # ParameterVector

    cache = ResultCache()
    color_to_filter("#ffcc00", cache=cache)
    # 'invert(83%) sepia(43%) saturate(1095%) ...'
"""

from __future__ import annotations

__version__ = "1.0.0"

from colorfilter.runtime import FilterFormat, ResultCache, to_filter
from colorfilter.schema import (
    Color,
    InvalidArgument,
    ParameterVector,
    SolveResult,
)
from colorfilter.solve import Solver, SolverConfig, color_to_filter, solve

__all__ = [
    # Core API
    "solve",
    "color_to_filter",
    "Solver",
    "SolverConfig",
    # Types
    "Color",
    "ParameterVector",
    "SolveResult",
    "InvalidArgument",
    # Runtime
    "ResultCache",
    "FilterFormat",
    "to_filter",
    # Version
    "__version__",
]
