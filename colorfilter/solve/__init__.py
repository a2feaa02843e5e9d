# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
Solver core.

Forward pipeline (black → filtered color), the loss against a target, and
the SPSA search that inverts it. Everything here is pure apart from the
random source handed to the optimizer.
"""

from colorfilter.solve.solver import (
    Solver,
    SolverConfig,
    color_to_filter,
    solve,
)
from colorfilter.solve.spsa import SPSAGains, SPSAResult, spsa

__all__ = [
    "solve",
    "color_to_filter",
    "Solver",
    "SolverConfig",
    "SPSAGains",
    "SPSAResult",
    "spsa",
]
