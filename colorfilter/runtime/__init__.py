# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
Runtime collaborators for the solver.

1. ResultCache -- exact-match cache of rendered filters
2. Formatter -- ParameterVector to CSS filter text

Neither touches the optimizer.
"""

from colorfilter.runtime.cache import ResultCache
from colorfilter.runtime.formatter import (
    FilterFormat,
    FilterOperation,
    to_filter,
    to_operations,
)

__all__ = [
    "ResultCache",
    "FilterFormat",
    "FilterOperation",
    "to_filter",
    "to_operations",
]
