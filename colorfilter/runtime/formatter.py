# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
Render a ParameterVector as a CSS filter.

The output never alters the solved values beyond rounding each magnitude
to an integer; hue-rotate is converted from internal units to degrees.
"""

from __future__ import annotations

import json
import math
from enum import Enum
from typing import NamedTuple

from colorfilter.schema import HUE_UNIT_DEGREES, PARAMETER_NAMES, ParameterVector


class FilterFormat(Enum):
    """Output format for rendered filters."""

    CSS = "css"
    DECLARATION = "declaration"
    JSON = "json"


class FilterOperation(NamedTuple):
    """One CSS filter function with its rounded magnitude."""

    name: str
    value: int
    unit: str

    def to_css(self) -> str:
        return f"{self.name}({self.value}{self.unit})"


# (css name, unit, multiplier) in pipeline order
_OPERATIONS = (
    ("invert", "%", 1.0),
    ("sepia", "%", 1.0),
    ("saturate", "%", 1.0),
    ("hue-rotate", "deg", HUE_UNIT_DEGREES),
    ("brightness", "%", 1.0),
    ("contrast", "%", 1.0),
)


def _round(value: float) -> int:
    # Half-up, matching CSS preprocessors
    return int(math.floor(value + 0.5))


def to_operations(parameters: ParameterVector) -> tuple[FilterOperation, ...]:
    """The six filter operations in pipeline order."""
    return tuple(
        FilterOperation(name, _round(getattr(parameters, field) * multiplier), unit)
        for field, (name, unit, multiplier) in zip(PARAMETER_NAMES, _OPERATIONS)
    )


def to_filter(
    parameters: ParameterVector,
    *,
    format: FilterFormat = FilterFormat.CSS,
) -> str:
    """
    Render parameters for consumers.

    Args:
        parameters: Solved parameter vector.
        format: CSS value list, a full ``filter:`` declaration, or JSON.

    Returns:
        Rendered string.

    Example (CSS)::

        invert(83%) sepia(43%) saturate(1095%) hue-rotate(357deg) brightness(104%) contrast(105%)

    Example (JSON)::

        [{"name": "invert", "value": 83, "unit": "%"}, ...]
    """
    operations = to_operations(parameters)

    if format == FilterFormat.JSON:
        return json.dumps(
            [op._asdict() for op in operations],
            separators=(",", ":"),
        )

    css = " ".join(op.to_css() for op in operations)
    if format == FilterFormat.DECLARATION:
        return f"filter: {css};"
    return css
