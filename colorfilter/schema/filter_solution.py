# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
Value types for the color-to-filter solver.

Design principles:
- Immutable: All types are frozen dataclasses
- Validated: Out-of-range values are rejected at construction
- Serializable: JSON-ready for the external cache collaborator

Parameter units (pipeline order):
- invert, sepia: percent [0, 100]
- saturate: percent [0, 7500]
- hue_rotate: internal units [0, 100], 1 unit = 3.6 degrees (wraps)
- brightness, contrast: percent [0, 200]
"""

from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np
from numpy.typing import NDArray


# =============================================================================
# Constants
# =============================================================================

# Results above this loss are low-confidence and must not be cached
QUALITY_THRESHOLD = 20.0

# Degrees per internal hue unit
HUE_UNIT_DEGREES = 3.6

PARAMETER_NAMES = (
    "invert",
    "sepia",
    "saturate",
    "hue_rotate",
    "brightness",
    "contrast",
)

# (low, high) per parameter, pipeline order
PARAMETER_RANGES: tuple[tuple[float, float], ...] = (
    (0.0, 100.0),
    (0.0, 100.0),
    (0.0, 7500.0),
    (0.0, 100.0),
    (0.0, 200.0),
    (0.0, 200.0),
)

HUE_INDEX = 3


class InvalidArgument(ValueError):
    """Raised when an input is not a well-formed color."""


# =============================================================================
# Color
# =============================================================================

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


def _check_channel(name: str, value: object, high: float) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidArgument(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value) or not 0.0 <= value <= high:
        raise InvalidArgument(f"{name} must be 0-{high:g}, got {value}")
    return value


@dataclass(frozen=True, slots=True)
class Color:
    """
    An RGBA color.

    Attributes:
        r, g, b: Channels in [0, 255] (floats allowed, pipeline stages
            produce fractional channels)
        a: Alpha in [0, 1]

    The HSL view is derived on demand via ``hsl`` and never stored.
    """
    r: float
    g: float
    b: float
    a: float = 1.0

    def __post_init__(self) -> None:
        """Validate and normalize channels to float."""
        for name, high in (("r", 255.0), ("g", 255.0), ("b", 255.0), ("a", 1.0)):
            object.__setattr__(self, name, _check_channel(name, getattr(self, name), high))

    @classmethod
    def from_rgba(cls, r: float, g: float, b: float, a: float = 1.0) -> Color:
        """Construct from RGBA channels."""
        return cls(r, g, b, a)

    @classmethod
    def from_hex(cls, hex_color: str) -> Color:
        """
        Parse a hex color string.

        Accepts ``#rgb``, ``#rgba``, ``#rrggbb`` and ``#rrggbbaa``; the
        leading ``#`` is optional.
        """
        if not isinstance(hex_color, str):
            raise InvalidArgument(f"Hex color must be a string, got {hex_color!r}")
        m = _HEX_RE.match(hex_color.strip())
        if not m:
            raise InvalidArgument(f"Malformed hex color: {hex_color!r}")
        digits = m.group(1)
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        r = int(digits[0:2], 16)
        g = int(digits[2:4], 16)
        b = int(digits[4:6], 16)
        a = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
        return cls(r, g, b, a)

    @classmethod
    def from_hsl(cls, h: float, s: float, l: float, a: float = 1.0) -> Color:
        """
        Construct from hue degrees, saturation % and lightness %.

        Hue is taken modulo 360; saturation and lightness must be 0-100.
        """
        _check_channel("saturation", s, 100.0)
        _check_channel("lightness", l, 100.0)
        if isinstance(h, bool) or not isinstance(h, numbers.Real) or not math.isfinite(h):
            raise InvalidArgument(f"hue must be a finite real number, got {h!r}")
        from colorfilter.solve.colorspace import hsl_to_rgb
        r, g, b = hsl_to_rgb(h, s, l)
        return cls(min(max(r, 0.0), 255.0), min(max(g, 0.0), 255.0), min(max(b, 0.0), 255.0), a)

    @property
    def rgb(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    @property
    def rgba(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    @property
    def hsl(self) -> tuple[float, float, float]:
        """(hue degrees [0, 360), saturation %, lightness %)."""
        from colorfilter.solve.colorspace import rgb_to_hsl
        return rgb_to_hsl(self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        """Hex string like ``#FFCC00`` (alpha omitted)."""
        r, g, b = (int(round(v)) for v in self.rgb)
        return f"#{r:02X}{g:02X}{b:02X}"

    def as_array(self) -> NDArray[np.float64]:
        """RGBA as a float64 array of shape (4,)."""
        return np.array(self.rgba, dtype=np.float64)


BLACK = Color(0.0, 0.0, 0.0, 1.0)


ColorLike = Union[Color, str, Sequence[float]]


def parse_color(value: ColorLike) -> Color:
    """
    Coerce a color-like value to a Color.

    Args:
        value: A Color, a hex string, or a 3-/4-tuple of channels

    Raises:
        InvalidArgument: If the value is not a well-formed color
    """
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return Color.from_hex(value)
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        return Color(*value)
    raise InvalidArgument(f"Not a color: {value!r}")


# =============================================================================
# Parameter Vector
# =============================================================================


def fix_parameter(value: float, index: int) -> float:
    """
    Bring one parameter back into its declared range.

    Every parameter is clamped except hue_rotate, which wraps. The wrap uses
    a truncating remainder (``math.fmod``), so negative values map to
    ``high + fmod(value, high)`` rather than a floor modulo.
    """
    low, high = PARAMETER_RANGES[index]
    if index == HUE_INDEX:
        if value > high:
            return math.fmod(value, high)
        if value < low:
            return high + math.fmod(value, high)
        return value
    if value < low:
        return low
    if value > high:
        return high
    return value


def fix_parameters(values: Sequence[float]) -> NDArray[np.float64]:
    """Apply ``fix_parameter`` to all six components."""
    if len(values) != len(PARAMETER_NAMES):
        raise ValueError(
            f"Expected {len(PARAMETER_NAMES)} parameters, got {len(values)}"
        )
    return np.array(
        [fix_parameter(float(v), i) for i, v in enumerate(values)],
        dtype=np.float64,
    )


@dataclass(frozen=True, slots=True)
class ParameterVector:
    """
    The six filter amounts, in pipeline order.

    Use ``from_array`` to build from raw optimizer state; the constructor
    itself rejects out-of-range values.
    """
    invert: float
    sepia: float
    saturate: float
    hue_rotate: float
    brightness: float
    contrast: float

    def __post_init__(self) -> None:
        """Validate each amount is within its declared range."""
        for name, (low, high) in zip(PARAMETER_NAMES, PARAMETER_RANGES):
            value = getattr(self, name)
            if not low <= value <= high:
                raise ValueError(f"{name} must be {low:g}-{high:g}, got {value}")

    @classmethod
    def from_array(cls, values: Sequence[float]) -> ParameterVector:
        """Build from six raw values, clamping/wrapping each first."""
        return cls(*(float(v) for v in fix_parameters(values)))

    def as_array(self) -> NDArray[np.float64]:
        return np.array(self.as_tuple(), dtype=np.float64)

    def as_tuple(self) -> tuple[float, ...]:
        return tuple(getattr(self, name) for name in PARAMETER_NAMES)

    @property
    def hue_degrees(self) -> float:
        return self.hue_rotate * HUE_UNIT_DEGREES

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in PARAMETER_NAMES}

    @classmethod
    def from_dict(cls, data: dict) -> ParameterVector:
        return cls(**{name: float(data[name]) for name in PARAMETER_NAMES})


# =============================================================================
# Solve Result
# =============================================================================


@dataclass(frozen=True, slots=True)
class SolveResult:
    """
    Outcome of one optimization run.

    Attributes:
        parameters: Best parameter vector found
        loss: Distance between the filtered black and the target (>= 0,
            0 is a perfect match)
        wide_loss: Loss after the wide stage, if known
    """
    parameters: ParameterVector
    loss: float
    wide_loss: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.loss >= 0.0:
            raise ValueError(f"Loss must be >= 0, got {self.loss}")

    @property
    def is_usable(self) -> bool:
        """True if the result is good enough to cache."""
        return self.loss <= QUALITY_THRESHOLD

    def to_dict(self) -> dict:
        d = {"parameters": self.parameters.to_dict(), "loss": self.loss}
        if self.wide_loss is not None:
            d["wide_loss"] = self.wide_loss
        return d

    @classmethod
    def from_dict(cls, data: dict) -> SolveResult:
        return cls(
            parameters=ParameterVector.from_dict(data["parameters"]),
            loss=float(data["loss"]),
            wide_loss=data.get("wide_loss"),
        )
