# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
RGB ↔ HSL conversions.

Conventions:
- RGB channels in [0, 255]
- Hue in degrees [0, 360)
- Saturation and lightness in percent [0, 100]

These run once per loss evaluation, so they work on plain floats rather
than arrays.
"""

from __future__ import annotations


def rgb_to_hsl(r: float, g: float, b: float) -> tuple[float, float, float]:
    """
    Convert RGB [0,255] to HSL.

    Standard max/min formulation:
    - Lightness is the midpoint of max and min
    - Saturation is the chroma normalized by lightness
    - Hue is picked from whichever channel is the max

    Returns:
        (hue degrees, saturation %, lightness %)
    """
    r /= 255.0
    g /= 255.0
    b /= 255.0
    hi = max(r, g, b)
    lo = min(r, g, b)
    lightness = (hi + lo) / 2.0

    if hi == lo:
        return 0.0, 0.0, lightness * 100.0

    d = hi - lo
    if lightness > 0.5:
        saturation = d / (2.0 - hi - lo)
    else:
        saturation = d / (hi + lo)

    if hi == r:
        hue = (g - b) / d + (6.0 if g < b else 0.0)
    elif hi == g:
        hue = (b - r) / d + 2.0
    else:
        hue = (r - g) / d + 4.0
    hue = (hue * 60.0) % 360.0

    return hue, saturation * 100.0, lightness * 100.0


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0.0:
        t += 1.0
    if t > 1.0:
        t -= 1.0
    if t < 1.0 / 6.0:
        return p + (q - p) * 6.0 * t
    if t < 0.5:
        return q
    if t < 2.0 / 3.0:
        return p + (q - p) * (2.0 / 3.0 - t) * 6.0
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> tuple[float, float, float]:
    """
    Convert HSL to RGB [0,255].

    Inverse of rgb_to_hsl. Hue is taken modulo 360.

    Args:
        h: Hue in degrees
        s: Saturation in percent [0, 100]
        l: Lightness in percent [0, 100]
    """
    h = (h % 360.0) / 360.0
    s /= 100.0
    l /= 100.0

    if s == 0.0:
        v = l * 255.0
        return v, v, v

    q = l * (1.0 + s) if l < 0.5 else l + s - l * s
    p = 2.0 * l - q
    r = _hue_to_channel(p, q, h + 1.0 / 3.0)
    g = _hue_to_channel(p, q, h)
    b = _hue_to_channel(p, q, h - 1.0 / 3.0)
    return r * 255.0, g * 255.0, b * 255.0
