# Copyright (c) 2026 Colorfilter
# SPDX-License-Identifier: MIT

"""
In-memory result cache.

Maps an exact target color to its rendered filter string. There is no
eviction and no fuzzy matching: the same RGBA tuple hits, anything else
misses. Persistence across processes belongs to the caller, who can use
``snapshot`` and ``merge`` to move entries in and out.

All operations take a lock, so one cache can be shared by threads solving
different colors.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterator, Mapping, Optional

from colorfilter.schema import Color, ColorLike, InvalidArgument, parse_color

logger = logging.getLogger(__name__)


class ResultCache:
    """
    Thread-safe color → rendered filter mapping.

    Example:
        >>> cache = ResultCache()
        >>> cache.store("#ffcc00", "invert(0%) ...")
        >>> cache.lookup(Color(255, 204, 0))
        'invert(0%) ...'
    """

    def __init__(self, entries: Optional[Mapping[ColorLike, str]] = None) -> None:
        self._entries: dict[Color, str] = {}
        self._lock = threading.Lock()
        if entries:
            self.merge(entries)

    def lookup(self, color: ColorLike) -> Optional[str]:
        """Rendered filter for ``color``, or None if unseen."""
        key = parse_color(color)
        with self._lock:
            hit = self._entries.get(key)
        logger.debug("[Cache] %s %s", "hit" if hit is not None else "miss", key.hex)
        return hit

    def store(self, color: ColorLike, rendered: str) -> None:
        """Record ``rendered`` for ``color``, replacing any previous entry."""
        if not isinstance(rendered, str):
            raise TypeError(f"Rendered filter must be a string, got {type(rendered).__name__}")
        key = parse_color(color)
        with self._lock:
            self._entries[key] = rendered

    def merge(self, entries: Mapping[ColorLike, str]) -> None:
        """Bulk store; incoming entries overwrite existing ones."""
        parsed = {parse_color(color): rendered for color, rendered in entries.items()}
        with self._lock:
            self._entries.update(parsed)

    def snapshot(self) -> dict[str, str]:
        """
        Copy of the entries keyed by hex string.

        Fully opaque colors use ``#RRGGBB``; translucent ones ``#RRGGBBAA``.
        """
        with self._lock:
            items = list(self._entries.items())
        return {_hex_key(color): rendered for color, rendered in items}

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, color: object) -> bool:
        try:
            key = parse_color(color)
        except InvalidArgument:
            return False
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[Color]:
        with self._lock:
            return iter(list(self._entries))


def _hex_key(color: Color) -> str:
    if color.a >= 1.0:
        return color.hex
    return f"{color.hex}{int(round(color.a * 255)):02X}"
