"""Color assignment for project badges: explicit per-type colors or a stable hash."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

from favicon_engine.core.constants import CACHE_PREFIX_COLOR
from favicon_engine.domain.value_objects.core import HexColor
from favicon_engine.infrastructure.cache.bounded_cache import BoundedCache, CacheStats
from favicon_engine.infrastructure.cache.keys import make_cache_key


def _to_int32(value: int) -> int:
    """Wrap an int to signed 32-bit."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def identity_hash(identity: str) -> int:
    """Signed 32-bit string hash: ``hash = c + ((hash << 5) - hash)`` per UTF-16 unit.

    UTF-16 code units (not code points) are hashed so the result matches
    implementations whose strings are UTF-16, such as browser extensions.
    """
    encoded = identity.encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32(unit + ((h << 5) - h))
    return h


class ColorAssigner:
    """Maps (category, identity) to a badge color.

    Categories with a configured color always get it. Anything else gets a
    palette entry chosen by hashing the identity, memoized per identity.
    """

    def __init__(
        self,
        type_colors: Mapping[str, str],
        palette: Sequence[str],
        cache: BoundedCache[str, str] | None = None,
    ) -> None:
        if not palette:
            raise ValueError("ColorAssigner requires a non-empty palette")
        self.type_colors = dict(type_colors)
        self.palette = tuple(palette)
        self.cache: BoundedCache[str, str] = cache if cache is not None else BoundedCache(50)

    def get_color(self, category: str | None, identity: str) -> str:
        """Return the color for category, falling back to a hash of identity."""
        if category and self.type_colors.get(category):
            return self.type_colors[category]

        cache_key = make_cache_key(CACHE_PREFIX_COLOR, identity)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        color = self.palette[abs(identity_hash(identity)) % len(self.palette)]
        self.cache.set(cache_key, color)
        return color

    @staticmethod
    def to_grayscale(hex_color: str) -> str:
        """Convert #RRGGBB to its luminosity gray (#gggggg, lowercase).

        gray = round(0.299 R + 0.587 G + 0.114 B), halves rounded up.

        Raises:
            ValueError: If hex_color is not #RRGGBB.
        """
        r, g, b = HexColor(hex_color).rgb()
        gray = math.floor(0.299 * r + 0.587 * g + 0.114 * b + 0.5)
        return f"#{gray:02x}{gray:02x}{gray:02x}"

    def get_cache_stats(self) -> CacheStats:
        """Statistics of the hash-color memo cache."""
        return self.cache.get_stats()
