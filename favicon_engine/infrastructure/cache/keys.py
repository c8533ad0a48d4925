"""Cache key builder. Single place for key format (DRY).

Keys look like ``v1:<type>:<part>:<part>...``. The leading version tag lets
the whole key space be invalidated by bumping CACHE_KEY_VERSION.
"""

from favicon_engine.core.constants import CACHE_KEY_SEP, CACHE_KEY_VERSION
from favicon_engine.domain.exceptions import CacheKeyException

_PRIMITIVE_TYPES = (str, int, float, bool)


def _validate_key_part(part: object) -> None:
    """Raise CacheKeyException if part is not a primitive.

    None is accepted here and dropped later. Anything else (dict, list,
    bytes, arbitrary objects) would stringify into colliding keys.

    Raises:
        CacheKeyException: If part is not str, int, float or bool.
    """
    if part is None or isinstance(part, _PRIMITIVE_TYPES):
        return
    raise CacheKeyException(
        "Cache key parts must be primitives (str, int, float, bool), "
        f"got {type(part).__name__}",
        part_type=type(part).__name__,
    )


def _render_key_part(part: str | int | float | bool) -> str:
    if isinstance(part, bool):
        return "true" if part else "false"
    return str(part)


def make_cache_key(key_type: str = "", *parts: str | int | float | bool | None) -> str:
    """Build a versioned cache key from a type and primitive parts.

    None and empty-string parts are dropped, so optional parts can be passed
    positionally without producing empty segments.

    Args:
        key_type: Key namespace (e.g. 'favicon', 'color').
        parts: Primitive key parts.

    Returns:
        Key such as 'v1:favicon:gray:/opt/dev/project'.

    Raises:
        CacheKeyException: If key_type is not a non-empty string or a part is
            not a primitive.
    """
    if not isinstance(key_type, str) or not key_type:
        raise CacheKeyException("Cache key type must be a non-empty string")
    for part in parts:
        _validate_key_part(part)
    kept = [_render_key_part(p) for p in parts if p is not None and p != ""]
    return f"{CACHE_KEY_VERSION}{CACHE_KEY_SEP}{key_type}{CACHE_KEY_SEP}{CACHE_KEY_SEP.join(kept)}"
