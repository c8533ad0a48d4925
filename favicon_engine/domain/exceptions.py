"""Domain exceptions for the favicon engine.

Only programmer errors (bad cache construction, malformed cache keys) are
raised to callers. Missing or unreadable icons are never errors at this
level; the resolver degrades to a synthesized badge instead.
"""

from typing import Any


class FaviconEngineException(Exception):
    """Root of the engine's exception tree.

    Carries a message, a stable error_code for log filtering (class name when
    not given) and a details dict such as {"file_path": ..., "code": "EACCES"}.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class CacheConfigurationException(FaviconEngineException):
    """Raised when a cache is constructed with an invalid capacity."""

    def __init__(self, max_size: Any) -> None:
        super().__init__(
            f"Cache max_size must be at least 1, got {max_size!r}",
            "CACHE_CONFIGURATION_ERROR",
            {"max_size": max_size},
        )


class CacheKeyException(FaviconEngineException):
    """Raised when a cache key type is empty or a key part is not a primitive."""

    def __init__(self, message: str, part_type: str | None = None) -> None:
        details = {"part_type": part_type} if part_type else {}
        super().__init__(message, "CACHE_KEY_ERROR", details)
