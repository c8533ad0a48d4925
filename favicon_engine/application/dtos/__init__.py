"""Application DTOs."""

from favicon_engine.application.dtos.favicon import ResolverStats, WarmHandle, WarmResult

__all__ = [
    "ResolverStats",
    "WarmHandle",
    "WarmResult",
]
