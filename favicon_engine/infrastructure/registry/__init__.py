"""Project registry adapters."""

from favicon_engine.infrastructure.registry.in_memory_registry import (
    InMemoryProjectRegistry,
)

__all__ = ["InMemoryProjectRegistry"]
