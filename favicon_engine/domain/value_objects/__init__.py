"""Domain value objects (immutable, self-validating)."""

from favicon_engine.domain.value_objects.core import HexColor

__all__ = ["HexColor"]
