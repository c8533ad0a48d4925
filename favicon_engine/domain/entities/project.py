"""Project descriptor: read-only metadata supplied by the project registry."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def _as_text(value: Any) -> str | None:
    """Return value if it is a non-blank string, else None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def _as_port(value: Any) -> str | int | None:
    """Return value if it looks like a port (int or string), else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    return _as_text(value)


@dataclass(frozen=True)
class ProjectDescriptor:
    """Registry metadata for one project. Every field is optional.

    Registry entries are loosely typed; from_mapping() drops anything of the
    wrong shape instead of failing, so downstream code only sees str/int/None.
    """

    name: str | None = None
    type: str | None = None
    port: str | int | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> ProjectDescriptor:
        """Build a descriptor from a registry entry (None or non-mapping -> empty)."""
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            name=_as_text(data.get("name")),
            type=_as_text(data.get("type")),
            port=_as_port(data.get("port")),
        )
