"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


# Project registry interface
class IProjectRegistry(Protocol):
    """Protocol for the project registry collaborator (read-only, may be stale)."""

    async def get_project_info(self, root_dir: str) -> Mapping[str, Any] | None:
        """Return the registry entry ({name?, type?, port?}) for root_dir, or None."""
        ...

    def list_project_paths(self) -> list[str]:
        """Absolute project directories known to the registry (the warm list)."""
        ...
