"""Service interfaces (ports) for the application layer.

Protocols define contracts for collaborators injected into the resolver (DIP).
"""

from __future__ import annotations

from typing import Protocol


# Icon discovery interface
class IIconDiscovery(Protocol):
    """Protocol for locating an icon file in a project tree."""

    async def find_asset(self, root_dir: str) -> str | None:
        """Return the best icon file path under root_dir, or None. Never raises."""
        ...
