"""In-memory project registry adapter.

Holds a snapshot of registry entries keyed by project path or directory
name. Loading and watching the registry source is done by whoever builds
the snapshot; replace_projects() swaps it atomically.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)


class InMemoryProjectRegistry:
    """IProjectRegistry over a dict of {path or name: {name?, type?, port?}}."""

    def __init__(self, projects: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._projects: dict[str, Mapping[str, Any]] = dict(projects or {})

    async def get_project_info(self, root_dir: str) -> Mapping[str, Any] | None:
        """Entry for the full path, else for the directory name, else None."""
        entry = self._projects.get(root_dir)
        if entry is None:
            entry = self._projects.get(os.path.basename(os.path.normpath(root_dir)))
        return entry

    def replace_projects(self, projects: Mapping[str, Mapping[str, Any]]) -> None:
        """Swap in a new registry snapshot."""
        self._projects = dict(projects)
        logger.debug("Project registry replaced (%s entries)", len(self._projects))

    def list_project_paths(self) -> list[str]:
        """Registry keys that are absolute paths (candidates for cache warming)."""
        return [key for key in self._projects if os.path.isabs(key)]
