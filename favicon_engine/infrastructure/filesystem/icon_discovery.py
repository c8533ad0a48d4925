"""Icon discovery: two-phase bounded search for an icon file in a project tree.

Phase 1 probes a fixed set of conventional locations concurrently. Phase 2,
only reached when phase 1 finds nothing, walks the tree breadth-first under
a result/directory/time budget so one pathological project cannot starve
the process. Neither phase ever raises for filesystem problems.
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field

import aiofiles.os

from favicon_engine.core.config import ScanLimits
from favicon_engine.core.constants import COMMON_ICON_DIRS, ICON_PATTERNS, IGNORED_DIRS
from favicon_engine.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class IconCandidate:
    """A matched icon file. Field order is the selection order: shallowest, then pattern priority."""

    depth: int
    priority: int
    path: str


@dataclass
class _ScanState:
    best: IconCandidate | None = None
    matches: int = 0
    directories: int = 0
    limit_hit: str | None = None
    pending: list[tuple[str, int]] = field(default_factory=list)

    def offer(self, candidate: IconCandidate) -> None:
        self.matches += 1
        if self.best is None or candidate < self.best:
            self.best = candidate


def _list_directory(dir_path: str) -> tuple[list[str], list[str]]:
    """Return (file names, subdirectory names) of dir_path; ([], []) if unreadable.

    Runs in a worker thread. Directory symlinks are not followed.
    """
    files: list[str] = []
    subdirs: list[str] = []
    try:
        with os.scandir(dir_path) as entries:
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirs.append(entry.name)
                    elif entry.is_file():
                        files.append(entry.name)
                except OSError:
                    continue
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", dir_path, e)
        return [], []
    subdirs.sort()
    return files, subdirs


class IconDiscovery:
    """Locates an existing icon file inside a project directory."""

    def __init__(
        self,
        limits: ScanLimits | None = None,
        patterns: tuple[str, ...] = ICON_PATTERNS,
        common_dirs: tuple[str, ...] = COMMON_ICON_DIRS,
        ignored_dirs: frozenset[str] = IGNORED_DIRS,
    ) -> None:
        self.limits = limits or ScanLimits()
        self.patterns = patterns
        self.common_dirs = common_dirs
        self.ignored_dirs = ignored_dirs
        self._priority = {name: index for index, name in enumerate(patterns)}

    @traced("icon_discovery.find_asset")
    async def find_asset(self, root_dir: str) -> str | None:
        """Return the path of the best icon file under root_dir, or None.

        Never raises for filesystem errors; they count as "not found".
        """
        try:
            found = await self.quick_search(root_dir)
            if found:
                add_span_attributes(discovery_phase="quick")
                return found
            found = await self.full_scan(root_dir)
            add_span_attributes(discovery_phase="full")
            return found
        except Exception as e:
            logger.warning("Icon discovery failed for %s: %s", root_dir, e)
            return None

    async def _is_readable_file(self, path: str) -> bool:
        try:
            if not await aiofiles.os.path.isfile(path):
                return False
            return await aiofiles.os.access(path, os.R_OK)
        except (OSError, ValueError):
            return False

    async def quick_search(self, root_dir: str) -> str | None:
        """Probe every pattern in every conventional directory concurrently.

        The winner is the first hit in pattern-major, directory-minor order,
        regardless of which probe completed first.
        """
        candidates = [
            os.path.join(root_dir, directory, pattern)
            for pattern in self.patterns
            for directory in self.common_dirs
        ]
        results = await asyncio.gather(
            *(self._is_readable_file(path) for path in candidates)
        )
        for path, readable in zip(candidates, results):
            if readable:
                return path
        return None

    async def full_scan(self, root_dir: str) -> str | None:
        """Breadth-first scan for icon files under the configured limits.

        Stops scheduling further directories once matches exceed max_results,
        visited directories would exceed max_directories, or timeout_seconds
        elapses; the best candidate seen so far is still returned.
        """
        limits = self.limits
        loop = asyncio.get_running_loop()
        deadline = loop.time() + limits.timeout_seconds
        state = _ScanState(pending=[(root_dir, 0)])

        try:
            while state.pending:
                budget = limits.max_directories - state.directories
                batch = state.pending[:budget]
                truncated = len(state.pending) > len(batch)

                remaining = deadline - loop.time()
                if remaining <= 0:
                    state.limit_hit = "timeout"
                    break
                try:
                    listings = await asyncio.wait_for(
                        asyncio.gather(
                            *(asyncio.to_thread(_list_directory, d) for d, _ in batch)
                        ),
                        timeout=remaining,
                    )
                except asyncio.TimeoutError:
                    state.limit_hit = "timeout"
                    break

                state.directories += len(batch)
                state.pending = self._collect(batch, listings, state)

                if state.matches > limits.max_results:
                    state.limit_hit = "results"
                    break
                if truncated:
                    state.limit_hit = "directories"
                    break
        except Exception as e:
            logger.warning("Icon full scan failed for %s: %s", root_dir, e)
            return None

        if state.limit_hit:
            logger.warning(
                "Icon scan of %s stopped at %s limit (matches=%s, directories=%s)",
                root_dir,
                state.limit_hit,
                state.matches,
                state.directories,
            )
        else:
            logger.debug(
                "Icon scan of %s completed (matches=%s, directories=%s)",
                root_dir,
                state.matches,
                state.directories,
            )
        return state.best.path if state.best else None

    def _collect(
        self,
        batch: list[tuple[str, int]],
        listings: list[tuple[list[str], list[str]]],
        state: _ScanState,
    ) -> list[tuple[str, int]]:
        """Record matches from one level of listings; return the next level to visit."""
        next_level: list[tuple[str, int]] = []
        for (dir_path, depth), (files, subdirs) in zip(batch, listings):
            for name in files:
                priority = self._priority.get(name)
                if priority is not None:
                    state.offer(
                        IconCandidate(
                            depth=depth + 1,
                            priority=priority,
                            path=os.path.join(dir_path, name),
                        )
                    )
            if depth < self.limits.max_depth:
                next_level.extend(
                    (os.path.join(dir_path, name), depth + 1)
                    for name in subdirs
                    if name not in self.ignored_dirs
                )
        return next_level
