"""Favicon resolver: cache -> icon discovery -> (read file | synthesize badge) -> cache.

The resolver never raises for a missing or unreadable icon; callers always
get a valid IconAsset. Negative results are remembered for a short TTL so
projects without an icon file are not re-scanned on every poll.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from collections import Counter
from collections.abc import Iterable

from favicon_engine.application.dtos.favicon import ResolverStats, WarmHandle, WarmResult
from favicon_engine.application.interfaces.repositories import IProjectRegistry
from favicon_engine.application.interfaces.services import IIconDiscovery
from favicon_engine.application.services.badge_synthesizer import BadgeSynthesizer
from favicon_engine.application.services.color_assigner import ColorAssigner
from favicon_engine.core.config import FaviconConfig
from favicon_engine.core.constants import (
    CACHE_PREFIX_FAVICON,
    CACHE_PREFIX_FAVICON_NEGATIVE,
    COLOR_KEY_PART,
    CONTENT_TYPE_ICO,
    CONTENT_TYPE_PNG,
    CONTENT_TYPE_SVG,
    GRAYSCALE_KEY_PART,
)
from favicon_engine.domain.entities.icon_asset import IconAsset
from favicon_engine.domain.entities.project import ProjectDescriptor
from favicon_engine.infrastructure.cache.bounded_cache import BoundedCache, format_percent
from favicon_engine.infrastructure.cache.keys import make_cache_key
from favicon_engine.infrastructure.exceptions import (
    IconNotFoundError,
    IconPermissionError,
    IconReadException,
)
from favicon_engine.infrastructure.filesystem.file_operations import read_icon_file
from favicon_engine.infrastructure.filesystem.icon_discovery import IconDiscovery
from favicon_engine.shared.telemetry.tracing import (
    add_span_attributes,
    add_span_event,
    traced,
)

logger = logging.getLogger(__name__)


def get_content_type(file_path: str) -> str:
    """Content type from extension: .png, .svg, anything else is served as an icon."""
    ext = os.path.splitext(file_path)[1].lower()
    if ext == ".png":
        return CONTENT_TYPE_PNG
    if ext == ".svg":
        return CONTENT_TYPE_SVG
    return CONTENT_TYPE_ICO


def project_identity(root_dir: str) -> str:
    """Directory name used for hash colors and default initials."""
    return os.path.basename(os.path.normpath(root_dir)) or root_dir


class FaviconResolver:
    """Resolves a project directory to its favicon, caching every outcome.

    Collaborators are built from config unless injected. Safe to share across
    concurrent requests on one event loop; racing resolves for the same key
    compute identical assets and the last store wins.
    """

    def __init__(
        self,
        registry: IProjectRegistry,
        *,
        config: FaviconConfig | None = None,
        discovery: IIconDiscovery | None = None,
        synthesizer: BadgeSynthesizer | None = None,
        favicon_cache: BoundedCache[str, IconAsset] | None = None,
        negative_cache: BoundedCache[str, float] | None = None,
    ) -> None:
        self.config = config or FaviconConfig()
        self.registry = registry
        self.discovery = discovery or IconDiscovery(self.config.scan_limits)
        self.synthesizer = synthesizer or BadgeSynthesizer(
            ColorAssigner(
                self.config.type_colors,
                self.config.palette,
                BoundedCache(self.config.color_cache_max_size),
            ),
            default_category=self.config.default_project_type,
            port_category=self.config.port_label_type,
        )
        self.favicon_cache: BoundedCache[str, IconAsset] = (
            favicon_cache
            if favicon_cache is not None
            else BoundedCache(self.config.favicon_cache_max_size)
        )
        self.negative_cache: BoundedCache[str, float] = (
            negative_cache
            if negative_cache is not None
            else BoundedCache(self.config.negative_cache_max_size)
        )
        self._background_tasks: set[asyncio.Task[WarmResult]] = set()

    @traced("favicon_resolver.resolve")
    async def resolve(self, root_dir: str, *, grayscale: bool = False) -> IconAsset:
        """Return the favicon for root_dir (icon file if present, else a badge).

        Args:
            root_dir: Absolute project directory.
            grayscale: Request the grayscale badge variant (cached separately).

        Returns:
            IconAsset; never raises for missing or unreadable icons.
        """
        cache_key = make_cache_key(
            CACHE_PREFIX_FAVICON,
            GRAYSCALE_KEY_PART if grayscale else COLOR_KEY_PART,
            root_dir,
        )
        cached = self.favicon_cache.get(cache_key)
        if cached is not None:
            add_span_attributes(cache_hit=True)
            return cached
        add_span_attributes(cache_hit=False)

        asset = await self._load_icon_file(root_dir)
        if asset is None:
            asset = await self._synthesize_badge(root_dir, grayscale)
            add_span_attributes(source="badge")
        else:
            add_span_attributes(source="file")

        self.favicon_cache.set(cache_key, asset)
        return asset

    def _negative_key(self, root_dir: str) -> str:
        return make_cache_key(CACHE_PREFIX_FAVICON_NEGATIVE, root_dir)

    def _is_known_absent(self, root_dir: str) -> bool:
        """True if a recent scan of root_dir found no icon file (entry not expired)."""
        key = self._negative_key(root_dir)
        expires_at = self.negative_cache.get(key)
        if expires_at is None:
            return False
        if time.monotonic() >= expires_at:
            self.negative_cache.delete(key)
            return False
        return True

    def _remember_absent(self, root_dir: str) -> None:
        self.negative_cache.set(
            self._negative_key(root_dir),
            time.monotonic() + self.config.negative_cache_ttl_seconds,
        )
        logger.debug(
            "Stored negative cache entry for %s (ttl %ss)",
            root_dir,
            self.config.negative_cache_ttl_seconds,
        )

    async def _load_icon_file(self, root_dir: str) -> IconAsset | None:
        """Find and read the project's icon file; None means "synthesize instead"."""
        if self._is_known_absent(root_dir):
            logger.debug("Negative cache hit for %s; skipping icon search", root_dir)
            return None

        icon_path = await self.discovery.find_asset(root_dir)
        if icon_path is None:
            self._remember_absent(root_dir)
            return None

        try:
            data = await read_icon_file(icon_path, self.config.retry_policy)
        except IconNotFoundError:
            logger.debug("Icon file %s vanished before read", icon_path)
            return None
        except IconPermissionError as e:
            logger.warning(
                "Permission denied reading icon file %s (%s)",
                icon_path,
                e.details.get("code"),
            )
            add_span_event("favicon.read_failed", {"error_code": e.error_code})
            return None
        except IconReadException as e:
            logger.error(
                "Failed to read icon file %s (%s); falling back to generated badge",
                icon_path,
                e.details.get("code"),
            )
            add_span_event("favicon.read_failed", {"error_code": e.error_code})
            return None
        return IconAsset(content_type=get_content_type(icon_path), data=data)

    async def _get_descriptor(self, root_dir: str) -> ProjectDescriptor:
        """Registry entry for root_dir; lookup failures are treated as an empty entry."""
        try:
            info = await self.registry.get_project_info(root_dir)
        except Exception as e:
            logger.warning("Project registry lookup failed for %s: %s", root_dir, e)
            info = None
        return ProjectDescriptor.from_mapping(info)

    async def _synthesize_badge(self, root_dir: str, grayscale: bool) -> IconAsset:
        descriptor = await self._get_descriptor(root_dir)
        svg = self.synthesizer.synthesize(
            project_identity(root_dir), descriptor, grayscale=grayscale
        )
        return IconAsset(content_type=CONTENT_TYPE_SVG, data=svg.encode("utf-8"))

    def warm_cache(
        self,
        root_dirs: Iterable[str] | None,
        *,
        timeout: float | None = None,
    ) -> WarmHandle:
        """Start resolving color and grayscale variants of root_dirs in the background.

        Returns immediately; must be called from a running event loop. Await
        the handle for the WarmResult. No new directory is started after
        timeout seconds, and directories still in flight then are cancelled.

        Args:
            root_dirs: Project directories to warm.
            timeout: Seconds before warming stops (default warm_timeout_seconds).
        """
        paths = list(root_dirs or [])
        if timeout is None:
            timeout = self.config.warm_timeout_seconds
        task = asyncio.get_running_loop().create_task(
            self._warm(paths, timeout), name="favicon-cache-warming"
        )
        self._background_tasks.add(task)
        task.add_done_callback(self._on_warm_done)
        return WarmHandle(background=True, task=task)

    def _on_warm_done(self, task: asyncio.Task[WarmResult]) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Favicon cache warming encountered unexpected error", exc_info=exc)

    async def _warm(self, paths: list[str], timeout: float) -> WarmResult:
        loop = asyncio.get_running_loop()
        started = loop.time()
        if not paths:
            logger.debug("No projects to warm, skipping favicon cache warming")
            return WarmResult(warmed=0, failed=0, skipped=0, total=0, duration_ms=0)

        logger.info(
            "Starting favicon cache warming for %s projects (timeout %.1fs)",
            len(paths),
            timeout,
        )
        deadline = started + timeout
        semaphore = asyncio.Semaphore(self.config.warm_concurrency)
        counts: Counter[str] = Counter()

        async def warm_one(root_dir: str) -> None:
            async with semaphore:
                if loop.time() >= deadline:
                    return
                try:
                    await self.resolve(root_dir, grayscale=False)
                    await self.resolve(root_dir, grayscale=True)
                except Exception as e:
                    counts["failed"] += 1
                    logger.debug("Favicon warming failed for %s: %s", root_dir, e)
                else:
                    counts["warmed"] += 1

        tasks = [loop.create_task(warm_one(p)) for p in paths]
        try:
            _, pending = await asyncio.wait(tasks, timeout=timeout)
        finally:
            for t in tasks:
                if not t.done():
                    t.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        warmed, failed = counts["warmed"], counts["failed"]
        result = WarmResult(
            warmed=warmed,
            failed=failed,
            skipped=len(paths) - warmed - failed,
            total=len(paths),
            duration_ms=round((loop.time() - started) * 1000),
        )
        logger.info(
            "Favicon cache warming completed: warmed=%s failed=%s skipped=%s total=%s duration_ms=%s",
            result.warmed,
            result.failed,
            result.skipped,
            result.total,
            result.duration_ms,
        )
        return result

    def get_stats(self) -> ResolverStats:
        """Favicon, color and negative cache statistics with combined totals."""
        favicon = self.favicon_cache.get_stats()
        color = self.synthesizer.color_assigner.get_cache_stats()
        negative = self.negative_cache.get_stats()
        hits = favicon.hits + color.hits + negative.hits
        misses = favicon.misses + color.misses + negative.misses
        return ResolverStats(
            favicon_cache=favicon,
            color_cache=color,
            negative_cache=negative,
            negative_cache_ttl_seconds=self.config.negative_cache_ttl_seconds,
            total_hits=hits,
            total_misses=misses,
            total_evictions=favicon.evictions + color.evictions + negative.evictions,
            overall_hit_rate=format_percent(hits, hits + misses),
        )

    def clear_caches(self) -> None:
        """Drop every cached favicon, color and negative result (and their stats)."""
        self.favicon_cache.clear()
        self.synthesizer.color_assigner.cache.clear()
        self.negative_cache.clear()
        logger.info("Favicon caches cleared")
