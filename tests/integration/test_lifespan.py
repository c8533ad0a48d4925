"""Integration tests for the engine lifespan context."""

import asyncio
import time

import pytest

from favicon_engine.core.config import Settings
from favicon_engine.core.lifespan import create_favicon_lifespan
from favicon_engine.infrastructure.filesystem.icon_discovery import IconDiscovery
from favicon_engine.infrastructure.registry.in_memory_registry import InMemoryProjectRegistry

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR-test-icon"


async def _wait_for_size(resolver, size: int) -> None:
    for _ in range(200):
        if len(resolver.favicon_cache) >= size:
            return
        await asyncio.sleep(0.01)


class TestFaviconLifespan:
    @pytest.mark.asyncio
    async def test_yields_working_resolver(self, make_tree) -> None:
        root = str(make_tree("site", {"favicon.png": PNG_BYTES}))
        settings = Settings(_env_file=None, warm_on_startup=False)
        async with create_favicon_lifespan(InMemoryProjectRegistry(), settings=settings) as resolver:
            asset = await resolver.resolve(root)
            assert asset.data == PNG_BYTES

    @pytest.mark.asyncio
    async def test_warms_registered_paths_on_startup(self, make_tree) -> None:
        roots = [str(make_tree("a", {})), str(make_tree("b", {"favicon.png": PNG_BYTES}))]
        registry = InMemoryProjectRegistry({root: {"type": "dev"} for root in roots})
        settings = Settings(_env_file=None, warm_on_startup=True)
        async with create_favicon_lifespan(registry, settings=settings) as resolver:
            await _wait_for_size(resolver, 4)
            assert len(resolver.favicon_cache) == 4

    @pytest.mark.asyncio
    async def test_no_warming_when_disabled(self, make_tree) -> None:
        root = str(make_tree("a", {}))
        settings = Settings(_env_file=None, warm_on_startup=False)
        async with create_favicon_lifespan(
            InMemoryProjectRegistry(), settings=settings, warm_paths=[root]
        ) as resolver:
            await asyncio.sleep(0.05)
            assert len(resolver.favicon_cache) == 0

    @pytest.mark.asyncio
    async def test_shutdown_cancels_unfinished_warming(self, make_tree, monkeypatch) -> None:
        async def stuck_find(self, root_dir: str):
            await asyncio.sleep(30)

        monkeypatch.setattr(IconDiscovery, "find_asset", stuck_find)
        settings = Settings(_env_file=None, warm_on_startup=True, warm_timeout_seconds=30)
        started = time.monotonic()
        async with create_favicon_lifespan(
            InMemoryProjectRegistry(), settings=settings, warm_paths=[str(make_tree("a", {}))]
        ) as resolver:
            await asyncio.sleep(0.05)
            assert len(resolver.favicon_cache) == 0
        assert time.monotonic() - started < 5
