"""Pytest configuration and fixtures for favicon-engine.

Project trees are built under tmp_path; resolvers use fast retry/scan
settings so error-path tests stay quick.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from favicon_engine.application.services.favicon_resolver import FaviconResolver
from favicon_engine.core.config import FaviconConfig, RetryPolicy, ScanLimits, get_settings
from favicon_engine.infrastructure.registry.in_memory_registry import InMemoryProjectRegistry


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are memoized per process; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, dict[str, bytes]], Path]:
    """Create a project directory with the given relative files; return its path."""

    def _make(name: str, files: dict[str, bytes]) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        return root

    return _make


@pytest.fixture
def config() -> FaviconConfig:
    """Default engine config with no retry delay and a short scan timeout."""
    return FaviconConfig(
        retry_policy=RetryPolicy(max_retries=2, initial_delay_seconds=0.0),
        scan_limits=ScanLimits(timeout_seconds=2.0),
    )


@pytest.fixture
def registry() -> InMemoryProjectRegistry:
    return InMemoryProjectRegistry()


@pytest.fixture
def resolver(registry: InMemoryProjectRegistry, config: FaviconConfig) -> FaviconResolver:
    return FaviconResolver(registry, config=config)
