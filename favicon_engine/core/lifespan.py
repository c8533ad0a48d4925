"""Engine lifespan: startup and shutdown.

The embedding HTTP layer enters this context once and serves favicon
requests with the yielded resolver until shutdown.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager

from favicon_engine.application.interfaces.repositories import IProjectRegistry
from favicon_engine.application.services.favicon_resolver import FaviconResolver
from favicon_engine.core.config import Settings, get_settings
from favicon_engine.shared.telemetry.logging import setup_logging
from favicon_engine.shared.telemetry.telemetry import (
    EngineTelemetry,
    get_telemetry,
    set_telemetry,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_favicon_lifespan(
    registry: IProjectRegistry,
    *,
    settings: Settings | None = None,
    warm_paths: Iterable[str] | None = None,
) -> AsyncIterator[FaviconResolver]:
    """Build the resolver, start warming, yield; on exit stop warming and telemetry.

    Args:
        registry: Project registry collaborator.
        settings: Settings override (defaults to get_settings()).
        warm_paths: Project directories to warm when WARM_ON_STARTUP is set
            (defaults to registry.list_project_paths()).
    """
    settings = settings or get_settings()

    # ---- Startup ----
    setup_logging(settings)

    if settings.telemetry_enabled:
        telemetry = EngineTelemetry.from_settings(settings)
        if telemetry.start() is not None:
            telemetry.instrument_logging()
            set_telemetry(telemetry)

    resolver = FaviconResolver(registry, config=settings.favicon_config())

    warm_task = None
    paths = list(warm_paths) if warm_paths is not None else registry.list_project_paths()
    if settings.warm_on_startup and paths:
        warm_task = resolver.warm_cache(paths).task

    try:
        yield resolver
    finally:
        # ---- Shutdown ----
        if warm_task is not None and not warm_task.done():
            warm_task.cancel()
            try:
                await warm_task
            except asyncio.CancelledError:
                pass
            logger.info("Favicon cache warming cancelled at shutdown")

        telemetry_instance = get_telemetry()
        if telemetry_instance is not None:
            telemetry_instance.shutdown()
            set_telemetry(None)
