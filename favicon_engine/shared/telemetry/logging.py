"""Logging setup for processes embedding the engine."""

import logging
import sys

from favicon_engine.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are noisy at DEBUG
_QUIET_LOGGERS = ("opentelemetry", "asyncio")


def setup_logging(settings: Settings | None = None) -> None:
    """Send log records to stdout; DEBUG for the engine when settings.debug is set.

    Safe to call more than once: an already-configured root logger is left alone.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("favicon_engine").setLevel(level)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
