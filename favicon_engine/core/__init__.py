"""Core: config, constants, and engine bootstrap.

Single place for settings and shared constants.
"""

from favicon_engine.core.config import (
    FaviconConfig,
    RetryPolicy,
    ScanLimits,
    Settings,
    get_settings,
)

__all__ = [
    "FaviconConfig",
    "RetryPolicy",
    "ScanLimits",
    "Settings",
    "get_settings",
]
