"""Filesystem access: icon discovery and retrying file reads."""

from favicon_engine.infrastructure.filesystem.file_operations import (
    RETRYABLE_ERRNOS,
    is_retryable_error,
    read_icon_file,
    retry_file_operation,
)
from favicon_engine.infrastructure.filesystem.icon_discovery import (
    IconCandidate,
    IconDiscovery,
)

__all__ = [
    "RETRYABLE_ERRNOS",
    "IconCandidate",
    "IconDiscovery",
    "is_retryable_error",
    "read_icon_file",
    "retry_file_operation",
]
