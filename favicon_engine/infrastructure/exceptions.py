"""Infrastructure exceptions for icon file access.

Raised by read_icon_file and caught by the resolver, which falls back to a
synthesized badge. They extend FaviconEngineException so callers that do
see them get a consistent message/error_code/details shape.
"""

from favicon_engine.domain.exceptions import FaviconEngineException


class IconReadException(FaviconEngineException):
    """Base exception for icon file reads."""


class IconNotFoundError(IconReadException):
    """Icon file disappeared between discovery and read."""

    def __init__(self, file_path: str) -> None:
        super().__init__(
            f"Icon file not found: {file_path}",
            "ICON_NOT_FOUND",
            {"file_path": file_path},
        )


class IconPermissionError(IconReadException):
    """Access to the icon file was denied."""

    def __init__(self, file_path: str, code: str) -> None:
        super().__init__(
            f"Access denied to icon file: {file_path}",
            "ICON_PERMISSION_DENIED",
            {"file_path": file_path, "code": code},
        )


class IconReadFailedError(IconReadException):
    """Icon read failed (I/O error, not a file, or retries exhausted)."""

    def __init__(self, file_path: str, code: str, reason: str) -> None:
        super().__init__(
            f"Failed to read icon file: {file_path}",
            "ICON_READ_ERROR",
            {"file_path": file_path, "code": code, "reason": reason},
        )
