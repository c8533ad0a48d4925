"""Shared helpers with no business logic."""

from favicon_engine.shared.utils.sanitization import SvgSanitizer

__all__ = ["SvgSanitizer"]
