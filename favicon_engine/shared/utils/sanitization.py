"""Sanitization for text interpolated into generated SVG badges."""

import logging
import re
from html import escape, unescape
from typing import Any, ClassVar

import nh3

from favicon_engine.core.constants import MAX_DISPLAY_NAME_LENGTH

logger = logging.getLogger(__name__)


class SvgSanitizer:
    """
    Make registry-supplied values safe to embed in SVG markup.

    Markup is stripped with nh3, names are reduced to a character allowlist,
    and everything interpolated is XML-escaped as a final layer.
    """

    ALLOWED_TAGS: ClassVar[set[str]] = set()
    NAME_DISALLOWED: ClassVar[re.Pattern[str]] = re.compile(r"[^a-zA-Z0-9\-_\s]")
    PORT_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"^\d{1,5}$")

    @staticmethod
    def escape_text(value: str) -> str:
        """XML-escape text for element content or attribute values."""
        return escape(value, quote=True)

    @classmethod
    def clean_display_name(cls, value: Any) -> str:
        """Strip markup and keep only alphanumerics, hyphen, underscore and whitespace.

        Args:
            value: Raw project name from the registry or a directory name.

        Returns:
            Cleaned name (at most MAX_DISPLAY_NAME_LENGTH chars), or "" if
            value is not a string.
        """
        if not value or not isinstance(value, str):
            return ""
        # nh3 entity-escapes the text it keeps; decode before the allowlist
        text = unescape(nh3.clean(value, tags=cls.ALLOWED_TAGS, attributes={}))
        cleaned = cls.NAME_DISALLOWED.sub("", text)
        return cleaned[:MAX_DISPLAY_NAME_LENGTH]

    @classmethod
    def sanitize_port(cls, port: Any) -> str:
        """Return port as a digit string if it is a valid TCP port, else "".

        Args:
            port: Port from the registry (int or str).

        Returns:
            "1".."65535", or "" for falsy or invalid values.
        """
        if not port or isinstance(port, bool):
            return ""
        port_str = str(port)
        if not cls.PORT_PATTERN.match(port_str):
            logger.warning("Invalid port format in project registry: %r", port_str[:20])
            return ""
        if not 1 <= int(port_str) <= 65535:
            logger.warning("Port out of valid range in project registry: %s", port_str)
            return ""
        return port_str
