"""SVG badge synthesis for projects without an icon file.

The badge is a pure function of (identity, descriptor, grayscale): initials
on a colored rounded square, plus the port for development projects.
"""

from __future__ import annotations

import re

from favicon_engine.application.services.color_assigner import ColorAssigner
from favicon_engine.core.constants import BADGE_PLACEHOLDER_INITIALS
from favicon_engine.domain.entities.project import ProjectDescriptor
from favicon_engine.shared.utils.sanitization import SvgSanitizer

_WORD_SPLIT_RE = re.compile(r"[-_\s]+")

_SVG_TEMPLATE = (
    '<svg width="32" height="32" xmlns="http://www.w3.org/2000/svg">'
    '<rect width="32" height="32" rx="4" fill="{color}"/>'
    '<text x="16" y="21" text-anchor="middle" fill="white" '
    'font-family="Arial, sans-serif" font-size="14" font-weight="bold">{initials}</text>'
    "{label}"
    "</svg>"
)

_PORT_LABEL_TEMPLATE = (
    '<text x="16" y="30" text-anchor="middle" fill="white" '
    'font-family="monospace" font-size="6" opacity="0.8">{port}</text>'
)


def make_initials(name: str | None) -> str:
    """Up to two uppercase initials from the first two words of name.

    Words are split on whitespace, hyphens and underscores after the name is
    sanitized. Returns BADGE_PLACEHOLDER_INITIALS when nothing usable is left.
    """
    cleaned = SvgSanitizer.clean_display_name(name)
    words = [w for w in _WORD_SPLIT_RE.split(cleaned) if w]
    initials = "".join(w[0] for w in words[:2]).upper()
    return initials or BADGE_PLACEHOLDER_INITIALS


class BadgeSynthesizer:
    """Builds deterministic SVG badges from project identity and registry metadata."""

    def __init__(
        self,
        color_assigner: ColorAssigner,
        default_category: str = "dev",
        port_category: str = "dev",
    ) -> None:
        self.color_assigner = color_assigner
        self.default_category = default_category
        self.port_category = port_category

    def synthesize(
        self,
        identity: str,
        descriptor: ProjectDescriptor | None = None,
        *,
        grayscale: bool = False,
    ) -> str:
        """Return SVG markup for the project's badge.

        Args:
            identity: Project identity (directory name); drives the hash color
                and the initials when the descriptor has no name.
            descriptor: Registry metadata; None is treated as empty.
            grayscale: Render the background in gray.
        """
        descriptor = descriptor or ProjectDescriptor()
        category = descriptor.type or self.default_category

        initials = make_initials(descriptor.name or identity)
        color = self.color_assigner.get_color(category, identity)
        if grayscale:
            color = self.color_assigner.to_grayscale(color)

        return _SVG_TEMPLATE.format(
            color=SvgSanitizer.escape_text(color),
            initials=SvgSanitizer.escape_text(initials),
            label=self._port_label(category, descriptor.port),
        )

    def _port_label(self, category: str, port: str | int | None) -> str:
        if category != self.port_category:
            return ""
        port_text = SvgSanitizer.sanitize_port(port)
        if not port_text:
            return ""
        return _PORT_LABEL_TEMPLATE.format(port=SvgSanitizer.escape_text(port_text))
