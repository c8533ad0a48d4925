"""Application services: color assignment, badge synthesis, favicon resolution."""

from favicon_engine.application.services.badge_synthesizer import (
    BadgeSynthesizer,
    make_initials,
)
from favicon_engine.application.services.color_assigner import ColorAssigner, identity_hash
from favicon_engine.application.services.favicon_resolver import (
    FaviconResolver,
    get_content_type,
    project_identity,
)

__all__ = [
    "BadgeSynthesizer",
    "ColorAssigner",
    "FaviconResolver",
    "get_content_type",
    "identity_hash",
    "make_initials",
    "project_identity",
]
