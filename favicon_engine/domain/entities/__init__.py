"""Domain entities.

Pure domain models; no filesystem or cache concerns.
"""

from favicon_engine.domain.entities.icon_asset import IconAsset
from favicon_engine.domain.entities.project import ProjectDescriptor

__all__ = [
    "IconAsset",
    "ProjectDescriptor",
]
