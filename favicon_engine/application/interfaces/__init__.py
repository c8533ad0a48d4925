"""Application ports (protocols) implemented by infrastructure."""

from favicon_engine.application.interfaces.repositories import IProjectRegistry
from favicon_engine.application.interfaces.services import IIconDiscovery

__all__ = ["IIconDiscovery", "IProjectRegistry"]
