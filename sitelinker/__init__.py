"""Contextual internal-link placement for article HTML."""

from .engine.index import LinkEngine, create_link_engine
from .engine.types import LinkDecision, SitePage

__all__ = ["LinkDecision", "LinkEngine", "SitePage", "create_link_engine"]
