"""Local roadmap store."""

from roadsync.store.store import RoadmapStore
from roadsync.store.validator import validate_items

__all__ = ["RoadmapStore", "validate_items"]
