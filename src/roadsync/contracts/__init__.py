"""Public contracts for roadsync."""

from roadsync.contracts.board import RemoteBoardClient
from roadsync.contracts.config import RoadSyncConfig
from roadsync.contracts.exceptions import (
    AmbiguousMatchWarning,
    ConfigError,
    DuplicateLabelError,
    MissingFieldError,
    ParseError,
    ProjectURLError,
    ProviderError,
    RemoteNotFoundError,
    RemoteUnavailableError,
    RoadmapValidationError,
    RoadSyncError,
    StoreWriteError,
    UnknownColumnError,
)
from roadsync.contracts.remote import RemoteItem, RemoteItemUpdate
from roadsync.contracts.roadmap import ItemKind, ItemLayer, ItemPriority, ItemStatus, Roadmap, RoadmapItem
from roadsync.contracts.sync import ItemFailure, PlannedChange, PullResult, PushResult

__all__ = [
    "AmbiguousMatchWarning",
    "ConfigError",
    "DuplicateLabelError",
    "ItemFailure",
    "ItemKind",
    "ItemLayer",
    "ItemPriority",
    "ItemStatus",
    "MissingFieldError",
    "ParseError",
    "PlannedChange",
    "ProjectURLError",
    "ProviderError",
    "PullResult",
    "PushResult",
    "RemoteBoardClient",
    "RemoteItem",
    "RemoteItemUpdate",
    "RemoteNotFoundError",
    "RemoteUnavailableError",
    "RoadSyncConfig",
    "RoadSyncError",
    "Roadmap",
    "RoadmapItem",
    "RoadmapValidationError",
    "StoreWriteError",
    "UnknownColumnError",
]
