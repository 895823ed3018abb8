"""Public API surface for roadsync."""

__version__ = "0.1.0"

from roadsync.config import CONFIG_FILENAME, default_board_url, detect_owner, load_config, scaffold_config, write_config
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
from roadsync.engine import Matcher, PullEngine, PushEngine, StatusMapper, SyncProgress
from roadsync.providers import create_board_client
from roadsync.sdk import RoadSync
from roadsync.store import RoadmapStore

__all__ = [
    "CONFIG_FILENAME",
    "AmbiguousMatchWarning",
    "ConfigError",
    "DuplicateLabelError",
    "ItemFailure",
    "ItemKind",
    "ItemLayer",
    "ItemPriority",
    "ItemStatus",
    "Matcher",
    "MissingFieldError",
    "ParseError",
    "PlannedChange",
    "ProjectURLError",
    "ProviderError",
    "PullEngine",
    "PullResult",
    "PushEngine",
    "PushResult",
    "RemoteBoardClient",
    "RemoteItem",
    "RemoteItemUpdate",
    "RemoteNotFoundError",
    "RemoteUnavailableError",
    "RoadSync",
    "RoadSyncConfig",
    "RoadSyncError",
    "Roadmap",
    "RoadmapItem",
    "RoadmapStore",
    "RoadmapValidationError",
    "StatusMapper",
    "StoreWriteError",
    "SyncProgress",
    "UnknownColumnError",
    "__version__",
    "create_board_client",
    "default_board_url",
    "detect_owner",
    "load_config",
    "scaffold_config",
    "write_config",
]
