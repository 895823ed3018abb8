"""Sync engines and their building blocks."""

from roadsync.engine.body import encode_body, parse_metadata_block, strip_metadata_block
from roadsync.engine.matcher import Matcher
from roadsync.engine.progress import NullSyncProgress, SyncProgress
from roadsync.engine.pull import PullEngine
from roadsync.engine.push import PushEngine
from roadsync.engine.status import StatusMapper

__all__ = [
    "Matcher",
    "NullSyncProgress",
    "PullEngine",
    "PushEngine",
    "StatusMapper",
    "SyncProgress",
    "encode_body",
    "parse_metadata_block",
    "strip_metadata_block",
]
