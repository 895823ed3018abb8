"""Custom exception hierarchy for roadsync.

All roadsync exceptions inherit from :class:`RoadSyncError`, making it easy
to catch any library error with a single ``except`` clause while still allowing
callers to handle specific failure modes.

Fatal errors (config, parse, validation) abort a run before any remote call.
Per-item errors (:class:`ProviderError` and its subclasses) are recorded by the
engines and never abort the run.
"""

from __future__ import annotations


class RoadSyncError(Exception):
    """Base exception for all roadsync errors."""


class ConfigError(RoadSyncError):
    """Raised when the roadsync config file is missing or invalid."""


class ProjectURLError(RoadSyncError):
    """Raised when a board URL cannot be parsed."""


class ParseError(RoadSyncError):
    """Raised when the roadmap store cannot be read or has a malformed structure."""


class StoreWriteError(RoadSyncError):
    """Raised when the roadmap store cannot be written."""


class RoadmapValidationError(RoadSyncError):
    """Raised when roadmap items violate a store invariant.

    Attributes:
        errors: Individual validation error messages.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        joined = "\n".join(f"  - {e}" for e in errors)
        super().__init__(f"Roadmap validation failed:\n{joined}")


class DuplicateLabelError(RoadmapValidationError):
    """Raised when two or more items share a label."""


class MissingFieldError(RoadmapValidationError):
    """Raised when an item has an empty title, label, or description."""


class ProviderError(RoadSyncError):
    """Raised when a remote board call fails unexpectedly."""


class RemoteUnavailableError(ProviderError):
    """Raised on network, auth, rate-limit, or timeout failures of a board call."""


class RemoteNotFoundError(ProviderError):
    """Raised when a board item id no longer exists upstream."""


class UnknownColumnError(RoadSyncError):
    """Raised when a board column has no local status counterpart.

    Attributes:
        column: The unrecognised column name.
    """

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Unknown board column: {column!r}")


class AmbiguousMatchWarning(UserWarning):
    """Several board items share the title of one local item.

    Attributes:
        title: The shared title.
        remote_ids: Ids of every candidate, in board order.
    """

    def __init__(self, title: str, remote_ids: list[str]) -> None:
        self.title = title
        self.remote_ids = remote_ids
        super().__init__(
            f"{len(remote_ids)} board items are titled {title!r}; using {remote_ids[0]} "
            f"(others: {', '.join(remote_ids[1:])})"
        )
