"""Phase events emitted while a push or pull runs.

roadsync has two phases: ``Discover`` (listing the board, no item count) and
``Push`` (one tick per local item). Observers override the hooks they care
about; every hook defaults to doing nothing.
"""

from __future__ import annotations


class SyncProgress:
    """Receives phase events from :class:`~roadsync.sdk.RoadSync` and the push engine."""

    def phase_start(self, phase: str, total: int | None = None) -> None:
        pass

    def item_done(self, phase: str) -> None:
        pass

    def phase_done(self, phase: str) -> None:
        pass

    def phase_error(self, phase: str, error: BaseException) -> None:
        pass


class NullSyncProgress(SyncProgress):
    """Observer used when the caller passes none."""
