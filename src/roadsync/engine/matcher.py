"""Title-based matching of local items to board items."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from roadsync.contracts.exceptions import AmbiguousMatchWarning
from roadsync.contracts.remote import RemoteItem
from roadsync.contracts.roadmap import RoadmapItem

logger = logging.getLogger(__name__)


class Matcher:
    """Resolve a local item to at most one board item by exact title.

    Labels never reach the board as a native field, so the title is the only
    natural key both sides share. No id is persisted locally; the mapping is
    recomputed on every run, which means a rename on either side breaks the
    link. Matching is a linear scan (items x board items per run), which is
    fine for tens to a few hundred items.

    Ambiguous matches (several board items with the same title) resolve to the
    first candidate in board order and are recorded on :attr:`warnings`.
    """

    def __init__(self) -> None:
        self.warnings: list[AmbiguousMatchWarning] = []

    def match(self, local: RoadmapItem, remote_items: Sequence[RemoteItem]) -> RemoteItem | None:
        candidates = [remote for remote in remote_items if remote.title == local.title]
        if not candidates:
            return None
        if len(candidates) > 1:
            warning = AmbiguousMatchWarning(local.title, [remote.id for remote in candidates])
            logger.warning("%s: %s", local.label, warning)
            self.warnings.append(warning)
        return candidates[0]
