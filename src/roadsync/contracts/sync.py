"""Models for push and pull results."""

from __future__ import annotations

from pydantic import BaseModel, Field

from roadsync.contracts.remote import RemoteItem, RemoteItemUpdate
from roadsync.contracts.roadmap import RoadmapItem


class ItemFailure(BaseModel):
    """A per-item error recorded without aborting the run."""

    label: str
    reason: str


class PlannedChange(BaseModel):
    """A remote write the push engine made (or would make in dry-run)."""

    label: str
    action: str
    remote_id: str | None = None
    fields: RemoteItemUpdate | None = None


class PushResult(BaseModel):
    """Value returned by :meth:`PushEngine.push`."""

    created: int = 0
    updated: int = 0
    unchanged: int = 0
    failed: list[ItemFailure] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    changes: list[PlannedChange] = Field(default_factory=list)
    dry_run: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed


class PullResult(BaseModel):
    """Value returned by :meth:`PullEngine.pull`.

    ``items`` is the full local item list with pulled statuses applied, in
    store order; nothing is written until the caller saves it.
    """

    items: list[RoadmapItem]
    updated: int = 0
    updated_labels: list[str] = Field(default_factory=list)
    new_from_remote: list[RemoteItem] = Field(default_factory=list)
    orphan_local: list[RoadmapItem] = Field(default_factory=list)
    failed: list[ItemFailure] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed
