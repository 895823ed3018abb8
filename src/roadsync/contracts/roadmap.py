"""Roadmap contracts: the local item model and its enumerations."""

from __future__ import annotations

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field


class ItemKind(StrEnum):
    BUG = "bug"
    FEATURE = "feature"
    TASK = "task"


class ItemLayer(StrEnum):
    BACKEND = "backend"
    FRONTEND = "frontend"
    DEVOPS = "devops"


class ItemPriority(StrEnum):
    """Item priority. ``P0`` outranks ``P1`` which outranks ``P3``."""

    P0 = "P0"
    P1 = "P1"
    P3 = "P3"

    @property
    def rank(self) -> int:
        """Sort key; lower ranks are more urgent."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {ItemPriority.P0: 0, ItemPriority.P1: 1, ItemPriority.P3: 3}


class ItemStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class RoadmapItem(BaseModel):
    """A single roadmap entry as written in the local store.

    ``title``, ``label`` and ``description`` default to empty strings so that a
    missing value surfaces as a :class:`~roadsync.contracts.exceptions.MissingFieldError`
    from validation rather than a parse failure.
    """

    title: str = ""
    label: str = ""
    description: str = ""
    kind: ItemKind
    layer: ItemLayer
    priority: ItemPriority
    status: ItemStatus = ItemStatus.PENDING
    start_date: date

    model_config = {"frozen": True, "extra": "forbid"}


class Roadmap(BaseModel):
    """The whole store document: a project identifier and its ordered items."""

    project: str
    items: list[RoadmapItem] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @property
    def labels(self) -> set[str]:
        return {item.label for item in self.items}
