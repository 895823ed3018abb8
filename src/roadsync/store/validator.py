"""Invariant checks for roadmap items."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from roadsync.contracts.exceptions import DuplicateLabelError, MissingFieldError
from roadsync.contracts.roadmap import RoadmapItem

_REQUIRED_TEXT_FIELDS = ("title", "label", "description")


def _describe(index: int, item: RoadmapItem) -> str:
    if item.label.strip():
        return f"item #{index} (label {item.label!r})"
    return f"item #{index}"


def validate_items(items: Sequence[RoadmapItem]) -> None:
    """Check the store invariants for *items*.

    Empty required fields are reported before duplicate labels; an item with
    an empty label is never counted as a duplicate.

    Raises:
        MissingFieldError: If any title, label or description is blank.
        DuplicateLabelError: If a label is used by more than one item.
    """
    missing: list[str] = []
    for index, item in enumerate(items, start=1):
        for field in _REQUIRED_TEXT_FIELDS:
            if not getattr(item, field).strip():
                missing.append(f"{_describe(index, item)} has an empty {field}")
    if missing:
        raise MissingFieldError(missing)

    counts = Counter(item.label for item in items)
    duplicates = [label for label, count in counts.items() if count > 1]
    if duplicates:
        raise DuplicateLabelError(
            [f"label {label!r} is used by {counts[label]} items" for label in duplicates]
        )
