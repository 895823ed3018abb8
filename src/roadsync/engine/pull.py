"""Pull engine: import board status changes into local roadmap items."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from datetime import date
from enum import StrEnum
from typing import TypeVar

from roadsync.contracts.exceptions import UnknownColumnError
from roadsync.contracts.remote import RemoteItem
from roadsync.contracts.roadmap import ItemKind, ItemLayer, ItemPriority, ItemStatus, RoadmapItem
from roadsync.contracts.sync import ItemFailure, PullResult
from roadsync.engine.body import parse_metadata_block, strip_metadata_block
from roadsync.engine.matcher import Matcher
from roadsync.engine.status import StatusMapper

logger = logging.getLogger(__name__)

_IMPORTED_DESCRIPTION = "(imported from board)"
_SLUG_RE = re.compile(r"[^a-z0-9]+")

E = TypeVar("E", bound=StrEnum)


def slugify(text: str) -> str:
    return _SLUG_RE.sub("-", text.lower()).strip("-") or "item"


def unique_label(base: str, existing: Iterable[str]) -> str:
    taken = set(existing)
    if base not in taken:
        return base
    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"


class PullEngine:
    """Apply board statuses to matched local items.

    The local store stays authoritative for everything except ``status``: a
    pull never rewrites title, description, kind, layer, priority or start
    date. Pulling makes no board calls; it works on a snapshot taken by the
    caller and returns the updated item list without saving it.
    """

    def __init__(self, *, mapper: StatusMapper | None = None) -> None:
        self._mapper = mapper or StatusMapper()

    def pull(self, items: Sequence[RoadmapItem], remote_items: Sequence[RemoteItem]) -> PullResult:
        matcher = Matcher()
        result = PullResult(items=[])
        local_titles = {item.title for item in items}

        for item in items:
            remote = matcher.match(item, remote_items)
            if remote is None:
                logger.warning("%s: no board item titled %r", item.label, item.title)
                result.orphan_local.append(item)
                result.items.append(item)
                continue
            result.items.append(self._pull_status(item, remote, result))

        # A board item titled like a local item is either its match or a
        # duplicate of it; neither is new work.
        for remote in remote_items:
            if remote.title in local_titles:
                continue
            if not remote.title.strip():
                message = f"board item {remote.id} has no title, not offered for import"
                logger.warning("%s", message)
                result.warnings.append(message)
                continue
            result.new_from_remote.append(remote)
        result.warnings.extend(str(warning) for warning in matcher.warnings)
        return result

    def _pull_status(self, item: RoadmapItem, remote: RemoteItem, result: PullResult) -> RoadmapItem:
        if remote.column is None:
            logger.debug("%s: board item %s has no column, status kept", item.label, remote.id)
            return item
        try:
            status = self._mapper.to_local(remote.column)
        except UnknownColumnError as exc:
            message = f"{exc}; status left as {item.status.value!r}"
            logger.warning("%s: %s", item.label, message)
            result.warnings.append(f"{item.label}: {message}")
            result.failed.append(ItemFailure(label=item.label, reason=str(exc)))
            return item
        if status == item.status:
            return item
        logger.info("%s: status %s -> %s", item.label, item.status.value, status.value)
        result.updated += 1
        result.updated_labels.append(item.label)
        return item.model_copy(update={"status": status})

    def accept_remote(self, remote: RemoteItem, existing_labels: Iterable[str], today: date) -> RoadmapItem:
        """Build a local item for a board item the operator chose to import.

        Fields carried in the body's metadata block are used when valid;
        otherwise the item defaults to a backend P3 task starting *today*.
        """
        metadata = parse_metadata_block(remote.body)
        label = unique_label(metadata.get("LABEL") or slugify(remote.title), existing_labels)
        description = strip_metadata_block(remote.body) or _IMPORTED_DESCRIPTION

        status = ItemStatus.PENDING
        if remote.column is not None:
            try:
                status = self._mapper.to_local(remote.column)
            except UnknownColumnError:
                logger.warning("%s: unknown column %r, imported as pending", label, remote.column)

        return RoadmapItem(
            title=remote.title,
            label=label,
            description=description,
            kind=_enum_or(ItemKind, metadata.get("KIND"), ItemKind.TASK),
            layer=_enum_or(ItemLayer, metadata.get("LAYER"), ItemLayer.BACKEND),
            priority=_enum_or(ItemPriority, metadata.get("PRIORITY"), ItemPriority.P3),
            status=status,
            start_date=_date_or(metadata.get("START_DATE"), today),
        )


def _enum_or(enum_cls: type[E], raw: str | None, default: E) -> E:
    if raw is None:
        return default
    try:
        return enum_cls(raw)
    except ValueError:
        return default


def _date_or(raw: str | None, default: date) -> date:
    if raw is None:
        return default
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return default
