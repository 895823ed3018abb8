"""Push engine: reconcile local roadmap items onto the board."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from roadsync.contracts.board import RemoteBoardClient
from roadsync.contracts.exceptions import ProviderError, RemoteNotFoundError
from roadsync.contracts.remote import RemoteItem, RemoteItemUpdate
from roadsync.contracts.roadmap import RoadmapItem
from roadsync.contracts.sync import ItemFailure, PlannedChange, PushResult
from roadsync.engine.body import bodies_equal, encode_body
from roadsync.engine.matcher import Matcher
from roadsync.engine.progress import NullSyncProgress, SyncProgress
from roadsync.engine.status import StatusMapper

logger = logging.getLogger(__name__)

T = TypeVar("T")

_PHASE = "Push"


@dataclass(frozen=True)
class _Step:
    item: RoadmapItem
    action: str
    remote: RemoteItem | None
    fields: RemoteItemUpdate
    conflict: str | None = None


@dataclass(frozen=True)
class _Outcome:
    step: _Step
    error: str | None = None


class PushEngine:
    """Create missing board items and update only the fields that differ.

    Board calls for independent items run concurrently, bounded by
    *max_concurrent*. Each item task returns its own outcome; the report is
    assembled after all tasks finish, in store order. A failure on one item is
    recorded and never stops the others. Push never touches the local store.

    Args:
        board: Board adapter to write to.
        mapper: Status translation table.
        max_concurrent: Maximum number of board calls in flight.
        dry_run: Compute the report without calling ``create``/``update``.
        progress: Progress observer.
    """

    def __init__(
        self,
        board: RemoteBoardClient,
        *,
        mapper: StatusMapper | None = None,
        max_concurrent: int = 1,
        dry_run: bool = False,
        progress: SyncProgress | None = None,
    ) -> None:
        self._board = board
        self._mapper = mapper or StatusMapper()
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._dry_run = dry_run
        self._progress = progress or NullSyncProgress()

    async def push(self, items: Sequence[RoadmapItem], remote_items: Sequence[RemoteItem]) -> PushResult:
        matcher = Matcher()
        warnings: list[str] = []
        # Title is the match key, so one title can only be written by one item per run.
        owners: dict[str, str] = {}
        steps: list[_Step] = []
        for item in items:
            step = self._plan(item, matcher.match(item, remote_items))
            owner = owners.setdefault(item.title, item.label)
            if owner != item.label:
                reason = f"title {item.title!r} is already pushed by {owner!r}; skipped"
                logger.warning("%s: %s", item.label, reason)
                warnings.append(f"{item.label}: {reason}")
                step = _Step(
                    item=item, action="conflict", remote=step.remote, fields=RemoteItemUpdate(), conflict=reason
                )
            steps.append(step)

        self._progress.phase_start(_PHASE, total=len(steps))
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [tg.create_task(self._apply(step)) for step in steps]
        except BaseException as exc:
            self._progress.phase_error(_PHASE, exc)
            raise
        self._progress.phase_done(_PHASE)

        result = PushResult(
            dry_run=self._dry_run,
            warnings=[str(warning) for warning in matcher.warnings] + warnings,
        )
        for task in tasks:
            outcome = task.result()
            step = outcome.step
            if outcome.error is not None:
                result.failed.append(ItemFailure(label=step.item.label, reason=outcome.error))
                continue
            if step.action == "unchanged":
                result.unchanged += 1
                continue
            if step.action == "create":
                result.created += 1
            else:
                result.updated += 1
            result.changes.append(
                PlannedChange(
                    label=step.item.label,
                    action=step.action,
                    remote_id=step.remote.id if step.remote is not None else None,
                    fields=step.fields,
                )
            )
        return result

    def _plan(self, item: RoadmapItem, remote: RemoteItem | None) -> _Step:
        column = self._mapper.to_remote(item.status)
        body = encode_body(item)
        if remote is None:
            return _Step(item=item, action="create", remote=None, fields=RemoteItemUpdate(body=body, column=column))

        fields = RemoteItemUpdate(
            column=column if remote.column != column else None,
            body=body if not bodies_equal(remote.body, body) else None,
        )
        if fields.is_empty():
            return _Step(item=item, action="unchanged", remote=remote, fields=fields)
        return _Step(item=item, action="update", remote=remote, fields=fields)

    async def _apply(self, step: _Step) -> _Outcome:
        label = step.item.label
        try:
            if step.conflict is not None:
                return _Outcome(step=step, error=step.conflict)
            if step.action == "unchanged":
                logger.debug("unchanged %s", label)
                return _Outcome(step=step)
            if self._dry_run:
                logger.info("[dry-run] %s %s", step.action, label)
                return _Outcome(step=step)
            if step.remote is None:
                created = await self._guarded(
                    self._board.create(step.item.title, step.fields.body or "", column=step.fields.column)
                )
                logger.info("created %s as board item %s", label, created.id)
                return _Outcome(step=_Step(item=step.item, action="create", remote=created, fields=step.fields))
            await self._guarded(self._board.update(step.remote.id, step.fields))
            logger.info(
                "updated %s (board item %s): %s",
                label,
                step.remote.id,
                ", ".join(sorted(step.fields.model_dump(exclude_none=True))),
            )
            return _Outcome(step=step)
        except RemoteNotFoundError as exc:
            logger.warning("%s: board item removed upstream, it will be recreated on the next push", label)
            return _Outcome(step=step, error=f"removed upstream, recreated on next push ({exc})")
        except ProviderError as exc:
            logger.warning("%s: %s", label, exc)
            return _Outcome(step=step, error=str(exc))
        finally:
            self._progress.item_done(_PHASE)

    async def _guarded(self, op: Awaitable[T]) -> T:
        async with self._semaphore:
            return await op
