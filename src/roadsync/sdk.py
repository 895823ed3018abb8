"""SDK composition root for roadsync."""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Sequence
from datetime import date

from roadsync.contracts.board import RemoteBoardClient
from roadsync.contracts.config import RoadSyncConfig
from roadsync.contracts.remote import RemoteItem
from roadsync.contracts.roadmap import Roadmap
from roadsync.contracts.sync import PullResult, PushResult
from roadsync.engine.progress import NullSyncProgress, SyncProgress
from roadsync.engine.pull import PullEngine
from roadsync.engine.push import PushEngine
from roadsync.engine.status import StatusMapper
from roadsync.providers.factory import create_board_client
from roadsync.store import RoadmapStore

logger = logging.getLogger(__name__)

BoardFactory = Callable[[], RemoteBoardClient]


class RoadSync:
    """roadsync SDK public API.

    Every operation loads and validates the store before the first board
    call, so a parse or validation failure never reaches the board. Pull
    applies local changes only through :meth:`apply_pull`, which saves the
    store once at the end.
    """

    def __init__(
        self,
        *,
        config: RoadSyncConfig,
        store: RoadmapStore,
        board_factory: BoardFactory,
        progress: SyncProgress | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._board_factory = board_factory
        self._progress = progress or NullSyncProgress()
        self._mapper = StatusMapper()

    @classmethod
    def from_config(cls, config: RoadSyncConfig, *, progress: SyncProgress | None = None) -> RoadSync:
        return cls(
            config=config,
            store=RoadmapStore(config.store_path),
            board_factory=lambda: create_board_client(config),
            progress=progress,
        )

    @property
    def store(self) -> RoadmapStore:
        return self._store

    def load(self) -> Roadmap:
        """Load and validate the local store."""
        roadmap = self._store.load()
        self._store.validate(roadmap.items)
        return roadmap

    async def push(self, *, dry_run: bool = False) -> PushResult:
        roadmap = self.load()
        async with self._board_factory() as board:
            remote_items = await self._fetch(board)
            engine = PushEngine(
                board,
                mapper=self._mapper,
                max_concurrent=self._config.max_concurrent,
                dry_run=dry_run,
                progress=self._progress,
            )
            result = await engine.push(roadmap.items, remote_items)
        logger.info(
            "push complete: %d created, %d updated, %d unchanged, %d failed",
            result.created,
            result.updated,
            result.unchanged,
            len(result.failed),
        )
        return result

    async def pull(self) -> tuple[Roadmap, PullResult]:
        """Compute a pull against the board without writing anything."""
        roadmap = self.load()
        async with self._board_factory() as board:
            remote_items = await self._fetch(board)
        result = PullEngine(mapper=self._mapper).pull(roadmap.items, remote_items)
        return roadmap, result

    def apply_pull(
        self,
        roadmap: Roadmap,
        result: PullResult,
        *,
        accepted: Sequence[RemoteItem] = (),
        removed_labels: Collection[str] = (),
        today: date | None = None,
        dry_run: bool = False,
    ) -> Roadmap:
        """Fold a pull into the store and save it.

        Args:
            roadmap: The roadmap the pull was computed from.
            result: The pull result.
            accepted: Board items the operator chose to import.
            removed_labels: Orphan labels the operator chose to drop locally.
            today: Start date for imported items without one.
            dry_run: Build the new roadmap without saving it.
        """
        engine = PullEngine(mapper=self._mapper)
        items = [item for item in result.items if item.label not in removed_labels]
        labels = {item.label for item in items}
        for remote in accepted:
            imported = engine.accept_remote(remote, labels, today or date.today())
            labels.add(imported.label)
            items.append(imported)

        updated = roadmap.model_copy(update={"items": items})
        if not dry_run and updated != roadmap:
            self._store.save(updated)
        return updated

    async def _fetch(self, board: RemoteBoardClient) -> list[RemoteItem]:
        self._progress.phase_start("Discover")
        try:
            remote_items = await board.list()
        except BaseException as exc:
            self._progress.phase_error("Discover", exc)
            raise
        self._progress.phase_done("Discover")
        logger.debug("board has %d items", len(remote_items))
        return remote_items
