"""Terminal progress for ``roadsync push`` and ``roadsync pull``."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from roadsync.engine.progress import SyncProgress

_LABELS = {"Discover": "[cyan]Discover[/]", "Push": "[green]Push[/]"}


class RichSyncProgress(SyncProgress):
    """One rich progress row per phase, written to stderr by default.

    Listing the board has no known size, so ``Discover`` pulses until it is
    done and is then drawn as one completed step.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>14}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console or Console(stderr=True),
        )
        self._rows: dict[str, RichTaskID] = {}

    def __enter__(self) -> RichSyncProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def phase_start(self, phase: str, total: int | None = None) -> None:
        self._rows[phase] = self._progress.add_task(_LABELS.get(phase, phase), total=total)

    def item_done(self, phase: str) -> None:
        if phase in self._rows:
            self._progress.advance(self._rows[phase])

    def phase_done(self, phase: str) -> None:
        row = self._rows.get(phase)
        if row is None:
            return
        total = self._progress.tasks[row].total
        if total is None:
            self._progress.update(row, total=1, completed=1)
        else:
            self._progress.update(row, completed=total)

    def phase_error(self, phase: str, error: BaseException) -> None:
        row = self._rows.get(phase)
        if row is None:
            return
        self._progress.update(row, description=f"[red]{phase} failed[/]")
        self._progress.stop_task(row)
