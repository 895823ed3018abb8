"""Tests for RichSyncProgress and NullSyncProgress."""

from __future__ import annotations

import io

from rich.console import Console

from roadsync.engine.progress import NullSyncProgress, SyncProgress
from roadsync.progress import RichSyncProgress


def _console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


class TestNullSyncProgress:
    """NullSyncProgress is a no-op implementation."""

    def test_implements_protocol(self) -> None:
        assert issubclass(NullSyncProgress, SyncProgress)

    def test_phase_lifecycle_is_noop(self) -> None:
        progress = NullSyncProgress()
        progress.phase_start("Discover", total=5)
        progress.item_done("Discover")
        progress.phase_done("Discover")
        progress.phase_error("Discover", RuntimeError("boom"))


class TestRichSyncProgress:
    """RichSyncProgress drives Rich progress bars."""

    def test_context_manager(self) -> None:
        progress = RichSyncProgress(_console())
        with progress as p:
            assert p is progress

    def test_determinate_phase_completes(self) -> None:
        with RichSyncProgress(_console()) as progress:
            progress.phase_start("Push", total=3)
            progress.item_done("Push")
            progress.phase_done("Push")
            task = progress._progress.tasks[0]
            assert task.completed == 3

    def test_indeterminate_phase_completes(self) -> None:
        with RichSyncProgress(_console()) as progress:
            progress.phase_start("Discover")
            progress.phase_done("Discover")
            task = progress._progress.tasks[0]
            assert (task.total, task.completed) == (1, 1)

    def test_phase_error_marks_phase_failed(self) -> None:
        with RichSyncProgress(_console()) as progress:
            progress.phase_start("Discover")
            progress.phase_error("Discover", RuntimeError("offline"))
            task = progress._progress.tasks[0]
            assert "Discover failed" in task.description

    def test_unknown_phase_is_noop(self) -> None:
        with RichSyncProgress(_console()) as progress:
            progress.item_done("Unknown")
            progress.phase_done("Unknown")
            progress.phase_error("Unknown", RuntimeError("x"))
            assert progress._progress.tasks == []
