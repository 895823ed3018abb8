"""Shared test fixtures for roadsync tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from roadsync.contracts.config import RoadSyncConfig
from roadsync.contracts.roadmap import RoadmapItem
from tests.fakes.roadmap import item_payload, make_item, write_roadmap


@pytest.fixture
def sample_item() -> RoadmapItem:
    """A minimal valid item."""
    return make_item()


@pytest.fixture
def roadmap_path(tmp_path: Path) -> Path:
    """A store file with two valid items."""
    return write_roadmap(
        tmp_path / "roadmap.json",
        [item_payload(), item_payload("billing", "Billing", status="in_progress", priority="P0")],
    )


@pytest.fixture
def sample_config(tmp_path: Path) -> RoadSyncConfig:
    """A minimal valid config pointing at ``tmp_path/roadmap.json``."""
    return RoadSyncConfig(
        board_url="https://github.com/orgs/acme/projects/7",
        store_path=tmp_path / "roadmap.json",
    )
