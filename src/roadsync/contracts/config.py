"""Configuration contracts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, model_validator


class RoadSyncConfig(BaseModel):
    """Settings read from ``roadsync.json``.

    Attributes:
        provider: Board provider name. Only ``"github"`` is built in.
        board_url: Full URL of the project board.
        store_path: Path of the local roadmap store.
        max_concurrent: Upper bound on concurrent board calls during push.
        timeout: Seconds allowed for a single board call.
        status_field: Name of the board's single-select status field.
        item_limit: Maximum number of board items fetched by ``list``.
        gh_binary: Executable used to reach the board.
    """

    provider: str = "github"
    board_url: str
    store_path: Path = Path("roadmap.json")
    max_concurrent: int = Field(default=4, ge=1, le=10)
    timeout: float = Field(default=30.0, gt=0)
    status_field: str = "Status"
    item_limit: int = Field(default=500, ge=1)
    gh_binary: str = "gh"

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_provider(self) -> RoadSyncConfig:
        if self.provider != "github":
            raise ValueError("provider must be 'github'")
        if not self.status_field.strip():
            raise ValueError("status_field must not be empty")
        return self
