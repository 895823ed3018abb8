"""Board-side item contracts."""

from __future__ import annotations

from pydantic import BaseModel


class RemoteItem(BaseModel):
    """An item as observed on the remote board.

    ``content_id`` is an adapter handle on the item's editable content (for
    GitHub, the draft issue id); the engines never read it.
    """

    id: str
    title: str
    body: str = ""
    column: str | None = None
    content_id: str | None = None

    model_config = {"frozen": True}


class RemoteItemUpdate(BaseModel):
    """Partial update; only fields that are not ``None`` are sent."""

    title: str | None = None
    body: str | None = None
    column: str | None = None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)
