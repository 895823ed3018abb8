"""In-memory board fake for engine and SDK tests."""

from __future__ import annotations

from roadsync.contracts.board import RemoteBoardClient
from roadsync.contracts.exceptions import RemoteNotFoundError, RemoteUnavailableError
from roadsync.contracts.remote import RemoteItem, RemoteItemUpdate


class FakeBoardClient(RemoteBoardClient):
    """In-memory board with deterministic ids and spy tracking.

    ``fail_titles`` makes ``create``/``update`` raise
    :class:`RemoteUnavailableError` for items with those titles;
    ``list_error`` makes ``list`` raise.
    """

    def __init__(self, items: list[RemoteItem] | None = None) -> None:
        self.items: dict[str, RemoteItem] = {item.id: item for item in items or []}
        self._next_number = 1

        self.fail_titles: set[str] = set()
        self.list_error: Exception | None = None
        self.entered = 0
        self.exited = 0

        self.list_calls = 0
        self.create_calls: list[tuple[str, str, str | None]] = []
        self.update_calls: list[tuple[str, RemoteItemUpdate]] = []

    async def __aenter__(self) -> FakeBoardClient:
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore[override]
        self.exited += 1
        return None

    async def list(self) -> list[RemoteItem]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.items.values())

    async def create(self, title: str, body: str, *, column: str | None = None) -> RemoteItem:
        self.create_calls.append((title, body, column))
        if title in self.fail_titles:
            raise RemoteUnavailableError(f"rate limited while creating {title!r}")
        item = RemoteItem(id=f"fake-id-{self._next_number}", title=title, body=body, column=column)
        self._next_number += 1
        self.items[item.id] = item
        return item

    async def update(self, item_id: str, fields: RemoteItemUpdate) -> None:
        self.update_calls.append((item_id, fields))
        item = self.items.get(item_id)
        if item is None:
            raise RemoteNotFoundError(f"Item not found: {item_id}")
        if item.title in self.fail_titles:
            raise RemoteUnavailableError(f"rate limited while updating {item.title!r}")
        self.items[item_id] = item.model_copy(update=fields.model_dump(exclude_none=True))

    def reset_calls(self) -> None:
        self.list_calls = 0
        self.create_calls.clear()
        self.update_calls.clear()
