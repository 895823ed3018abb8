"""Remote board adapter contract.

Every concrete board (GitHub Projects via the ``gh`` CLI, in-memory fakes in
tests, ...) implements this interface so the push and pull engines never
depend on the backend's command surface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from roadsync.contracts.remote import RemoteItem, RemoteItemUpdate


class RemoteBoardClient(ABC):
    @abstractmethod
    async def __aenter__(self) -> RemoteBoardClient: ...

    @abstractmethod
    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...

    @abstractmethod
    async def list(self) -> list[RemoteItem]:
        """Return every item on the board, in board order.

        Raises:
            RemoteUnavailableError: If the board cannot be reached.
        """

    @abstractmethod
    async def create(self, title: str, body: str, *, column: str | None = None) -> RemoteItem:
        """Create a new board item and return it with its assigned id.

        Args:
            title: Item title.
            body: Item body text.
            column: Board column to place the new item in, if any.

        Raises:
            RemoteUnavailableError: If the call fails or times out.
        """

    @abstractmethod
    async def update(self, item_id: str, fields: RemoteItemUpdate) -> None:
        """Apply a partial update; fields left as ``None`` are untouched.

        Raises:
            RemoteUnavailableError: If the call fails or times out.
            RemoteNotFoundError: If *item_id* no longer exists.
        """
