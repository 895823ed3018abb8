"""Translation between local statuses and board columns."""

from __future__ import annotations

from roadsync.contracts.exceptions import UnknownColumnError
from roadsync.contracts.roadmap import ItemStatus

_TO_REMOTE: dict[ItemStatus, str] = {
    ItemStatus.PENDING: "Todo",
    ItemStatus.IN_PROGRESS: "In Progress",
    ItemStatus.DONE: "Done",
}
_TO_LOCAL: dict[str, ItemStatus] = {column: status for status, column in _TO_REMOTE.items()}


class StatusMapper:
    """Fixed, bijective status table. Column names are matched exactly."""

    def to_remote(self, status: ItemStatus) -> str:
        return _TO_REMOTE[ItemStatus(status)]

    def to_local(self, column: str) -> ItemStatus:
        """Return the local status for *column*.

        Raises:
            UnknownColumnError: If *column* is not in the table.
        """
        try:
            return _TO_LOCAL[column]
        except KeyError:
            raise UnknownColumnError(column) from None

    @property
    def columns(self) -> list[str]:
        return list(_TO_REMOTE.values())
