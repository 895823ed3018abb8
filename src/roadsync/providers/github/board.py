"""GitHub Projects board adapter built on the ``gh project`` commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import TracebackType

from roadsync.contracts.board import RemoteBoardClient
from roadsync.contracts.exceptions import ProviderError, RemoteNotFoundError
from roadsync.contracts.remote import RemoteItem, RemoteItemUpdate
from roadsync.providers.github.gh_cli import GhCli
from roadsync.providers.github.mapper import parse_project_url, remote_item_from_payload, resolve_status_field

logger = logging.getLogger(__name__)

_DRAFT_ISSUE = "DraftIssue"
_ISSUE = "Issue"


@dataclass(frozen=True)
class _Content:
    kind: str
    ref: str | None


class GitHubProjectBoard(RemoteBoardClient):
    """Board adapter for a GitHub Projects (v2) board.

    New items are created as draft issues. Item bodies are edited through the
    draft issue (``gh project item-edit --id <draft id>``) or, for items backed
    by a real issue, through ``gh issue edit``. The column is the board's
    single-select status field.

    Args:
        board_url: ``https://github.com/(orgs|users)/<owner>/projects/<number>``.
        status_field: Name of the status field on the board.
        item_limit: Maximum number of items fetched by :meth:`list`.
        gh: CLI runner; a default :class:`GhCli` is used when omitted.
    """

    def __init__(
        self,
        *,
        board_url: str,
        status_field: str = "Status",
        item_limit: int = 500,
        gh: GhCli | None = None,
    ) -> None:
        _, self._owner, self._number = parse_project_url(board_url)
        self._status_field = status_field
        self._item_limit = item_limit
        self._gh = gh or GhCli()
        self._project_id: str | None = None
        self._status_field_id: str | None = None
        self._status_options: dict[str, str] = {}
        self._contents: dict[str, _Content] = {}

    async def __aenter__(self) -> GitHubProjectBoard:
        project = await self._gh.run_json(self._project_args("view"))
        if not isinstance(project, dict) or not project.get("id"):
            raise ProviderError(f"gh project view returned no id for project {self._owner}/{self._number}")
        self._project_id = project["id"]

        fields = await self._gh.run_json([*self._project_args("field-list"), "--limit", "100"])
        self._status_field_id, self._status_options = resolve_status_field(fields, self._status_field)
        logger.debug(
            "project %s: status field %s with options %s",
            self._project_id,
            self._status_field_id,
            sorted(self._status_options),
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        return None

    async def list(self) -> list[RemoteItem]:
        payload = await self._gh.run_json([*self._project_args("item-list"), "--limit", str(self._item_limit)])
        raw_items = payload.get("items", []) if isinstance(payload, dict) else []

        items: list[RemoteItem] = []
        for raw in raw_items:
            item = remote_item_from_payload(raw, self._status_field)
            content = raw.get("content") or {}
            kind = content.get("type", _DRAFT_ISSUE)
            ref = content.get("id") if kind == _DRAFT_ISSUE else content.get("url")
            self._contents[item.id] = _Content(kind=kind, ref=ref)
            items.append(item)

        if len(items) >= self._item_limit:
            logger.warning("board listing reached item_limit=%d; items beyond it are invisible", self._item_limit)
        return items

    async def create(self, title: str, body: str, *, column: str | None = None) -> RemoteItem:
        payload = await self._gh.run_json(
            [
                "project",
                "item-create",
                str(self._number),
                "--owner",
                self._owner,
                "--title",
                title,
                "--body",
                body,
                "--format",
                "json",
            ]
        )
        item_id = payload.get("id") if isinstance(payload, dict) else None
        if not item_id:
            raise ProviderError(f"gh project item-create returned no id for {title!r}")
        self._contents[item_id] = _Content(kind=_DRAFT_ISSUE, ref=None)

        if column is not None:
            await self._set_column(item_id, column)
        return RemoteItem(id=item_id, title=title, body=body, column=column)

    async def update(self, item_id: str, fields: RemoteItemUpdate) -> None:
        if fields.title is not None or fields.body is not None:
            await self._edit_content(item_id, fields)
        if fields.column is not None:
            await self._set_column(item_id, fields.column)

    async def _edit_content(self, item_id: str, fields: RemoteItemUpdate) -> None:
        content = self._contents.get(item_id)
        if content is None:
            raise RemoteNotFoundError(f"board item {item_id} is not on the board")

        text_args: list[str] = []
        if fields.title is not None:
            text_args += ["--title", fields.title]
        if fields.body is not None:
            text_args += ["--body", fields.body]

        if content.kind == _DRAFT_ISSUE and content.ref:
            await self._gh.run(["project", "item-edit", "--id", content.ref, *text_args])
        elif content.kind == _ISSUE and content.ref:
            await self._gh.run(["issue", "edit", content.ref, *text_args])
        else:
            raise ProviderError(f"cannot edit {content.kind} content of board item {item_id}")

    async def _set_column(self, item_id: str, column: str) -> None:
        option_id = self._status_options.get(column)
        if option_id is None or self._project_id is None or self._status_field_id is None:
            raise ProviderError(f"board field {self._status_field!r} has no option named {column!r}")
        await self._gh.run(
            [
                "project",
                "item-edit",
                "--id",
                item_id,
                "--project-id",
                self._project_id,
                "--field-id",
                self._status_field_id,
                "--single-select-option-id",
                option_id,
            ]
        )

    def _project_args(self, subcommand: str) -> list[str]:
        return ["project", subcommand, str(self._number), "--owner", self._owner, "--format", "json"]
