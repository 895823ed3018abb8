"""Mapping functions between ``gh project`` JSON output and roadsync models."""

from __future__ import annotations

import re
from typing import Any

from roadsync.contracts.exceptions import ProjectURLError, ProviderError
from roadsync.contracts.remote import RemoteItem

_PROJECT_RE = re.compile(r"^https://github\.com/(orgs|users)/([^/]+)/projects/(\d+)/?$")


def parse_project_url(url: str) -> tuple[str, str, int]:
    """Parse a GitHub project URL into ``(owner_type, owner, number)``.

    Raises:
        ProjectURLError: If the URL format is invalid.
    """
    match = _PROJECT_RE.match(url.strip())
    if match is None:
        raise ProjectURLError(
            f"Unsupported project URL: {url!r}. "
            "Expected https://github.com/(orgs|users)/<owner>/projects/<number>"
        )
    owner_segment, owner, project_number_text = match.groups()
    owner_type = "org" if owner_segment == "orgs" else "user"
    return owner_type, owner, int(project_number_text)


def field_key(field_name: str) -> str:
    """Key under which ``gh project item-list`` reports a field's value."""
    return field_name[:1].lower() + field_name[1:]


def remote_item_from_payload(payload: dict[str, Any], status_field: str) -> RemoteItem:
    item_id = payload.get("id")
    if not isinstance(item_id, str) or not item_id:
        raise ProviderError("board item without an id in gh output")
    content = payload.get("content") or {}
    title = content.get("title") or payload.get("title") or ""
    column = payload.get(field_key(status_field), payload.get(status_field))
    return RemoteItem(
        id=item_id,
        title=title,
        body=content.get("body") or "",
        column=column or None,
        content_id=content.get("id"),
    )


def resolve_status_field(fields_payload: Any, status_field: str) -> tuple[str, dict[str, str]]:
    """Find the single-select *status_field* and return ``(field_id, {option name: option id})``.

    Raises:
        ProviderError: If the project has no such single-select field.
    """
    fields = fields_payload.get("fields", []) if isinstance(fields_payload, dict) else []
    for field in fields:
        if field.get("name", "").lower() != status_field.lower():
            continue
        options = field.get("options")
        if not isinstance(options, list):
            raise ProviderError(f"project field {status_field!r} is not a single-select field")
        return field["id"], {option["name"]: option["id"] for option in options}
    raise ProviderError(f"project has no {status_field!r} field")
