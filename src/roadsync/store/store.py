"""Roadmap store: the local JSON file of roadmap items."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from roadsync.contracts.exceptions import ParseError, StoreWriteError
from roadsync.contracts.roadmap import Roadmap, RoadmapItem
from roadsync.store.validator import validate_items

logger = logging.getLogger(__name__)


def _summarize(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "(root)"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


class RoadmapStore:
    """Load, validate and atomically save a roadmap file.

    The store document looks like::

        {
          "project": "acme-app",
          "items": [
            {"title": "User Auth", "label": "auth", "description": "...",
             "kind": "feature", "layer": "backend", "priority": "P1",
             "status": "pending", "start_date": "2026-01-05"}
          ]
        }

    :meth:`save` is the only code path that writes the file. Two processes
    writing the same store concurrently is not supported.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def init(self, project: str) -> Roadmap:
        """Write an empty store for *project* and return it."""
        roadmap = Roadmap(project=project)
        self.save(roadmap)
        return roadmap

    def load(self) -> Roadmap:
        """Read and parse the store.

        Raises:
            ParseError: If the file is missing, is not valid JSON, or any record
                is malformed. The message names the offending record.
        """
        payload = self._read_json()
        if not isinstance(payload, dict):
            raise ParseError(f"roadmap root must be an object: {self._path}")

        project = payload.get("project")
        if not isinstance(project, str) or not project.strip():
            raise ParseError(f"roadmap must contain a non-empty 'project' string: {self._path}")

        raw_items = payload.get("items", [])
        if not isinstance(raw_items, list):
            raise ParseError(f"roadmap 'items' must be an array: {self._path}")

        items = [self._parse_item(index, raw) for index, raw in enumerate(raw_items, start=1)]
        try:
            roadmap = Roadmap.model_validate({**payload, "items": items})
        except ValidationError as exc:
            raise ParseError(f"roadmap {self._path} is malformed: {_summarize(exc)}") from exc
        logger.debug("loaded %d roadmap items from %s", len(items), self._path)
        return roadmap

    def validate(self, items: Sequence[RoadmapItem]) -> None:
        """Raise if *items* break a store invariant (see :func:`validate_items`)."""
        validate_items(items)

    def save(self, roadmap: Roadmap) -> None:
        """Validate *roadmap* and replace the store file atomically.

        The document is written to a temporary file next to the store and
        renamed over it, so an interrupted save leaves the previous file intact.

        Raises:
            RoadmapValidationError: If the items break a store invariant.
            StoreWriteError: If the file cannot be written.
        """
        self.validate(roadmap.items)
        text = json.dumps(roadmap.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"

        tmp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent)
            tmp_path = Path(tmp_name)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, self._path)
        except OSError as exc:
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            raise StoreWriteError(f"failed writing roadmap: {self._path}: {exc}") from exc
        logger.debug("saved %d roadmap items to %s", len(roadmap.items), self._path)

    def _read_json(self) -> Any:
        if not self._path.exists():
            raise ParseError(f"roadmap file not found: {self._path}")
        if not self._path.is_file():
            raise ParseError(f"roadmap path is not a file: {self._path}")
        try:
            return json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ParseError(f"failed reading roadmap file: {self._path}") from exc
        except json.JSONDecodeError as exc:
            raise ParseError(f"invalid JSON in roadmap file {self._path}: {exc}") from exc

    def _parse_item(self, index: int, raw: Any) -> RoadmapItem:
        if not isinstance(raw, dict):
            raise ParseError(f"item #{index} must be a JSON object: {self._path}")
        label = raw.get("label")
        name = f"item #{index} (label {label!r})" if isinstance(label, str) and label else f"item #{index}"
        try:
            return RoadmapItem.model_validate(raw)
        except ValidationError as exc:
            raise ParseError(f"{name} is malformed: {_summarize(exc)}") from exc
