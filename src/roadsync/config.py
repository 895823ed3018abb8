"""Config loading, scaffolding and environment detection."""

from __future__ import annotations

import json
import re
import subprocess
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from roadsync.contracts.config import RoadSyncConfig
from roadsync.contracts.exceptions import ConfigError, ProjectURLError
from roadsync.providers.github.mapper import parse_project_url

CONFIG_FILENAME = "roadsync.json"
_STORE_PATH_DEFAULT = "roadmap.json"
_MAX_CONCURRENT_DEFAULT = 4

_SSH_RE = re.compile(r"^git@[^:]+:(?P<owner>[^/]+)/[^/]+?(?:\.git)?$")
_HTTPS_RE = re.compile(r"^https?://[^/]+/(?P<owner>[^/]+)/[^/]+?(?:\.git)?/?$")


def _resolve_path(value: Path, *, base_dir: Path) -> Path:
    if value.is_absolute():
        return value
    return (base_dir / value).resolve()


def load_config(path: str | Path) -> RoadSyncConfig:
    """Load and validate config from JSON, resolving ``store_path`` against the config directory.

    Raises:
        ConfigError: If the file cannot be read, is not JSON, or fails validation.
    """
    config_path = Path(path).expanduser().resolve()
    config_dir = config_path.parent

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        parsed = RoadSyncConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    try:
        parse_project_url(parsed.board_url)
    except ProjectURLError as exc:
        raise ConfigError(str(exc)) from exc

    return parsed.model_copy(update={"store_path": _resolve_path(parsed.store_path, base_dir=config_dir)})


def detect_owner() -> str | None:
    """Owner of the ``origin`` remote of the current git checkout, if any."""
    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    if result.returncode != 0:
        return None

    url = result.stdout.strip()
    for pattern in (_SSH_RE, _HTTPS_RE):
        match = pattern.match(url)
        if match:
            return match.group("owner")
    return None


def default_board_url(owner: str | None) -> str:
    return f"https://github.com/orgs/{owner or 'OWNER'}/projects/1"


def scaffold_config(
    *,
    board_url: str,
    store_path: str = _STORE_PATH_DEFAULT,
    max_concurrent: int = _MAX_CONCURRENT_DEFAULT,
    status_field: str = "Status",
    include_defaults: bool = False,
) -> dict[str, Any]:
    """Build a config payload, omitting settings left at their defaults.

    Raises:
        ConfigError: If the resulting config would not load.
    """
    raw: dict[str, Any] = {"provider": "github", "board_url": board_url}
    if include_defaults or store_path != _STORE_PATH_DEFAULT:
        raw["store_path"] = store_path
    if include_defaults or max_concurrent != _MAX_CONCURRENT_DEFAULT:
        raw["max_concurrent"] = max_concurrent
    if include_defaults or status_field != "Status":
        raw["status_field"] = status_field

    try:
        parse_project_url(board_url)
    except ProjectURLError as exc:
        raise ConfigError(str(exc)) from exc
    try:
        RoadSyncConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc
    return raw


def write_config(config: dict[str, Any], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
