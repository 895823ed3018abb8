"""Factory for creating board clients from configuration.

Decouples board selection from board implementation; the SDK and CLI build
clients by provider name without importing concrete adapters.
"""

from __future__ import annotations

from collections.abc import Callable

from roadsync.contracts.board import RemoteBoardClient
from roadsync.contracts.config import RoadSyncConfig
from roadsync.providers.github import GhCli, GitHubProjectBoard


def _create_github(config: RoadSyncConfig) -> RemoteBoardClient:
    return GitHubProjectBoard(
        board_url=config.board_url,
        status_field=config.status_field,
        item_limit=config.item_limit,
        gh=GhCli(binary=config.gh_binary, timeout=config.timeout),
    )


_REGISTRY: dict[str, Callable[[RoadSyncConfig], RemoteBoardClient]] = {
    "github": _create_github,
}


def create_board_client(config: RoadSyncConfig) -> RemoteBoardClient:
    """Create the board client named by ``config.provider``.

    The returned client is an async context manager::

        async with create_board_client(config) as board:
            items = await board.list()

    Raises:
        ValueError: If the provider name is not registered.
    """
    factory = _REGISTRY.get(config.provider)
    if factory is None:
        available = ", ".join(sorted(_REGISTRY)) or "(none registered)"
        raise ValueError(f"Unknown provider: {config.provider!r}. Available: {available}")
    return factory(config)
