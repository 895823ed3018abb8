"""GitHub Projects board adapter."""

from roadsync.providers.github.board import GitHubProjectBoard
from roadsync.providers.github.gh_cli import GhCli
from roadsync.providers.github.mapper import parse_project_url

__all__ = ["GhCli", "GitHubProjectBoard", "parse_project_url"]
