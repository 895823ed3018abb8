"""Board client implementations and factory."""

from roadsync.providers.factory import create_board_client

__all__ = ["create_board_client"]
