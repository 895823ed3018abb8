"""Async runner for the GitHub CLI."""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
import re
from typing import Any

from roadsync.contracts.exceptions import ProviderError, RemoteNotFoundError, RemoteUnavailableError

logger = logging.getLogger(__name__)

_NOT_FOUND_RE = re.compile(r"could not resolve to a node|not found|could not find", re.IGNORECASE)


class GhCli:
    """Run ``gh`` subcommands with a per-call timeout.

    Every failure is mapped onto the board error kinds: a missing binary, a
    non-zero exit (auth, network, rate limit) or a timeout is a
    :class:`RemoteUnavailableError`; a "not found" style error is a
    :class:`RemoteNotFoundError`.
    """

    def __init__(self, *, binary: str = "gh", timeout: float = 30.0) -> None:
        self._binary = binary
        self._timeout = timeout

    async def run(self, args: list[str]) -> str:
        command = " ".join([self._binary, *args[:3]])
        logger.debug("running %s", command)
        try:
            process = await asyncio.create_subprocess_exec(
                self._binary,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise RemoteUnavailableError(f"Failed to execute {self._binary}: {exc}") from exc

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self._timeout)
        except TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            raise RemoteUnavailableError(f"{command} timed out after {self._timeout:g}s") from None

        if process.returncode != 0:
            details = stderr.decode(errors="replace").strip()
            message = f"{command} failed"
            if details:
                message = f"{message}: {details}"
            if _NOT_FOUND_RE.search(details):
                raise RemoteNotFoundError(message)
            raise RemoteUnavailableError(message)

        return stdout.decode(errors="replace")

    async def run_json(self, args: list[str]) -> Any:
        output = await self.run(args)
        if output.strip() == "":
            return None
        try:
            return json.loads(output)
        except json.JSONDecodeError as exc:
            raise ProviderError(f"{self._binary} returned invalid JSON for {' '.join(args[:3])}") from exc
