"""Reporting channels for info and warning messages emitted during a run."""

import logging
from typing import Awaitable, Callable, Protocol

MessageCallback = Callable[[str], Awaitable[None]]


class Reporter(Protocol):
    """Write-only info/warning sink."""

    async def info(self, message: str) -> None:
        ...

    async def warn(self, message: str) -> None:
        ...


class LoggingReporter:
    """Forward messages to the standard logging module."""

    def __init__(self, name: str = "catalog_ingest.run"):
        self._logger = logging.getLogger(name)

    async def info(self, message: str) -> None:
        self._logger.info(message)

    async def warn(self, message: str) -> None:
        self._logger.warning(message)


class CallbackReporter:
    """Adapt a pair of async callables (the job host's info/warn delegates)."""

    def __init__(self, info: MessageCallback, warn: MessageCallback):
        self._info = info
        self._warn = warn

    async def info(self, message: str) -> None:
        await self._info(message)

    async def warn(self, message: str) -> None:
        await self._warn(message)
