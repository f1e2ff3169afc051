"""Unified execution runtime for catalog commands."""

from __future__ import annotations

import errno
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from client.models import ServerLocation
from protocol.envelope import MetaMonOp

Executor = Callable[[ServerLocation, MetaMonOp], Awaitable[int]]


@dataclass(frozen=True)
class RuntimeConfig:
    logger: logging.Logger


class CommandRuntime:
    def __init__(self, executor: Executor, config: RuntimeConfig) -> None:
        self._executor = executor
        self._config = config

    async def run(self, location: ServerLocation, op: MetaMonOp) -> int:
        op.reset()
        try:
            status = await self._executor(location, op)
        except Exception as exc:  # noqa: BLE001
            self._config.logger.debug("%s execution error", op.name, exc_info=True)
            return op.fail(-errno.EIO, f"{op.name}: {type(exc).__name__}: {exc}")
        if status < 0 and op.status >= 0:
            op.status = status
        return status
