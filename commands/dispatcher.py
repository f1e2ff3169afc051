"""Execute catalog commands in command line order and report the results."""

from __future__ import annotations

import logging
from typing import Iterable

from client.models import ServerLocation
from commands.registry import Catalog
from commands.runtime import CommandRuntime, Executor, RuntimeConfig
from common.reporting import ConsoleReporter
from protocol.envelope import MetaMonOp
from protocol.error_codes import error_code_to_str


class CommandDispatcher:
    def __init__(
        self,
        catalog: Catalog,
        executor: Executor,
        reporter: ConsoleReporter,
        logger: logging.Logger | None = None,
    ) -> None:
        self._catalog = catalog
        self._reporter = reporter
        self._logger = logger or logging.getLogger("qfsadmin")
        self._runtime = CommandRuntime(executor, RuntimeConfig(logger=self._logger))

    async def run_all(self, location: ServerLocation, tokens: Iterable[str]) -> int:
        ret_code = 0
        for token in tokens:
            if not await self.run_one(location, token):
                ret_code = 1
        return ret_code

    async def run_one(self, location: ServerLocation, token: str) -> bool:
        """Execute one token; False only when a known command failed to execute."""
        entry = self._catalog.lookup(token)
        if entry is None:
            self._reporter.error(f"no such command: {token}")
            return True

        op = MetaMonOp(entry.op_code, entry.name)
        status = await self._runtime.run(location, op)
        if status < 0:
            self._logger.error("%s error: %s", op.status_msg, error_code_to_str(status))
            return False
        if op.content_length <= 0:
            self._reporter.line(f"{entry.normalized_name} OK")
        else:
            self._reporter.write(op.content[: op.content_length])
        return True
