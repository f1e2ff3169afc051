"""Meta server monitor client: one TCP session, one request at a time."""

from __future__ import annotations

import asyncio
import contextlib
import errno
import logging
import random

from client.models import ServerLocation
from config.defaults import MAX_RESPONSE_HEADER_BYTES
from config.properties import ClientConfig, ConfigError, load_client_config
from protocol.envelope import HEADER_TERMINATOR, MetaMonOp, ResponseParseError, encode_request, parse_response_header


class ContentTooLargeError(Exception):
    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"response content length {length} exceeds limit {limit}")
        self.length = length
        self.limit = limit


class MonClient:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("qfsadmin.client")
        self._config = ClientConfig()
        self._max_content_length = self._config.max_content_length
        self._location: ServerLocation | None = None
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None
        self._connected_to: ServerLocation | None = None
        self._seq = random.randrange(1, 1 << 30)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def max_content_length(self) -> int:
        return self._max_content_length

    def set_parameters(self, location: ServerLocation, config_path: str | None = None) -> int:
        if not location.is_valid():
            self._logger.error("invalid meta server location: %s", location)
            return -errno.EINVAL
        try:
            config = load_client_config(config_path)
        except ConfigError as exc:
            self._logger.error("%s", exc)
            return -errno.EINVAL
        self._location = location
        self._config = config
        self._max_content_length = config.max_content_length
        return 0

    def set_max_content_length(self, length: int) -> None:
        self._max_content_length = length

    async def execute(self, location: ServerLocation, op: MetaMonOp) -> int:
        op.reset()
        op.seq = self._next_seq()
        try:
            await asyncio.wait_for(self._exchange(location, op), timeout=self._config.op_timeout)
        except asyncio.TimeoutError:
            await self._drop()
            return op.fail(-errno.ETIMEDOUT, f"{op.name}: {location}: operation timed out")
        except asyncio.IncompleteReadError:
            await self._drop()
            return op.fail(-errno.ECONNRESET, f"{op.name}: {location}: connection closed by peer")
        except asyncio.LimitOverrunError:
            await self._drop()
            return op.fail(-errno.EINVAL, f"{op.name}: {location}: response header too long")
        except ResponseParseError as exc:
            await self._drop()
            return op.fail(-errno.EINVAL, f"{op.name}: {location}: invalid response: {exc.message}")
        except ContentTooLargeError as exc:
            await self._drop()
            return op.fail(-errno.EMSGSIZE, f"{op.name}: {location}: {exc}")
        except OSError as exc:
            await self._drop()
            return op.fail(-(exc.errno or errno.EIO), f"{op.name}: {location}: {exc.strerror or exc}")
        return op.status

    async def close(self) -> None:
        await self._drop()

    async def _exchange(self, location: ServerLocation, op: MetaMonOp) -> None:
        reader, writer = await self._connect(location)
        max_wait_ms = int(self._config.op_timeout * 1000)
        request = encode_request(op, op.seq, max_wait_ms)
        self._logger.debug("-> %s seq=%d", op.name, op.seq)
        writer.write(request)
        await writer.drain()

        raw_header = await reader.readuntil(HEADER_TERMINATOR)
        header = parse_response_header(raw_header, expected_seq=op.seq)
        self._logger.debug("<- %s seq=%d status=%d length=%d", op.name, header.seq, header.status, header.content_length)
        if header.content_length > self._max_content_length:
            raise ContentTooLargeError(header.content_length, self._max_content_length)

        content = b""
        if header.content_length > 0:
            content = await reader.readexactly(header.content_length)

        op.status = header.status
        if header.status < 0:
            op.status_msg = header.status_msg or op.name
            return
        op.status_msg = header.status_msg
        op.content = content
        op.content_length = len(content)

    async def _connect(self, location: ServerLocation) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        if (
            self._reader is not None
            and self._writer is not None
            and self._connected_to == location
            and not self._writer.is_closing()
        ):
            return self._reader, self._writer

        await self._drop()
        self._logger.debug("connecting to %s", location)
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(location.host, location.port, limit=MAX_RESPONSE_HEADER_BYTES),
            timeout=self._config.connect_timeout,
        )
        self._reader, self._writer, self._connected_to = reader, writer, location
        return reader, writer

    async def _drop(self) -> None:
        writer = self._writer
        self._reader = self._writer = self._connected_to = None
        if writer is None:
            return
        writer.close()
        with contextlib.suppress(OSError):
            await writer.wait_closed()

    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq
