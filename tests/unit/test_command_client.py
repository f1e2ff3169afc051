from __future__ import annotations

import asyncio
import errno
import re
import tempfile
import unittest
from pathlib import Path

from client.command_client import MonClient
from client.models import ServerLocation
from protocol.command_ids import MetaOpCode
from protocol.envelope import MetaMonOp

_CSEQ_RE = re.compile(rb"Cseq: (\d+)")


class FakeMetaServer:
    def __init__(self) -> None:
        self.replies: dict[bytes, tuple[int, str, bytes]] = {}
        self.requests: list[bytes] = []
        self.connections = 0
        self.garbage = False
        self.bad_cseq = False
        self._server: asyncio.AbstractServer | None = None

    async def start(self) -> ServerLocation:
        self._server = await asyncio.start_server(self._handle, "127.0.0.1", 0)
        port = self._server.sockets[0].getsockname()[1]
        return ServerLocation("127.0.0.1", port)

    async def stop(self) -> None:
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()

    async def _handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        self.connections += 1
        try:
            while True:
                try:
                    request = await reader.readuntil(b"\r\n\r\n")
                except asyncio.IncompleteReadError:
                    return
                self.requests.append(request)
                verb = request.split(b"\r\n", 1)[0]
                match = _CSEQ_RE.search(request)
                seq = int(match.group(1)) if match else -1
                if self.bad_cseq:
                    seq += 1
                if self.garbage:
                    writer.write(b"OK\r\nthis is not a header\r\n\r\n")
                    await writer.drain()
                    continue
                status, message, content = self.replies.get(verb, (0, "", b""))
                header = f"OK\r\nCseq: {seq}\r\nStatus: {status}\r\n"
                if message:
                    header += f"Status-message: {message}\r\n"
                if content:
                    header += f"Content-length: {len(content)}\r\n"
                writer.write(header.encode("ascii") + b"\r\n" + content)
                await writer.drain()
        finally:
            writer.close()


class MonClientTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.server = FakeMetaServer()
        self.location = await self.server.start()
        self.client = MonClient()
        self.assertEqual(self.client.set_parameters(self.location), 0)

    async def asyncTearDown(self) -> None:
        await self.client.close()
        await self.server.stop()

    def _op(self, code: MetaOpCode) -> MetaMonOp:
        return MetaMonOp(code, code.verb)

    async def test_success_without_content(self) -> None:
        op = self._op(MetaOpCode.CMD_META_CHECK_LEASES)
        status = await self.client.execute(self.location, op)
        self.assertEqual(status, 0)
        self.assertEqual(op.content_length, 0)
        self.assertTrue(self.server.requests[0].startswith(b"CHECK_LEASES\r\nCseq: "))

    async def test_success_with_content(self) -> None:
        self.server.replies[b"OPEN_FILES"] = (0, "", b"file 1\nfile 2\n")
        op = self._op(MetaOpCode.CMD_META_OPEN_FILES)
        status = await self.client.execute(self.location, op)
        self.assertEqual(status, 0)
        self.assertEqual(op.content, b"file 1\nfile 2\n")
        self.assertEqual(op.content_length, 14)

    async def test_server_error_status(self) -> None:
        self.server.replies[b"RECOMPUTE_DIRSIZE"] = (-errno.EPERM, "not allowed", b"")
        op = self._op(MetaOpCode.CMD_META_RECOMPUTE_DIRSIZE)
        status = await self.client.execute(self.location, op)
        self.assertEqual(status, -errno.EPERM)
        self.assertEqual(op.status_msg, "not allowed")

    async def test_session_is_reused(self) -> None:
        for code in (MetaOpCode.CMD_META_CHECK_LEASES, MetaOpCode.CMD_META_OPEN_FILES):
            self.assertEqual(await self.client.execute(self.location, self._op(code)), 0)
        self.assertEqual(self.server.connections, 1)
        seqs = [int(_CSEQ_RE.search(req).group(1)) for req in self.server.requests]  # type: ignore[union-attr]
        self.assertEqual(seqs[1], seqs[0] + 1)

    async def test_content_over_limit(self) -> None:
        self.server.replies[b"GET_REQUEST_COUNTERS"] = (0, "", b"x" * 64)
        self.client.set_max_content_length(16)
        op = self._op(MetaOpCode.CMD_META_GET_REQUEST_COUNTERS)
        status = await self.client.execute(self.location, op)
        self.assertEqual(status, -errno.EMSGSIZE)
        self.assertIn("exceeds limit", op.status_msg)

    async def test_malformed_response(self) -> None:
        self.server.garbage = True
        op = self._op(MetaOpCode.CMD_META_CHECK_LEASES)
        status = await self.client.execute(self.location, op)
        self.assertEqual(status, -errno.EINVAL)
        self.assertIn("invalid response", op.status_msg)

    async def test_sequence_mismatch(self) -> None:
        self.server.bad_cseq = True
        op = self._op(MetaOpCode.CMD_META_CHECK_LEASES)
        self.assertEqual(await self.client.execute(self.location, op), -errno.EINVAL)

    async def test_connection_refused(self) -> None:
        await self.server.stop()
        op = self._op(MetaOpCode.CMD_META_CHECK_LEASES)
        status = await self.client.execute(self.location, op)
        self.assertLess(status, 0)
        self.assertTrue(op.status_msg.startswith("CHECK_LEASES: 127.0.0.1"))


class MonClientParameterTests(unittest.TestCase):
    def test_invalid_location(self) -> None:
        client = MonClient()
        self.assertEqual(client.set_parameters(ServerLocation("", 20000)), -errno.EINVAL)
        self.assertEqual(client.set_parameters(ServerLocation("meta", 0)), -errno.EINVAL)

    def test_config_file_applied(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "client.prp"
            path.write_text("client.maxContentLength = 1024\nclient.opTimeout = 3\n", encoding="utf-8")
            client = MonClient()
            self.assertEqual(client.set_parameters(ServerLocation("meta", 20000), str(path)), 0)
        self.assertEqual(client.max_content_length, 1024)
        self.assertEqual(client.config.op_timeout, 3.0)

    def test_bad_config_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "client.prp"
            path.write_text("client.opTimeout = never\n", encoding="utf-8")
            client = MonClient()
            with self.assertLogs("qfsadmin.client", level="ERROR"):
                self.assertEqual(client.set_parameters(ServerLocation("meta", 20000), str(path)), -errno.EINVAL)


if __name__ == "__main__":
    unittest.main()
