"""Meta server request/response models and codec helpers."""

from __future__ import annotations

import errno
from dataclasses import dataclass

from protocol.command_ids import MetaOpCode

PROTOCOL_VERSION = "KFS/1.0"
CLIENT_PROTOCOL_VERSION = 114
HEADER_TERMINATOR = b"\r\n\r\n"

HDR_CSEQ = "cseq"
HDR_STATUS = "status"
HDR_STATUS_MESSAGE = "status-message"
HDR_CONTENT_LENGTH = "content-length"

CODE_BAD_HEADER = "BAD_HEADER"
CODE_MISSING_FIELD = "MISSING_FIELD"
CODE_CSEQ_MISMATCH = "CSEQ_MISMATCH"


@dataclass
class MetaMonOp:
    op_code: MetaOpCode
    name: str
    seq: int = -1
    status: int = 0
    status_msg: str = ""
    content: bytes = b""
    content_length: int = 0

    def reset(self) -> None:
        self.status = 0
        self.status_msg = ""
        self.content = b""
        self.content_length = 0

    def fail(self, status: int, message: str) -> int:
        self.status = status if status < 0 else -errno.EIO
        self.status_msg = message
        self.content = b""
        self.content_length = 0
        return self.status


@dataclass(frozen=True)
class ResponseHeader:
    seq: int
    status: int
    status_msg: str
    content_length: int


class ResponseParseError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def encode_request(op: MetaMonOp, seq: int, max_wait_ms: int | None = None) -> bytes:
    lines = [
        op.name,
        f"Cseq: {seq}",
        f"Version: {PROTOCOL_VERSION}",
        f"Client-Protocol-Version: {CLIENT_PROTOCOL_VERSION}",
    ]
    if max_wait_ms is not None and max_wait_ms > 0:
        lines.append(f"Max-wait-ms: {max_wait_ms}")
    return ("\r\n".join(lines) + "\r\n\r\n").encode("ascii")


def parse_response_header(raw: bytes | bytearray | memoryview | str, expected_seq: int | None = None) -> ResponseHeader:
    text = _decode_raw_text(raw)
    lines = text.replace("\r\n", "\n").split("\n")
    # First line is the reply status line, e.g. "OK".
    fields: dict[str, str] = {}
    for line in lines[1:]:
        if line.strip() == "":
            continue
        key, sep, value = line.partition(":")
        if not sep or key.strip() == "":
            raise ResponseParseError(CODE_BAD_HEADER, f"malformed header line: {line!r}")
        fields[key.strip().lower()] = value.strip()

    status = _int_field(fields, HDR_STATUS, required=True)
    seq = _int_field(fields, HDR_CSEQ, required=expected_seq is not None, default=-1)
    content_length = _int_field(fields, HDR_CONTENT_LENGTH, required=False, default=0)
    if content_length < 0:
        raise ResponseParseError(CODE_BAD_HEADER, f"invalid content length: {content_length}")
    if expected_seq is not None and seq != expected_seq:
        raise ResponseParseError(CODE_CSEQ_MISMATCH, f"sequence mismatch: expected {expected_seq}, got {seq}")

    return ResponseHeader(
        seq=seq,
        status=status,
        status_msg=fields.get(HDR_STATUS_MESSAGE, ""),
        content_length=content_length,
    )


def _int_field(fields: dict[str, str], key: str, *, required: bool, default: int = 0) -> int:
    value = fields.get(key)
    if value is None:
        if required:
            raise ResponseParseError(CODE_MISSING_FIELD, f"header `{key}` is required in response")
        return default
    try:
        return int(value)
    except ValueError:
        raise ResponseParseError(CODE_BAD_HEADER, f"header `{key}` must be integer, got {value!r}") from None


def _decode_raw_text(raw: bytes | bytearray | memoryview | str) -> str:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, memoryview):
        raw = raw.tobytes()
    return bytes(raw).decode("utf-8", errors="replace")
