"""Status code decoding for meta server replies."""

from __future__ import annotations

import os

EBADVERS = 1000
ELEASEEXPIRED = 1001
EBADCKSUM = 1002
EDATAUNAVAIL = 1003
ESERVERBUSY = 1004
EALLOCFAILED = 1005
EBADCLUSTERKEY = 1006
EINVALCHUNKSIZE = 1007

_FS_ERRORS: dict[int, str] = {
    EBADVERS: "version mismatch",
    ELEASEEXPIRED: "lease has expired",
    EBADCKSUM: "checksum mismatch",
    EDATAUNAVAIL: "data not available",
    ESERVERBUSY: "server busy",
    EALLOCFAILED: "chunk allocation failed",
    EBADCLUSTERKEY: "bad cluster key",
    EINVALCHUNKSIZE: "invalid chunk size",
}


def error_code_to_str(code: int) -> str:
    if code == 0:
        return ""
    errno_value = -code if code < 0 else code
    text = _FS_ERRORS.get(errno_value)
    if text is not None:
        return text
    try:
        text = os.strerror(errno_value)
    except ValueError:
        text = ""
    return text or f"error {code}"
