"""Meta server administrative operation codes shared by catalog, client, and tests."""

from __future__ import annotations

from enum import Enum

META_OP_PREFIX = "CMD_META_"


class MetaOpCode(int, Enum):
    CMD_META_CHECK_LEASES = 1
    CMD_META_RECOMPUTE_DIRSIZE = 2
    CMD_META_DUMP_CHUNKTOSERVERMAP = 3
    CMD_META_DUMP_CHUNKREPLICATIONCANDIDATES = 4
    CMD_META_OPEN_FILES = 5
    CMD_META_GET_CHUNK_SERVERS_COUNTERS = 6
    CMD_META_GET_CHUNK_SERVER_DIRS_COUNTERS = 7
    CMD_META_GET_REQUEST_COUNTERS = 8

    @property
    def verb(self) -> str:
        return self.name[len(META_OP_PREFIX):]


def op_code_for(name: str) -> MetaOpCode:
    try:
        return MetaOpCode[META_OP_PREFIX + name]
    except KeyError:
        raise ValueError(f"no operation code for command: {name}") from None
