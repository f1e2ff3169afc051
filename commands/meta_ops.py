"""Meta server administrative commands known to the client."""

from __future__ import annotations

from commands.schemas import CommandEntry
from protocol.command_ids import MetaOpCode

META_ADMIN_COMMANDS: tuple[CommandEntry, ...] = (
    CommandEntry(
        name="CHECK_LEASES",
        op_code=MetaOpCode.CMD_META_CHECK_LEASES,
        description="debug: run chunk leases check",
    ),
    CommandEntry(
        name="RECOMPUTE_DIRSIZE",
        op_code=MetaOpCode.CMD_META_RECOMPUTE_DIRSIZE,
        description="debug: recompute directories sizes",
    ),
    CommandEntry(
        name="DUMP_CHUNKTOSERVERMAP",
        op_code=MetaOpCode.CMD_META_DUMP_CHUNKTOSERVERMAP,
        description=(
            "create chunk server to chunk id map file used by the off line"
            " re-balance utility and layout emulator"
        ),
    ),
    CommandEntry(
        name="DUMP_CHUNKREPLICATIONCANDIDATES",
        op_code=MetaOpCode.CMD_META_DUMP_CHUNKREPLICATIONCANDIDATES,
        description="debug: list content of the chunks re-replication and recovery queues",
    ),
    CommandEntry(
        name="OPEN_FILES",
        op_code=MetaOpCode.CMD_META_OPEN_FILES,
        description="debug: list all chunk leases",
    ),
    CommandEntry(
        name="GET_CHUNK_SERVERS_COUNTERS",
        op_code=MetaOpCode.CMD_META_GET_CHUNK_SERVERS_COUNTERS,
        description="stats: output chunk server counters",
    ),
    CommandEntry(
        name="GET_CHUNK_SERVER_DIRS_COUNTERS",
        op_code=MetaOpCode.CMD_META_GET_CHUNK_SERVER_DIRS_COUNTERS,
        description="stats: output chunk directories counters",
    ),
    CommandEntry(
        name="GET_REQUEST_COUNTERS",
        op_code=MetaOpCode.CMD_META_GET_REQUEST_COUNTERS,
        description="stats: get meta server request counters",
    ),
)
