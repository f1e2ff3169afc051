"""Schema for declarative command catalog entries."""

from __future__ import annotations

from dataclasses import dataclass

from commands.naming import normalize_name
from protocol.command_ids import MetaOpCode


@dataclass(frozen=True)
class CommandEntry:
    name: str
    op_code: MetaOpCode
    description: str

    @property
    def normalized_name(self) -> str:
        return normalize_name(self.name)
