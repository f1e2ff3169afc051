"""Declarative command catalog keyed by normalized command name."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from commands.naming import normalize_name
from commands.schemas import CommandEntry
from protocol.command_ids import op_code_for


class Catalog:
    def __init__(self) -> None:
        self._registry: dict[str, CommandEntry] = {}
        self._max_name_len = 0
        self._sealed = False

    @classmethod
    def from_entries(cls, entries: Iterable[CommandEntry]) -> Catalog:
        catalog = cls()
        for entry in entries:
            catalog.register(entry)
        catalog.seal()
        return catalog

    def register(self, entry: CommandEntry) -> None:
        if self._sealed:
            raise RuntimeError("catalog is read-only after construction")
        if op_code_for(entry.name) is not entry.op_code:
            raise ValueError(f"operation code {entry.op_code.name} does not match command: {entry.name}")
        key = entry.normalized_name
        existing = self._registry.get(key)
        if existing is not None:
            raise ValueError(f"duplicate command: {entry.name} (conflicts with {existing.name})")
        self._registry[key] = entry
        self._max_name_len = max(self._max_name_len, len(key))

    def seal(self) -> None:
        self._registry = dict(sorted(self._registry.items()))
        self._sealed = True

    def lookup(self, token: str) -> CommandEntry | None:
        return self._registry.get(normalize_name(token))

    @property
    def max_name_len(self) -> int:
        return self._max_name_len

    @property
    def entries(self) -> Mapping[str, CommandEntry]:
        return MappingProxyType(self._registry)

    def names(self) -> list[str]:
        return sorted(self._registry)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and self.lookup(token) is not None

    def __iter__(self) -> Iterator[CommandEntry]:
        for name in sorted(self._registry):
            yield self._registry[name]

    def __len__(self) -> int:
        return len(self._registry)
