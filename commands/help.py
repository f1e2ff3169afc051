"""Catalog-driven help text."""

from __future__ import annotations

from commands.registry import Catalog
from commands.schemas import CommandEntry
from common.reporting import ConsoleReporter


def format_entry(entry: CommandEntry, width: int = 0) -> str:
    return f"{entry.normalized_name:>{width}} -- {entry.description}"


def render_help(catalog: Catalog) -> list[str]:
    width = catalog.max_name_len
    return [format_entry(entry, width) for entry in catalog]


def show_help(catalog: Catalog, reporter: ConsoleReporter, name: str | None = None) -> None:
    if name is None:
        for line in render_help(catalog):
            reporter.line(line)
        return

    entry = catalog.lookup(name)
    if entry is None:
        reporter.error(f"no such command: {name}")
        return
    reporter.line(format_entry(entry))
