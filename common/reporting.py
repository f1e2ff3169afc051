"""Shared console reporting: raw bytes to stdout, rich diagnostics to stderr."""

from __future__ import annotations

import sys
from typing import BinaryIO, TextIO

from rich.console import Console
from rich.markup import escape


def _stdout_binary() -> BinaryIO:
    return sys.stdout.buffer


class ConsoleReporter:
    def __init__(
        self,
        out: BinaryIO | None = None,
        err: TextIO | None = None,
        *,
        color: bool = True,
    ) -> None:
        self._out = out if out is not None else _stdout_binary()
        self._err = Console(
            file=err if err is not None else sys.stderr,
            color_system="auto" if color else None,
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )

    def line(self, message: str) -> None:
        self.write(f"{message}\n".encode("utf-8"))

    def write(self, payload: bytes) -> None:
        self._out.write(payload)
        self._out.flush()

    def error(self, message: str) -> None:
        self._err.print(f"[red]{escape(message)}[/red]")

    def note(self, message: str) -> None:
        self._err.print(escape(message))


def make_reporter(color: bool | None = None) -> ConsoleReporter:
    if color is None:
        color = sys.stderr.isatty()
    return ConsoleReporter(color=color)
