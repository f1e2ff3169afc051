"""Meta server administration and monitoring client entrypoint."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import NoReturn, Sequence

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from client.command_client import MonClient  # noqa: E402
from client.models import ResultCode, ServerLocation  # noqa: E402
from commands.dispatcher import CommandDispatcher  # noqa: E402
from commands.help import render_help, show_help  # noqa: E402
from commands.loader import default_catalog  # noqa: E402
from commands.registry import Catalog  # noqa: E402
from common.reporting import ConsoleReporter, make_reporter  # noqa: E402

PROG = "qfsadmin"


class UsageError(Exception):
    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog=PROG, add_help=False, description="Meta server administration and monitoring client")
    parser.add_argument("-m", "-s", dest="server", default=None, help="meta server host name")
    parser.add_argument("-p", dest="port", type=int, default=-1, help="meta server port")
    parser.add_argument("-f", dest="config_file", default=None, help="client properties file")
    parser.add_argument("-v", dest="verbose", action="store_true", help="debug logging")
    parser.add_argument("-h", dest="help", action="store_true", help="show usage, or help for the listed commands")
    parser.add_argument("commands", nargs="*", help="commands to execute, in order")
    return parser


def usage_text(prog: str, catalog: Catalog) -> str:
    lines = [
        f"Usage: {prog}",
        " -m|-s <meta server host name>",
        " -p <port>",
        " -f <config file name>",
        " [-v]",
        " --  <cmd> <cmd> ...",
        "Where cmd is one of the following:",
        *render_help(catalog),
    ]
    return "\n".join(lines)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_intermixed_args(argv)


def init_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )


async def run_commands(
    client: MonClient,
    location: ServerLocation,
    commands: Sequence[str],
    catalog: Catalog,
    reporter: ConsoleReporter,
) -> int:
    dispatcher = CommandDispatcher(
        catalog,
        client.execute,
        reporter,
        logger=logging.getLogger(PROG),
    )
    try:
        return await dispatcher.run_all(location, commands)
    finally:
        await client.close()


def main(
    argv: Sequence[str] | None = None,
    *,
    reporter: ConsoleReporter | None = None,
    client: MonClient | None = None,
    catalog: Catalog | None = None,
) -> int:
    if reporter is None:
        reporter = make_reporter()
    if catalog is None:
        catalog = default_catalog()

    try:
        args = parse_args(argv)
    except UsageError as exc:
        reporter.error(f"{PROG}: {exc}")
        tokens = sys.argv[1:] if argv is None else argv
        if "-h" in tokens:
            reporter.line(usage_text(PROG, catalog))
        else:
            reporter.note(usage_text(PROG, catalog))
        return int(ResultCode.FAILED)

    if args.help:
        if args.commands:
            for name in args.commands:
                show_help(catalog, reporter, name)
        else:
            reporter.line(usage_text(PROG, catalog))
        return int(ResultCode.SUCCESS)

    if not args.server or args.port < 0:
        reporter.note(usage_text(PROG, catalog))
        return int(ResultCode.FAILED)

    init_logging(args.verbose)

    location = ServerLocation(args.server, args.port)
    if client is None:
        client = MonClient()
    if client.set_parameters(location, args.config_file) < 0:
        return int(ResultCode.FAILED)

    return asyncio.run(run_commands(client, location, args.commands, catalog, reporter))


def run() -> int:
    try:
        return main()
    except KeyboardInterrupt:
        print(f"\n[{PROG}] interrupted", file=sys.stderr)
        return int(ResultCode.FAILED)


if __name__ == "__main__":
    raise SystemExit(run())
