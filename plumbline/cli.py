"""Command-line entry point for plumbline."""

from __future__ import annotations

import argparse
import enum
import json
import sys
from typing import Callable, NoReturn, TextIO

from plumbline import buildinfo
from plumbline.helptopics import get_topic, render_topic_index
from plumbline.schemas import get_schema, schema_names


class ExitCode(enum.IntEnum):
    """Process exit codes; part of the public CLI contract."""

    OK = 0
    GATE_FAILED = 1
    CANNOT_RUN = 2
    CONFIG_ERROR = 3
    INTERNAL_ERROR = 4


class CommandError(Exception):
    """An error carrying the exit code to report to the shell."""

    def __init__(self, code: ExitCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class _EarlyExit(Exception):
    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


class _Parser(argparse.ArgumentParser):
    """Argument parser that writes to a chosen stream and never exits."""

    def __init__(self, *args, stream: TextIO | None = None, **kwargs) -> None:
        kwargs.setdefault("formatter_class", argparse.RawDescriptionHelpFormatter)
        kwargs.setdefault("allow_abbrev", False)
        super().__init__(*args, **kwargs)
        self._optionals.title = "Flags"
        self._stream = stream if stream is not None else sys.stdout

    def print_help(self, file=None) -> None:
        (file or self._stream).write(self.format_help())

    def print_usage(self, file=None) -> None:
        (file or self._stream).write(self.format_usage())

    def error(self, message: str) -> NoReturn:
        raise CommandError(ExitCode.CONFIG_ERROR, message)

    def exit(self, status: int = 0, message: str | None = None) -> NoReturn:
        if message:
            raise CommandError(ExitCode(status) if status in ExitCode._value2member_map_ else ExitCode.CONFIG_ERROR, message.strip())
        raise _EarlyExit(status)


_ROOT_DESCRIPTION = """\
plumbline assesses a repository's AI Codebase Maturity Model (ACMM) level
by detecting feedback-loop artifacts on disk. It runs deterministic checks —
no LLM calls, no network — and reports which loops exist, which are missing,
and what to add to reach the next level.

Use the subcommands below for narrower operations (publish schemas, print
version information, read topical guides). Run 'plumbline help' for topical
guides."""

_HELP_DESCRIPTION = """\
plumbline help — long-form, prose help for cross-cutting topics.

Output is plain markdown so an LLM agent can ingest it directly. Each
topic has a stable URL fragment (e.g. 'plumbline help scoring#no-skip-rule')
that error messages can deep-link to.

Without an argument, prints the topic index. With a topic, prints that
topic's full text."""

_SCHEMA_DESCRIPTION = """\
plumbline schema — emit the JSON Schema for a named output type.

Schemas are draft-2020-12. Their $id includes the major version
(plumbline/v1/...). Backwards-incompatible changes bump the major and
ship a deprecation alias for one minor version.

Available names:
  verdict         top-level result of 'assess --json'
  signal-result   one signal's entry within a verdict (also 'inspect --json')
  event           NDJSON event line emitted by '--events ndjson'
  config          .plumbline.yml schema

Examples:
  plumbline schema verdict
  plumbline schema event > event.schema.json

See also:
  plumbline help compatibility   when schemas change between versions
  plumbline help agents          schema-fetching workflow for tool callers"""

_VERSION_DESCRIPTION = """\
Prints plumbline's build version and the signal-set version it ships.

The signal-set version is what CI gates pin via 'assess --signal-set vN'.
See 'plumbline help compatibility' for the policy.

Examples:
  plumbline version
  plumbline version --json"""


def _cmd_help(args: argparse.Namespace, stdout: TextIO) -> None:
    if args.topic is None:
        stdout.write(render_topic_index())
        return
    try:
        body = get_topic(args.topic)
    except KeyError as exc:
        raise CommandError(ExitCode.CANNOT_RUN, exc.args[0]) from None
    stdout.write(body + "\n")


def _cmd_schema(args: argparse.Namespace, stdout: TextIO) -> None:
    try:
        body = get_schema(args.name)
    except KeyError:
        raise CommandError(
            ExitCode.CANNOT_RUN,
            f"unknown schema {args.name!r} (available: {', '.join(schema_names())})",
        ) from None
    stdout.write(body)


def _cmd_version(args: argparse.Namespace, stdout: TextIO) -> None:
    info = buildinfo.describe()
    if args.json:
        stdout.write(json.dumps(info, indent=2) + "\n")
        return
    stdout.write(
        f"plumbline {info['version']} ({info['commit']})\n"
        f"signal-set: {info['signal_set_version']}\n"
        f"schema: {info['schema']}\n"
    )


def _build_parser(stdout: TextIO) -> _Parser:
    root = _Parser(prog="plumbline", description=_ROOT_DESCRIPTION, stream=stdout)
    subs = root.add_subparsers(
        title="Available Commands", dest="command", metavar="<command>"
    )

    help_cmd = subs.add_parser(
        "help",
        help="Long-form help on a topic, or the topic index when called bare",
        description=_HELP_DESCRIPTION,
        stream=stdout,
    )
    help_cmd.add_argument("topic", nargs="?", help="Topic name.")
    help_cmd.set_defaults(handler=_cmd_help)

    schema_cmd = subs.add_parser(
        "schema",
        help="Emit the JSON Schema for a public output type",
        description=_SCHEMA_DESCRIPTION,
        stream=stdout,
    )
    schema_cmd.add_argument("name", help="Schema name.")
    schema_cmd.set_defaults(handler=_cmd_schema)

    version_cmd = subs.add_parser(
        "version",
        help="Print build version, commit, and signal-set version",
        description=_VERSION_DESCRIPTION,
        stream=stdout,
    )
    version_cmd.add_argument("--json", action="store_true", help="Emit JSON to stdout.")
    version_cmd.set_defaults(handler=_cmd_version)
    return root


def run(
    argv: list[str] | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Execute the CLI with the given arguments and return the exit code."""
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr
    args_list = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser(stdout)
    try:
        args = parser.parse_args(args_list)
        handler: Callable[[argparse.Namespace, TextIO], None] | None = getattr(
            args, "handler", None
        )
        if handler is None:
            parser.print_help()
            return ExitCode.OK
        handler(args, stdout)
    except _EarlyExit as exc:
        return exc.status
    except CommandError as exc:
        stderr.write(f"error: {exc.message}\n")
        return int(exc.code)
    return ExitCode.OK


def main(argv: list[str] | None = None) -> NoReturn:
    """Run the CLI and exit the process with its exit code."""
    sys.exit(run(argv, sys.stdout, sys.stderr))