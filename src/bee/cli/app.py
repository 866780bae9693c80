"""CLI application entry point for the ``bee`` tool.

``bee describe MODULE:CLASS --name CMD`` prints, for every terminal
field of a configuration dataclass, the flag and environment variable
that set it together with its declared default.

This module is the error boundary of the tool: it catches
:class:`~bee.exceptions.BeeError`, ``KeyboardInterrupt`` and any
unexpected ``Exception`` and turns them into exit codes.
"""

from __future__ import annotations

import argparse
import importlib
import sys

from rich.markup import escape
from rich.table import Table

from bee.cli import exit_codes
from bee.cli.console import get_console, render_error
from bee.core.coercion import kind_for
from bee.core.models import NO_DEFAULT, FieldDescriptor
from bee.core.walker import describe_fields
from bee.exceptions import BeeError, ConfigImportError
from bee.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bee",
        description="Inspect how bee resolves a configuration dataclass.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    commands = parser.add_subparsers(dest="command")

    describe = commands.add_parser(
        "describe",
        help="list flags, environment variables and defaults",
    )
    describe.add_argument("target", help="dataclass to describe, as MODULE:CLASS")
    describe.add_argument(
        "-n",
        "--name",
        default=None,
        help="command identity used for env names (default: module name)",
    )
    return parser


# ---------------------------------------------------------------------------
# describe
# ---------------------------------------------------------------------------

def load_target(target: str) -> type:
    """Import ``MODULE:CLASS`` and return the class."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigImportError(
            f"Invalid target: {target}",
            hint="Use the form package.module:ClassName",
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigImportError(f"Cannot import {module_name}: {exc}") from exc

    obj: object = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ConfigImportError(f"{module_name} has no attribute {attr}") from exc
    if not isinstance(obj, type):
        raise ConfigImportError(f"{target} is not a class")
    return obj


def _default_display(descriptor: FieldDescriptor) -> str:
    if descriptor.default_value is not NO_DEFAULT:
        kind = kind_for(descriptor.hint)
        return kind.format(descriptor.default_value) if kind else repr(descriptor.default_value)
    return descriptor.default_text


def _handle_describe(target: str, name: str | None) -> int:
    record_type = load_target(target)
    command = name or target.partition(":")[0].rsplit(".", 1)[-1]
    descriptors = describe_fields(record_type, command)

    table = Table(
        title=f"{command} configuration",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Field", style="bold")
    table.add_column("Flag")
    table.add_column("Env")
    table.add_column("Kind", justify="center")
    table.add_column("Default")

    unsupported = 0
    for descriptor in descriptors:
        kind = kind_for(descriptor.hint)
        if kind is None:
            unsupported += 1
            kind_label = "[red]unsupported[/red]"
        else:
            kind_label = kind.name
        table.add_row(
            escape(descriptor.path),
            escape(f"-{descriptor.flag}"),
            escape(descriptor.env),
            kind_label,
            escape(_default_display(descriptor)),
        )

    console = get_console(sys.stdout)
    console.print(table)

    if unsupported:
        get_console().print(
            f"[bold red]{unsupported} field(s) have unsupported types.[/bold red]"
        )
        return exit_codes.GENERAL_ERROR
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the bee CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    return _handle_describe(args.target, args.name)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except BeeError as exc:
        render_error(exc, prefix="Error")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        get_console().print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        get_console().print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {escape(type(exc).__name__)}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.GENERAL_ERROR)
