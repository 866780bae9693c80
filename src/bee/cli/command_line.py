"""Command-line surface: resolve a dataclass from argv, env and defaults.

One :meth:`CommandLine.parse` call runs three steps:

1. scan argv for a help token (environment values are then ignored so
   usage text shows declared defaults);
2. walk the record, storing each field's effective default and
   registering its flag;
3. parse argv with the flag registry, letting command-line values
   override.

Whatever error comes out is handed to the configured
:class:`~bee.cli.policy.ErrorHandling`.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from typing import TextIO

from bee.cli.policy import ErrorHandling, apply_policy
from bee.core.protocols import EnvLookup
from bee.core.resolver import ResolveContext
from bee.core.walker import walk
from bee.exceptions import BeeError
from bee.infra.flagset import HELP_TOKENS, FlagSet


def scan_help(argv: Sequence[str]) -> bool:
    """Whether *argv* literally contains one of the help tokens."""
    return any(arg in HELP_TOKENS for arg in argv)


class CommandLine:
    """Resolves configuration records for one command.

    Parameters
    ----------
    name:
        Command identity; the first segment of every derived environment
        variable name.
    output:
        Stream for usage text and diagnostics.  Defaults to stderr.
    lookup_env:
        Environment lookup returning ``None`` for unset variables.
        Defaults to :func:`os.environ.get`.
    error_handling:
        What to do with a resolution error.
    parent_command:
        When given, usage text reads ``<parent> <name>``.
    """

    def __init__(
        self,
        name: str,
        *,
        output: TextIO | None = None,
        lookup_env: EnvLookup | None = None,
        error_handling: ErrorHandling = ErrorHandling.EXIT,
        parent_command: str | None = None,
    ) -> None:
        self.name: str = name
        self.output: TextIO = output if output is not None else sys.stderr
        self.lookup_env: EnvLookup = lookup_env if lookup_env is not None else os.environ.get
        self.error_handling: ErrorHandling = error_handling
        self.parent_command: str | None = parent_command
        self.help_mode: bool = False
        self.args: list[str] = []
        """Non-flag arguments left over by the last :meth:`parse`."""

    @property
    def prog(self) -> str:
        if self.parent_command:
            return f"{self.parent_command} {self.name}"
        return self.name

    def parse(self, config: object, argv: Sequence[str] | None = None) -> BeeError | None:
        """Resolve *config* in place.

        Parameters
        ----------
        config:
            A dataclass instance.
        argv:
            Arguments without the program name.  ``None`` means
            ``sys.argv[1:]``.

        Returns
        -------
        BeeError | None
            The error under :attr:`ErrorHandling.CONTINUE`, else ``None``.
        """
        args = list(sys.argv[1:] if argv is None else argv)
        self.help_mode = scan_help(args)

        flagset = FlagSet(self.prog, output=self.output)
        context = ResolveContext(
            command=self.name,
            registry=flagset,
            lookup_env=self.lookup_env,
            help_mode=self.help_mode,
        )

        try:
            walk(config, context)
            flagset.parse(args)
        except BeeError as exc:
            return apply_policy(
                exc,
                self.error_handling,
                prog=self.prog,
                output=self.output,
                help_mode=self.help_mode,
            )

        self.args = flagset.args
        return None


def parse(
    config: object,
    name: str,
    argv: Sequence[str] | None = None,
    **options: object,
) -> BeeError | None:
    """Shortcut for ``CommandLine(name, **options).parse(config, argv)``."""
    return CommandLine(name, **options).parse(config, argv)  # type: ignore[arg-type]
