"""What happens to an error once resolution has produced one.

The policy is orthogonal to resolution: it only decides whether an
already-computed error is returned, turned into a process exit, or
raised.
"""

from __future__ import annotations

import enum
import sys
from typing import TextIO

from bee.cli import exit_codes
from bee.cli.console import render_error
from bee.exceptions import BeeError, HelpRequestedError


class ErrorHandling(enum.Enum):
    """Error-handling modes for :class:`~bee.cli.command_line.CommandLine`."""

    CONTINUE = "continue"
    """Return the error to the caller; a help request counts as success."""

    EXIT = "exit"
    """Print the error and exit with :data:`exit_codes.USAGE_ERROR`."""

    RAISE = "raise"
    """Raise the error."""


def apply_policy(
    err: BeeError | None,
    policy: ErrorHandling,
    *,
    prog: str,
    output: TextIO,
    help_mode: bool = False,
) -> BeeError | None:
    """Apply *policy* to *err* and return what the caller should see.

    Under :attr:`ErrorHandling.EXIT` a help request (or any error while
    help was requested) exits with :data:`exit_codes.SUCCESS` without
    printing anything further; usage has already been written.
    """
    if err is None:
        return None

    if policy is ErrorHandling.CONTINUE:
        if isinstance(err, HelpRequestedError):
            return None
        return err

    if policy is ErrorHandling.EXIT:
        if help_mode or isinstance(err, HelpRequestedError):
            sys.exit(exit_codes.SUCCESS)
        render_error(err, prefix=prog, file=output)
        sys.exit(exit_codes.USAGE_ERROR)

    raise err
