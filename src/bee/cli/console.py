"""Rich console helpers for the CLI layer.

The resolution engine never prints; everything user-facing goes
through the console returned here so output can be redirected to any
text stream (tests pass an :class:`io.StringIO`).
"""

from __future__ import annotations

import sys
from typing import TextIO

from rich.console import Console
from rich.markup import escape

from bee.exceptions import BeeError


def get_console(file: TextIO | None = None) -> Console:
    """Create a Rich console writing to *file* (stderr by default)."""
    return Console(
        file=file if file is not None else sys.stderr,
        highlight=False,
        soft_wrap=True,
    )


def render_error(exc: BaseException, *, prefix: str, file: TextIO | None = None) -> None:
    """Print ``prefix: message`` and, for :class:`BeeError`, its hint."""
    console = get_console(file)
    console.print(f"[bold red]{escape(prefix)}:[/bold red] {escape(str(exc))}")
    hint = exc.hint if isinstance(exc, BeeError) else None
    if hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(hint)}")
