"""Infrastructure: the flag registry, backed by :mod:`argparse`.

Accepted command-line syntax mirrors the classic single-dash flag
style while still taking GNU-style double dashes:

* ``-port=9090``, ``-port 9090``, ``--port=9090``, ``--port 9090``
* bare switches for booleans: ``-tls`` (``-tls=false`` to turn off); a
  bare switch never takes the following argument as its value
* a non-switch flag always takes the following argument, even one that
  starts with a dash: ``-timeout -10s``
* ``--`` ends flag parsing; everything else that is not a flag is kept
  in :attr:`FlagSet.args`.

Rules
-----
* ``argparse`` errors never escape this module: they are re-raised as
  :class:`~bee.exceptions.FlagError`.
* Abbreviated flags are not accepted.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, NoReturn, TextIO

from bee.core.coercion import Kind
from bee.exceptions import FlagError, HelpRequestedError

HELP_TOKENS: tuple[str, ...] = ("-h", "-help", "--help", "--h")
"""Arguments that request usage output."""


# ---------------------------------------------------------------------------
# argparse adapters
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """Parser that raises instead of exiting the interpreter."""

    def __init__(self, *, output: TextIO, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.output: TextIO = output

    def error(self, message: str) -> NoReturn:  # type: ignore[override]
        self.print_usage(self.output)
        raise FlagError(message)


class _HelpAction(argparse.Action):
    """Print the full usage text and signal a help request."""

    def __init__(self, option_strings: Sequence[str], dest: str, help: str | None = None) -> None:
        super().__init__(
            option_strings,
            dest=argparse.SUPPRESS,
            default=argparse.SUPPRESS,
            nargs=0,
            help=help,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: object,
        option_string: str | None = None,
    ) -> None:
        output = getattr(parser, "output", None)
        parser.print_help(output)
        raise HelpRequestedError()


def _argument_type(kind: Kind) -> Callable[[str], Any]:
    """Wrap ``kind.parse`` so argparse reports a readable message."""

    def convert(text: str) -> Any:
        try:
            return kind.parse(text)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"invalid value {text!r}: {exc}") from exc

    convert.__name__ = kind.name
    return convert


def _help_text(kind: Kind, default: Any, usage: str) -> str:
    text = usage
    if not kind.is_zero(default):
        text = f"{usage} (default {kind.format(default)})"
    return text.replace("%", "%%")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class _Binding:
    target: object
    attr: str
    dest: str


class FlagSet:
    """Flag registry for one resolution call.

    Parameters
    ----------
    prog:
        Program name shown in usage text.
    output:
        Stream receiving usage and help output.
    """

    def __init__(self, prog: str, *, output: TextIO) -> None:
        self._parser = _ArgumentParser(
            prog=prog,
            output=output,
            add_help=False,
            allow_abbrev=False,
        )
        self._parser.add_argument(
            *HELP_TOKENS,
            action=_HelpAction,
            help="show this help message",
        )
        self._bindings: list[_Binding] = []
        self._switches: dict[str, bool] = {}
        self.args: list[str] = []
        """Non-flag arguments left over after :meth:`parse`."""

    @property
    def names(self) -> list[str]:
        """Registered flag names in registration order."""
        return [binding.dest for binding in self._bindings]

    def add(
        self,
        name: str,
        *,
        kind: Kind,
        default: Any,
        usage: str,
        target: object,
        attr: str,
    ) -> None:
        """Register ``-name``/``--name`` with *default* bound to ``target.attr``."""
        options: dict[str, Any] = {
            "dest": name,
            "default": default,
            "type": _argument_type(kind),
            "metavar": kind.name,
            "help": _help_text(kind, default, usage),
        }
        if kind.switch:
            options.update(nargs="?", const=True)

        try:
            self._parser.add_argument(f"-{name}", f"--{name}", **options)
        except argparse.ArgumentError as exc:
            raise FlagError(f"flag redefined: {name}") from exc

        self._switches[f"-{name}"] = self._switches[f"--{name}"] = kind.switch
        self._bindings.append(_Binding(target=target, attr=attr, dest=name))

    def parse(self, argv: Sequence[str]) -> None:
        """Apply *argv* on top of the registered defaults.

        Raises
        ------
        HelpRequestedError
            If a help token was parsed (usage has been printed).
        FlagError
            On unknown flags or malformed values.
        """
        namespace, extras = self._parser.parse_known_args(self._attach_values(argv))

        rest: list[str] = []
        if "--" in extras:
            split = extras.index("--")
            extras, rest = extras[:split], extras[split + 1:]
        for arg in extras:
            if arg.startswith("-") and arg != "-":
                self._parser.error(f"flag provided but not defined: {arg}")
        self.args = [*extras, *rest]

        for binding in self._bindings:
            setattr(binding.target, binding.attr, getattr(namespace, binding.dest))

    def _attach_values(self, argv: Sequence[str]) -> list[str]:
        """Rewrite registered flags to the ``-name=value`` form.

        A bare switch becomes ``-name=true``.  Any other flag absorbs the
        next argument verbatim, so argparse never mistakes a value such
        as ``-10s`` for an option.
        """
        attached: list[str] = []
        tokens = iter(argv)
        for token in tokens:
            if token == "--":
                attached.append(token)
                attached.extend(tokens)
                break
            switch = self._switches.get(token)
            if switch is None:
                attached.append(token)
            elif switch:
                attached.append(f"{token}=true")
            else:
                value = next(tokens, None)
                attached.append(token if value is None else f"{token}={value}")
        return attached

    def print_help(self) -> None:
        self._parser.print_help(self._parser.output)
