"""Per-field precedence: environment, then declared default, then zero.

The resolver never looks at the command line.  It stores each field's
*effective default* on the record and registers the field's flag with
that default; the registry's final parse over argv then overwrites any
field whose flag is present, which puts command-line values on top.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bee.core.coercion import Kind, kind_for
from bee.core.models import NO_DEFAULT, FieldDescriptor
from bee.core.protocols import EnvLookup, FlagRegistry
from bee.exceptions import UnsupportedTypeError, ValueParseError

ENV_PHASE = "env"
DEFAULT_PHASE = "def"


@dataclass(slots=True)
class ResolveContext:
    """State shared by every field of one resolution call."""

    command: str
    """Command identity; the first segment of derived env names."""

    registry: FlagRegistry
    lookup_env: EnvLookup
    help_mode: bool = False
    """When set, environment values are ignored so usage shows defaults."""


def resolve_field(target: object, descriptor: FieldDescriptor, context: ResolveContext) -> None:
    """Resolve one terminal field of *target* and register its flag.

    Raises
    ------
    UnsupportedTypeError
        If the field's type has no registered kind.
    ValueParseError
        If the environment or declared default text cannot be parsed.
    """
    kind = kind_for(descriptor.hint)
    if kind is None:
        raise UnsupportedTypeError(descriptor.path, descriptor.hint)

    if not context.help_mode:
        text = context.lookup_env(descriptor.env)
        if text is not None:
            value = _coerce(kind, descriptor, text, ENV_PHASE)
            kind.bind(context.registry, target, descriptor, value)
            return

    if descriptor.default_value is not NO_DEFAULT:
        value = descriptor.default_value
    else:
        value = _coerce(kind, descriptor, descriptor.default_text, DEFAULT_PHASE)
    kind.bind(context.registry, target, descriptor, value)


def _coerce(kind: Kind, descriptor: FieldDescriptor, text: str, phase: str) -> Any:
    try:
        return kind.coerce(text)
    except ValueError as exc:
        raise ValueParseError(
            descriptor.path,
            text,
            f"parsing {kind.name} {text!r}: {exc}",
            phase=phase,
        ) from exc
