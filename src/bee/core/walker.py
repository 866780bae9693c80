"""Recursive walk over a dataclass configuration record.

Nested dataclasses are *namespaces*: the walker descends into them and
their field name joins the prefix chain.  Every other field is
*terminal* and is handed to :func:`~bee.core.resolver.resolve_field`.
Types registered in the coercion table (such as
:class:`~bee.core.types.URL`) are terminal even when they are
dataclasses.

The walk is depth-first in declaration order and stops at the first
error.  Fields resolved before the failing one keep their new values;
nothing is rolled back.
"""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Iterator, Sequence
from typing import Any

from bee.core import naming
from bee.core.coercion import is_terminal_kind
from bee.core.models import DEFAULT_KEY, NO_DEFAULT, FieldDescriptor
from bee.core.resolver import ResolveContext, resolve_field
from bee.exceptions import InvalidConfigTypeError


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def walk(record: object, context: ResolveContext) -> None:
    """Resolve every terminal field of *record* in place.

    Raises
    ------
    InvalidConfigTypeError
        If *record* is not a mutable dataclass instance, or a field's
        annotation cannot be resolved.
    UnsupportedTypeError, ValueParseError, FlagError
        Propagated unchanged from the first failing field.
    """
    if not dataclasses.is_dataclass(record) or isinstance(record, type):
        raise InvalidConfigTypeError(
            f"invalid config type: {type(record).__name__}",
            hint="Pass an instance of a dataclass, e.g. parse(Config()).",
        )
    _walk(record, context, ())


def describe_fields(record: object, command: str) -> list[FieldDescriptor]:
    """Return descriptors for every terminal field without resolving them.

    *record* may be a dataclass type or an instance.
    """
    record_type = record if isinstance(record, type) else type(record)
    if not dataclasses.is_dataclass(record_type):
        raise InvalidConfigTypeError(f"invalid config type: {record_type.__name__}")
    return list(_iter_descriptors(record_type, command, ()))


def is_namespace(hint: object) -> bool:
    """Whether a field annotated with *hint* is recursed into."""
    return (
        isinstance(hint, type)
        and dataclasses.is_dataclass(hint)
        and not is_terminal_kind(hint)
    )


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------

def _walk(record: Any, context: ResolveContext, prefix: tuple[str, ...]) -> None:
    record_type = type(record)
    if record_type.__dataclass_params__.frozen:
        raise InvalidConfigTypeError(
            f"invalid config type: {record_type.__name__} is frozen",
        )
    hints = _type_hints(record_type)

    for field in dataclasses.fields(record):
        hint = hints.get(field.name, field.type)
        if is_namespace(hint):
            child = getattr(record, field.name, None)
            if not isinstance(child, hint):
                child = _instantiate(hint, field.name)
                setattr(record, field.name, child)
            _walk(child, context, (*prefix, field.name))
            continue

        descriptor = _describe(context.command, field, hint, prefix)
        resolve_field(record, descriptor, context)


def _iter_descriptors(
    record_type: type,
    command: str,
    prefix: tuple[str, ...],
) -> Iterator[FieldDescriptor]:
    hints = _type_hints(record_type)
    for field in dataclasses.fields(record_type):
        hint = hints.get(field.name, field.type)
        if is_namespace(hint):
            yield from _iter_descriptors(hint, command, (*prefix, field.name))  # type: ignore[arg-type]
            continue
        yield _describe(command, field, hint, prefix)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _describe(
    command: str,
    field: dataclasses.Field[Any],
    hint: object,
    prefix: Sequence[str],
) -> FieldDescriptor:
    metadata = field.metadata
    env = naming.env_name(command, field.name, prefix, metadata)

    default_text = metadata.get(DEFAULT_KEY)
    default_value: Any = NO_DEFAULT
    if default_text is None:
        default_value = _declared_default(field)

    return FieldDescriptor(
        name=field.name,
        hint=hint,
        prefix=tuple(prefix),
        flag=naming.flag_name(field.name, prefix, metadata),
        env=env,
        usage=naming.usage_text(field.name, prefix, env, metadata),
        default_text="" if default_text is None else str(default_text),
        default_value=default_value,
    )


def _declared_default(field: dataclasses.Field[Any]) -> Any:
    """Typed default from the dataclass declaration, or ``NO_DEFAULT``."""
    if field.default is not dataclasses.MISSING and field.default is not None:
        return field.default
    if field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return NO_DEFAULT


def _type_hints(record_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError) as exc:
        raise InvalidConfigTypeError(
            f"invalid config type: cannot resolve annotations of "
            f"{record_type.__name__}: {exc}",
            hint="Define configuration dataclasses at module level.",
        ) from exc


def _instantiate(hint: type, name: str) -> Any:
    try:
        return hint()
    except TypeError as exc:
        raise InvalidConfigTypeError(
            f"invalid config type: cannot create namespace {name!r}: {exc}",
            hint=f"Give {name!r} a default_factory.",
        ) from exc
