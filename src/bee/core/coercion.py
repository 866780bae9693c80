"""Type-directed coercion: the table of supported value kinds.

Each supported type hint maps to a :class:`Kind` — the capability
triple the resolver needs:

* ``parse(text)`` — text to value, raising :class:`ValueError`.
* ``zero()`` — the value used when the source text is empty.
* ``bind(...)`` — store a value on the record and register the flag.

The table is fixed at import time.  :func:`register_kind` adds kinds
for application-specific types.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from bee.core.models import FieldDescriptor
from bee.core.protocols import FlagRegistry
from bee.core.types import (
    URL,
    Int64,
    IntList,
    StringList,
    Timestamp,
    UInt32,
    UInt64,
    format_duration,
    parse_duration,
    parse_signed,
    parse_unsigned,
)

_TRUE_WORDS: frozenset[str] = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS: frozenset[str] = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_INF_WORDS: frozenset[str] = frozenset({"inf", "infinity"})


def parse_bool(text: str) -> bool:
    if text in _TRUE_WORDS:
        return True
    if text in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid syntax: {text!r}")


def parse_float(text: str) -> float:
    """Parse a float literal; surrounding whitespace and ``_`` are rejected.

    Finite literals too large for a double are out of range; only the
    ``inf`` and ``infinity`` spellings yield an infinite value.
    """
    if text != text.strip() or "_" in text:
        raise ValueError(f"invalid syntax: {text!r}")
    try:
        value = float(text)
    except ValueError:
        raise ValueError(f"invalid syntax: {text!r}") from None
    if math.isinf(value) and text.lstrip("+-").lower() not in _INF_WORDS:
        raise ValueError(f"value out of range: {text!r}")
    return value


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True, slots=True)
class Kind:
    """Parse/zero/bind capabilities for one value kind."""

    name: str
    """Short label used in diagnostics and as the flag metavar."""

    parse: Callable[[str], Any]
    zero: Callable[[], Any]
    format: Callable[[Any], str] = str
    switch: bool = False
    """Whether a bare ``-flag`` (without a value) means ``true``."""

    def coerce(self, text: str) -> Any:
        """Return the zero value for empty *text*, else ``parse(text)``."""
        if text == "":
            return self.zero()
        return self.parse(text)

    def bind(
        self,
        registry: FlagRegistry,
        target: object,
        descriptor: FieldDescriptor,
        value: Any,
    ) -> None:
        """Store *value* on *target* and register it as the flag default."""
        setattr(target, descriptor.name, value)
        registry.add(
            descriptor.flag,
            kind=self,
            default=value,
            usage=descriptor.usage,
            target=target,
            attr=descriptor.name,
        )

    def is_zero(self, value: Any) -> bool:
        return bool(value == self.zero())


_KINDS: dict[object, Kind] = {
    bool: Kind("bool", parse_bool, bool, _format_bool, switch=True),
    str: Kind("string", str, str),
    UInt32: Kind("uint", lambda text: parse_unsigned(text, 32), int),
    UInt64: Kind("uint64", lambda text: parse_unsigned(text, 64), int),
    int: Kind("int", parse_signed, int),
    Int64: Kind("int64", lambda text: parse_signed(text, 64), int),
    timedelta: Kind("duration", parse_duration, timedelta, format_duration),
    float: Kind("float64", parse_float, float),
    StringList: Kind("strings", StringList.parse, StringList),
    IntList: Kind("ints", IntList.parse, IntList),
    URL: Kind("url", URL.parse, URL),
    Timestamp: Kind("timestamp", Timestamp.parse, Timestamp.zero),
}


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

def kind_for(hint: object) -> Kind | None:
    """Return the registered kind for *hint*, or ``None``."""
    try:
        return _KINDS.get(hint)
    except TypeError:
        # Unhashable annotation objects are never registered.
        return None


def is_terminal_kind(hint: object) -> bool:
    return kind_for(hint) is not None


def register_kind(hint: object, kind: Kind) -> None:
    """Make fields annotated with *hint* resolvable using *kind*.

    A dataclass registered here becomes a terminal field instead of a
    namespace.
    """
    _KINDS[hint] = kind


def unregister_kind(hint: object) -> None:
    _KINDS.pop(hint, None)
