"""Value kinds that configuration fields may declare.

Besides the builtin ``bool``, ``str``, ``int``, ``float`` and
:class:`datetime.timedelta`, a record may use the width-restricted
integers below and four composite types that behave as single values:
:class:`StringList`, :class:`IntList`, :class:`URL` and
:class:`Timestamp`.

Every composite type exposes the same textual capability:

* ``Type.parse(text)`` — build a value from its textual form, raising
  :class:`ValueError` on malformed input.
* ``str(value)`` — render the value back into that textual form.

Nothing in this module performs I/O.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import NewType
from urllib.parse import SplitResult, urlsplit, urlunsplit

UInt32 = NewType("UInt32", int)
"""Unsigned integer limited to 32 bits."""

UInt64 = NewType("UInt64", int)
"""Unsigned integer limited to 64 bits."""

Int64 = NewType("Int64", int)
"""Signed integer limited to 64 bits."""

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"[0-9]+")


# ---------------------------------------------------------------------------
# Integer helpers
# ---------------------------------------------------------------------------

def parse_signed(text: str, bits: int | None = None) -> int:
    """Parse a base-10 signed integer, optionally range-checked to *bits*."""
    if not _SIGNED_RE.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if bits is not None:
        limit = 1 << (bits - 1)
        if not -limit <= value < limit:
            raise ValueError(f"value out of range: {text!r}")
    return value


def parse_unsigned(text: str, bits: int) -> int:
    """Parse a base-10 unsigned integer that fits in *bits*."""
    if not _UNSIGNED_RE.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if value >= 1 << bits:
        raise ValueError(f"value out of range: {text!r}")
    return value


# ---------------------------------------------------------------------------
# Durations
# ---------------------------------------------------------------------------

_DURATION_UNITS: dict[str, float] = {
    "ns": 1e-3,
    "us": 1.0,
    "µs": 1.0,
    "μs": 1.0,
    "ms": 1e3,
    "s": 1e6,
    "m": 60e6,
    "h": 3600e6,
}
"""Microseconds per unit."""

_DURATION_PART_RE = re.compile(r"([0-9]*(?:\.[0-9]*)?)(ns|us|µs|μs|ms|s|m|h)")
_BARE_NUMBER_RE = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")
_MAX_DURATION_MICROS = (2**63 - 1) / 1_000
"""Largest magnitude representable as signed 64-bit nanoseconds."""


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"300ms"``, ``"-1.5h"`` or ``"2h45m"``.

    Units are ``ns``, ``us`` (or ``µs``), ``ms``, ``s``, ``m`` and ``h``.
    A bare ``"0"`` is accepted.  Precision below one microsecond is
    truncated.  Magnitudes beyond signed 64-bit nanoseconds (about 292
    years) are rejected.
    """
    rest = text
    sign = 1
    if rest[:1] in ("+", "-"):
        sign = -1 if rest[0] == "-" else 1
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f"invalid duration {text!r}")

    micros = 0.0
    pos = 0
    while pos < len(rest):
        match = _DURATION_PART_RE.match(rest, pos)
        if match is None or match.group(1) in ("", "."):
            if match is None and _BARE_NUMBER_RE.fullmatch(rest, pos):
                raise ValueError(f"missing unit in duration {text!r}")
            raise ValueError(f"invalid duration {text!r}")
        micros += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()

    if micros > _MAX_DURATION_MICROS:
        raise ValueError(f"invalid duration {text!r}")
    return timedelta(microseconds=int(sign * micros))


def format_duration(value: timedelta) -> str:
    """Render *value* in the same notation :func:`parse_duration` reads."""
    micros = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if micros == 0:
        return "0s"
    sign = "-" if micros < 0 else ""
    micros = abs(micros)
    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim(micros / 1_000)}ms"
    hours, micros = divmod(micros, 3_600_000_000)
    minutes, micros = divmod(micros, 60_000_000)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + f"{_trim(micros / 1_000_000)}s"


def _trim(number: float) -> str:
    return f"{number:.6f}".rstrip("0").rstrip(".")


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------

class StringList(list[str]):
    """Comma-separated list of strings: ``"a,b,c"``.

    Elements are kept verbatim; no whitespace trimming is applied.
    """

    @classmethod
    def parse(cls, text: str) -> StringList:
        if text == "":
            return cls()
        return cls(text.split(","))

    def __str__(self) -> str:
        return ",".join(self)


class IntList(list[int]):
    """Comma-separated list of signed integers: ``"1,-2,3"``."""

    @classmethod
    def parse(cls, text: str) -> IntList:
        if text == "":
            return cls()
        values = cls()
        for item in text.split(","):
            try:
                values.append(parse_signed(item))
            except ValueError as exc:
                raise ValueError(f"parsing list element {item!r}: {exc}") from exc
        return values

    def __str__(self) -> str:
        return ",".join(str(item) for item in self)


# ---------------------------------------------------------------------------
# URL
# ---------------------------------------------------------------------------

_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")


@dataclass(frozen=True, slots=True)
class URL:
    """An absolute or relative URL.

    The zero value ``URL()`` is the empty reference.
    """

    scheme: str = ""
    netloc: str = ""
    path: str = ""
    query: str = ""
    fragment: str = ""

    @classmethod
    def parse(cls, text: str) -> URL:
        if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in text):
            raise ValueError(f"invalid control character in URL {text!r}")
        if _BAD_ESCAPE_RE.search(text):
            raise ValueError(f"invalid URL escape in {text!r}")
        head, sep, _ = text.partition("://")
        if sep and not _SCHEME_RE.fullmatch(head):
            raise ValueError(f"missing protocol scheme in {text!r}")
        parts: SplitResult = urlsplit(text)
        if " " in parts.netloc:
            raise ValueError(f"invalid character ' ' in host name {text!r}")
        # urlsplit validates bracketed IPv6 hosts and ports lazily.
        _ = parts.port
        return cls(
            scheme=parts.scheme,
            netloc=parts.netloc,
            path=parts.path,
            query=parts.query,
            fragment=parts.fragment,
        )

    @property
    def hostname(self) -> str | None:
        return urlsplit(str(self)).hostname

    @property
    def port(self) -> int | None:
        return urlsplit(str(self)).port

    def __str__(self) -> str:
        return urlunsplit((self.scheme, self.netloc, self.path, self.query, self.fragment))

    def __bool__(self) -> bool:
        return str(self) != ""


# ---------------------------------------------------------------------------
# Timestamp
# ---------------------------------------------------------------------------

_RFC3339_RE = re.compile(
    r"(?P<date>[0-9]{4}-[0-9]{2}-[0-9]{2})[Tt]"
    r"(?P<clock>[0-9]{2}:[0-9]{2}:[0-9]{2})(?:\.(?P<fraction>[0-9]+))?"
    r"(?P<zone>[Zz]|[+-][0-9]{2}:[0-9]{2})"
)


class Timestamp(datetime):
    """A timezone-aware instant written in RFC 3339 form.

    ``Timestamp.zero()`` (``0001-01-01T00:00:00Z``) stands for "unset".
    Instances compare equal to any :class:`datetime` naming the same
    instant.
    """

    @classmethod
    def parse(cls, text: str) -> Timestamp:
        match = _RFC3339_RE.fullmatch(text)
        if match is None:
            raise ValueError(f"cannot parse {text!r} as RFC 3339 timestamp")
        iso = f"{match['date']}T{match['clock']}"
        if match["fraction"]:
            # fromisoformat accepts at most microsecond precision.
            iso += "." + match["fraction"][:6].ljust(6, "0")
        zone = match["zone"]
        iso += "+00:00" if zone in ("Z", "z") else zone
        return cls.from_datetime(datetime.fromisoformat(iso))

    @classmethod
    def from_datetime(cls, value: datetime) -> Timestamp:
        return cls(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond,
            tzinfo=value.tzinfo or timezone.utc,
        )

    @classmethod
    def zero(cls) -> Timestamp:
        return cls(1, 1, 1, tzinfo=timezone.utc)

    def is_zero(self) -> bool:
        return self == self.zero()

    def __str__(self) -> str:
        text = self.isoformat()
        return text[:-6] + "Z" if text.endswith("+00:00") else text
