"""Tests for the kind table (core/coercion.py).

Coverage:
* Boolean and float literal syntax.
* Empty text yields each kind's zero value without parsing.
* Unregistered hints have no kind.
* ``Kind.bind`` stores the value and registers the flag.
* ``register_kind`` extends the table.
"""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Any

import pytest

from bee.core.coercion import (
    Kind,
    is_terminal_kind,
    kind_for,
    parse_bool,
    parse_float,
    register_kind,
    unregister_kind,
)
from bee.core.models import FieldDescriptor
from bee.core.types import URL, Int64, IntList, StringList, Timestamp, UInt32, UInt64


class RecordingRegistry:
    """Registry stub capturing ``add`` calls."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    def add(self, name: str, **kwargs: Any) -> None:
        self.calls.append({"name": name, **kwargs})


class Holder:
    value: Any = None


def _descriptor(**overrides: Any) -> FieldDescriptor:
    defaults: dict[str, Any] = {
        "name": "value",
        "hint": int,
        "prefix": (),
        "flag": "value",
        "env": "CMD_VALUE",
        "usage": "value (env CMD_VALUE)",
    }
    defaults.update(overrides)
    return FieldDescriptor(**defaults)


# ---------------------------------------------------------------------------
# Literal syntax
# ---------------------------------------------------------------------------

class TestParseBool:
    @pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true(self, text: str) -> None:
        assert parse_bool(text) is True

    @pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false(self, text: str) -> None:
        assert parse_bool(text) is False

    @pytest.mark.parametrize("text", ["yes", "no", "on", "tRuE", " true", "2"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_bool(text)


class TestParseFloat:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1.5", 1.5),
            ("-2", -2.0),
            ("1e3", 1000.0),
            ("inf", math.inf),
            ("+Inf", math.inf),
            ("-Infinity", -math.inf),
        ],
    )
    def test_valid(self, text: str, expected: float) -> None:
        assert parse_float(text) == expected

    def test_nan(self) -> None:
        assert math.isnan(parse_float("NaN"))

    @pytest.mark.parametrize("text", [" 1.5", "1.5 ", "1_000.0", "one"])
    def test_invalid(self, text: str) -> None:
        with pytest.raises(ValueError, match="invalid syntax"):
            parse_float(text)

    @pytest.mark.parametrize("text", ["1e400", "-1e400", "9" * 400])
    def test_out_of_range(self, text: str) -> None:
        with pytest.raises(ValueError, match="value out of range"):
            parse_float(text)


# ---------------------------------------------------------------------------
# Table lookups
# ---------------------------------------------------------------------------

class TestKindTable:
    @pytest.mark.parametrize(
        ("hint", "zero"),
        [
            (bool, False),
            (str, ""),
            (UInt32, 0),
            (UInt64, 0),
            (int, 0),
            (Int64, 0),
            (timedelta, timedelta(0)),
            (float, 0.0),
            (StringList, []),
            (IntList, []),
            (URL, URL()),
            (Timestamp, Timestamp.zero()),
        ],
    )
    def test_empty_text_is_zero_value(self, hint: object, zero: object) -> None:
        kind = kind_for(hint)
        assert kind is not None
        assert kind.coerce("") == zero

    def test_empty_list_keeps_list_type(self) -> None:
        kind = kind_for(StringList)
        assert kind is not None
        assert isinstance(kind.coerce(""), StringList)

    def test_empty_text_skips_parser(self) -> None:
        def explode(text: str) -> int:
            raise AssertionError("parser must not run for empty text")

        assert Kind("boom", explode, int).coerce("") == 0

    @pytest.mark.parametrize(
        ("hint", "text", "expected"),
        [
            (UInt32, "3000", 3000),
            (UInt64, "18446744073709551615", 2**64 - 1),
            (Int64, "-5", -5),
            (timedelta, "10s", timedelta(seconds=10)),
            (StringList, "mongo", ["mongo"]),
        ],
    )
    def test_coerce(self, hint: object, text: str, expected: object) -> None:
        kind = kind_for(hint)
        assert kind is not None
        assert kind.coerce(text) == expected

    def test_uint32_range_enforced(self) -> None:
        kind = kind_for(UInt32)
        assert kind is not None
        with pytest.raises(ValueError, match="out of range"):
            kind.coerce("4294967296")

    @pytest.mark.parametrize("hint", [dict[str, str], list[str], set[int], bytes, complex])
    def test_unregistered_hints(self, hint: object) -> None:
        assert kind_for(hint) is None
        assert not is_terminal_kind(hint)

    def test_bool_is_not_int(self) -> None:
        bool_kind = kind_for(bool)
        int_kind = kind_for(int)
        assert bool_kind is not None and int_kind is not None
        assert bool_kind.switch
        assert not int_kind.switch

    def test_url_is_terminal(self) -> None:
        assert is_terminal_kind(URL)

    def test_duration_format(self) -> None:
        kind = kind_for(timedelta)
        assert kind is not None
        assert kind.format(timedelta(hours=24)) == "24h0m0s"

    def test_is_zero(self) -> None:
        kind = kind_for(int)
        assert kind is not None
        assert kind.is_zero(0)
        assert not kind.is_zero(3000)


# ---------------------------------------------------------------------------
# bind
# ---------------------------------------------------------------------------

class TestBind:
    def test_sets_attribute_and_registers(self) -> None:
        kind = kind_for(int)
        assert kind is not None
        registry = RecordingRegistry()
        holder = Holder()
        descriptor = _descriptor()

        kind.bind(registry, holder, descriptor, 3000)

        assert holder.value == 3000
        assert registry.calls == [
            {
                "name": "value",
                "kind": kind,
                "default": 3000,
                "usage": "value (env CMD_VALUE)",
                "target": holder,
                "attr": "value",
            }
        ]


# ---------------------------------------------------------------------------
# register_kind
# ---------------------------------------------------------------------------

class Level(int):
    """Application-specific kind used to exercise ``register_kind``."""


class TestRegisterKind:
    def test_register_and_unregister(self) -> None:
        kind = Kind("level", lambda text: Level({"low": 1, "high": 9}[text]), lambda: Level(0))
        register_kind(Level, kind)
        try:
            assert kind_for(Level) is kind
            assert kind_for(Level).coerce("high") == 9  # type: ignore[union-attr]
        finally:
            unregister_kind(Level)
        assert kind_for(Level) is None
