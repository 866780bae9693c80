"""Shared pytest fixtures and configuration for the bee test suite.

Guidelines
----------
* Never read the real process environment; inject a lookup stub.
* Never write to the real stderr from the engine; pass a StringIO.
* Configuration dataclasses live at module level so their annotations
  resolve under ``from __future__ import annotations``.
"""

from __future__ import annotations

import io

import pytest


class EnvStub:
    """Dict-backed environment lookup that records every name asked for."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(values or {})
        self.lookups: list[str] = []

    def __call__(self, name: str) -> str | None:
        self.lookups.append(name)
        return self.values.get(name)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def env() -> EnvStub:
    return EnvStub()
