"""Exit-code constants used by the CLI layer.

Centralised here so that every exit path uses a well-known, tested
value rather than magic integers scattered across the codebase.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — includes an explicit help request."""

GENERAL_ERROR: int = 1
"""The ``bee`` tool itself failed (bad import path, unexpected error)."""

USAGE_ERROR: int = 2
"""Configuration could not be resolved from argv, env and defaults."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
