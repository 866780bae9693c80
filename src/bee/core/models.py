"""Value objects produced while walking a configuration record.

Descriptors are **frozen** and transient: they are recomputed on every
resolution call and never stored on the record.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

FLAG_KEY = "flag"
"""Field metadata key overriding the derived flag name."""

ENV_KEY = "env"
"""Field metadata key overriding the derived environment variable name."""

HELP_KEY = "help"
"""Field metadata key overriding the derived usage text."""

DEFAULT_KEY = "def"
"""Field metadata key holding the declared default as literal text."""


class _NoDefault:
    """Sentinel type for fields that declare no typed default."""

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


# ---------------------------------------------------------------------------
# Field descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Everything the resolver needs to know about one terminal field."""

    name: str
    """Attribute name on the owning record (e.g. ``host``)."""

    hint: object
    """Resolved type hint of the attribute."""

    prefix: tuple[str, ...]
    """Names of the enclosing namespace fields, outermost first."""

    flag: str
    """Flag name without leading dashes (e.g. ``db-postgres-host``)."""

    env: str
    """Environment variable name (e.g. ``MYCMD_DB_POSTGRES_HOST``)."""

    usage: str
    """Usage text including the ``(env NAME)`` annotation."""

    default_text: str = ""
    """Declared default as literal text; empty means the kind's zero value."""

    default_value: Any = NO_DEFAULT
    """Typed dataclass default, used when no ``def`` metadata is present."""

    @property
    def path(self) -> str:
        """Dotted attribute path from the record root (``db.postgres.host``)."""
        return ".".join((*self.prefix, self.name))


# ---------------------------------------------------------------------------
# Declaration helper
# ---------------------------------------------------------------------------

def setting(
    default: str = "",
    *,
    flag: str | None = None,
    env: str | None = None,
    help: str | None = None,
) -> Any:
    """Declare a terminal field with a textual default and name overrides.

    ``port: int = setting("3000", help="listen port")`` is equivalent to
    ``field(default=None, metadata={"def": "3000", "help": "listen port"})``.
    The attribute holds ``None`` until the record is resolved.
    """
    metadata: dict[str, str] = {DEFAULT_KEY: default}
    if flag is not None:
        metadata[FLAG_KEY] = flag
    if env is not None:
        metadata[ENV_KEY] = env
    if help is not None:
        metadata[HELP_KEY] = help
    return dataclasses.field(default=None, metadata=metadata)
