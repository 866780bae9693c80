"""Custom exception hierarchy for bee.

Every error raised while resolving a configuration record inherits
from :class:`BeeError`.  Raw ``argparse`` errors never propagate beyond
the infrastructure layer; they are caught and re-raised as
:class:`FlagError`.

Hierarchy
---------
BeeError
├── InvalidConfigTypeError
├── ConfigImportError
├── FieldError
│   ├── ValueParseError
│   └── UnsupportedTypeError
└── FlagError
    └── HelpRequestedError
"""

from __future__ import annotations


class BeeError(Exception):
    """Base exception for all bee errors.

    The CLI error boundary renders ``str(exc)`` and, when present, the
    :attr:`hint` below it.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Record shape ----------------------------------------------------------

class InvalidConfigTypeError(BeeError):
    """Raised when the configuration root is not a dataclass instance."""


class ConfigImportError(BeeError):
    """Raised when the ``bee`` tool cannot import the requested dataclass."""


# --- Field resolution ------------------------------------------------------

class FieldError(BeeError):
    """Raised when a single terminal field cannot be resolved.

    ``phase`` names the value source being applied when the failure
    happened: ``"env"`` or ``"def"``.  It is ``None`` when the failure
    does not depend on a source.
    """

    def __init__(
        self,
        field: str,
        message: str,
        *,
        phase: str | None = None,
        hint: str | None = None,
    ) -> None:
        prefix = f"{field} {phase}" if phase else field
        super().__init__(f"{prefix}: {message}", hint=hint)
        self.field: str = field
        self.phase: str | None = phase


class ValueParseError(FieldError):
    """Raised when source text cannot be coerced into the field's kind."""

    def __init__(
        self,
        field: str,
        text: str,
        message: str,
        *,
        phase: str | None = None,
    ) -> None:
        super().__init__(field, message, phase=phase)
        self.text: str = text


class UnsupportedTypeError(FieldError):
    """Raised when a terminal field's type has no registered kind."""

    def __init__(self, field: str, kind: object) -> None:
        super().__init__(
            field,
            f"parsing value: type not supported: {describe_hint(kind)}",
            hint="Use a registered kind or call bee.register_kind().",
        )
        self.kind: object = kind


# --- Flag registry ---------------------------------------------------------

class FlagError(BeeError):
    """Raised by the flag registry: duplicate, unknown or malformed flags."""


class HelpRequestedError(FlagError):
    """Raised when a help token was parsed from the command line."""

    def __init__(self) -> None:
        super().__init__("help requested")


def describe_hint(hint: object) -> str:
    """Render a type hint for diagnostics (``int``, ``dict[str, int]``)."""
    if isinstance(hint, type) and not getattr(hint, "__args__", None):
        return hint.__name__
    name = getattr(hint, "__name__", None)
    if isinstance(name, str) and not getattr(hint, "__args__", None):
        return name
    return str(hint).replace("typing.", "")
