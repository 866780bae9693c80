"""Protocols (interfaces) consumed by the core layer.

The core never imports ``argparse`` or touches ``os.environ``; the
command-line layer injects objects satisfying these contracts.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from bee.core.coercion import Kind

EnvLookup = Callable[[str], "str | None"]
"""Return the value of an environment variable, or ``None`` when unset."""


class FlagRegistry(Protocol):
    """Contract for the registry that owns command-line flags.

    Registering a flag only records its effective default; values given
    on the command line are applied later, in one pass, by the
    registry's own parse.
    """

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
        """Register flag *name* bound to ``target.attr``.

        Raises
        ------
        FlagError
            When *name* is already registered.
        """
        ...  # pragma: no cover
