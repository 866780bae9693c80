"""Pure derivation of flag names, environment names and usage text.

Every function here is a pure function of the command identity, the
prefix chain and the field metadata.  No state is carried between
fields.

Examples for the field ``host`` nested under ``db.postgres`` of the
command ``mycmd``:

* flag  — ``db-postgres-host``
* env   — ``MYCMD_DB_POSTGRES_HOST``
* usage — ``db postgres host (env MYCMD_DB_POSTGRES_HOST)``
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence

from bee.core.models import ENV_KEY, FLAG_KEY, HELP_KEY

_WORD_RE = re.compile(
    r"[A-Z]+[0-9]*(?=[A-Z][a-z]|$)"  # acronyms: TLS, HTTPServer -> HTTP
    r"|[A-Z]?[a-z]+[0-9]*"           # words: host, Pool, oauth2
    r"|[A-Z]+[0-9]*"
    r"|[0-9]+"
)


# ---------------------------------------------------------------------------
# Word splitting
# ---------------------------------------------------------------------------

def split_words(text: str) -> list[str]:
    """Split an identifier into words.

    Handles ``snake_case``, ``kebab-case``, ``camelCase``,
    ``PascalCase`` and embedded acronyms (``MaxHTTPConns`` →
    ``Max``, ``HTTP``, ``Conns``).
    """
    words: list[str] = []
    for chunk in re.split(r"[^A-Za-z0-9]+", text):
        words.extend(_WORD_RE.findall(chunk))
    return words


def kebab_case(parts: Iterable[str]) -> str:
    return "-".join(word.lower() for part in parts for word in split_words(part))


def screaming_snake_case(parts: Iterable[str]) -> str:
    return "_".join(word.upper() for part in parts for word in split_words(part))


def words_case(parts: Iterable[str]) -> str:
    return " ".join(word.lower() for part in parts for word in split_words(part))


# ---------------------------------------------------------------------------
# Derivations
# ---------------------------------------------------------------------------

def flag_name(name: str, prefix: Sequence[str], metadata: Mapping[str, object]) -> str:
    """Return the ``flag`` override, or the kebab-cased prefixed field name."""
    override = metadata.get(FLAG_KEY)
    if override:
        return str(override)
    return kebab_case((*prefix, name))


def env_name(
    command: str,
    name: str,
    prefix: Sequence[str],
    metadata: Mapping[str, object],
) -> str:
    """Return the ``env`` override, or ``COMMAND[_PREFIX..]_FIELD``."""
    override = metadata.get(ENV_KEY)
    if override:
        return str(override)
    return screaming_snake_case((command, *prefix, name))


def usage_text(
    name: str,
    prefix: Sequence[str],
    env: str,
    metadata: Mapping[str, object],
) -> str:
    """Return the ``help`` override or a phrase built from the field path.

    The environment variable annotation is always appended.
    """
    override = metadata.get(HELP_KEY)
    if override:
        return f"{override} (env {env})"
    return f"{words_case((*prefix, name))} (env {env})"
