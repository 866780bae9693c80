"""Infrastructure layer — adapters around the standard library.

Currently holds the ``argparse``-backed flag registry.
"""

from bee.infra.flagset import HELP_TOKENS, FlagSet

__all__: list[str] = [
    "HELP_TOKENS",
    "FlagSet",
]
