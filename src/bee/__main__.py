"""Allow ``python -m bee`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m bee`` behaves identically to the ``bee`` console script.
"""

from __future__ import annotations

from bee.cli.app import cli

if __name__ == "__main__":
    cli()
