"""Allow ``python -m container_deck`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m container_deck`` behaves identically to the
``container-deck`` console script.
"""

from __future__ import annotations

from container_deck.cli.app import cli

if __name__ == "__main__":
    cli()
