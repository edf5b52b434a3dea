"""Interactive prompts for the CLI layer.

Destructive or long-running actions ask before they run.  questionary
is imported lazily so non-interactive commands keep working without it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from container_deck.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def confirm(message: str, *, default: bool = False) -> bool:
    """Ask a yes/no question.  Ctrl+C counts as *no*."""
    questionary = _import_questionary()
    answer = questionary.confirm(message, default=default).ask()
    return bool(answer)


def choose_dns_domain(domains: Sequence[str]) -> str | None:
    """Let the user pick one of *domains*, or none.

    Returns ``None`` immediately when there is nothing to choose from.
    """
    if not domains:
        return None
    questionary = _import_questionary()
    none_label = "(none)"
    answer = questionary.select(
        "DNS domain",
        choices=[none_label, *domains],
        default=none_label,
    ).ask()
    if answer is None or answer == none_label:
        return None
    return str(answer)
