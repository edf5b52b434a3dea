"""``container-deck doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment satisfies container-deck's
requirements.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import importlib.util
import platform
import sys

from container_deck.cli import exit_codes
from container_deck.cli.console import console, escape, rich_available
from container_deck.config import Settings
from container_deck.core.container_service import ContainerService
from container_deck.exceptions import ContainerDeckError
from container_deck.infra.cli_detector import CliStatus, detect_container_cli
from container_deck.infra.process_runner import SubprocessRunner
from container_deck.version import __version__

Check = tuple[str, str, str]


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _cli_check(status: CliStatus) -> Check:
    """Return (label, value, status) for the container binary row."""
    if status.found:
        return status.binary, str(status.path), "[green]OK[/green]"
    return status.binary, "not found", "[red]FAIL[/red]"


def _cli_version_check(service: ContainerService | None) -> Check:
    if service is None:
        return "CLI version", "—", "[dim]SKIP[/dim]"
    version = service.version()
    if version is None:
        return "CLI version", "unknown", "[yellow]WARN[/yellow]"
    return "CLI version", version, "[green]OK[/green]"


def _service_check(service: ContainerService | None) -> Check:
    if service is None:
        return "System service", "—", "[dim]SKIP[/dim]"
    try:
        status = service.system_status()
    except ContainerDeckError as exc:
        return "System service", str(exc), "[yellow]WARN[/yellow]"
    if status.running:
        return "System service", status.label, "[green]OK[/green]"
    return "System service", status.label, "[yellow]WARN[/yellow]"


def _module_check(label: str, module: str) -> Check:
    if importlib.util.find_spec(module) is not None:
        return label, "installed", "[green]OK[/green]"
    return label, "NOT INSTALLED", "[yellow]WARN[/yellow]"


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {"Darwin": "macOS"}.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    supported = system_raw == "Darwin" and platform.machine() == "arm64"
    return "OS", value, "[green]OK[/green]" if supported else "[yellow]WARN[/yellow]"


def _deck_version_check() -> Check:
    return "container-deck", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "SKIP", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[Check]) -> None:
    """Render doctor output without Rich."""
    print("\ncontainer-deck doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<16} {'Value':<36} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<16} {value:<36} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def collect_checks(settings: Settings) -> tuple[list[Check], CliStatus]:
    cli_status = detect_container_cli(settings.binary)
    service = (
        ContainerService(SubprocessRunner(settings.binary, timeout=settings.timeout))
        if cli_status.found
        else None
    )
    checks = [
        _deck_version_check(),
        _python_version_check(),
        _os_check(),
        _cli_check(cli_status),
        _cli_version_check(service),
        _service_check(service),
        _module_check("rich", "rich"),
        _module_check("questionary", "questionary"),
    ]
    return checks, cli_status


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(settings: Settings | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks, cli_status = collect_checks(settings or Settings())
    has_failure = any("FAIL" in status for _, _, status in checks)

    if rich_available():
        from rich.table import Table

        table = Table(
            title="container-deck doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=16)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(escape(label), escape(value), status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if not cli_status.found and cli_status.install_commands:
        console.print(f"[yellow]'{cli_status.binary}' is not installed.[/yellow]")
        for cmd in cli_status.install_commands:
            console.print(f"  [bold]{escape(cmd)}[/bold]")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
