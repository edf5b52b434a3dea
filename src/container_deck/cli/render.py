"""Terminal rendering for parsed listings.

This module is responsible for:

* Turning typed records into display rows (pure helpers).
* Rendering them as a Rich table, or as aligned plain text when Rich
  is not installed.

No business logic, no command execution.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from dataclasses import asdict
from typing import Any

from container_deck.cli.console import out, rich_available
from container_deck.core.models import ContainerImage, ContainerSummary, SystemStatus

Row = tuple[str, ...]


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms — no I/O themselves)
# ---------------------------------------------------------------------------

def _short_digest(digest: str, length: int = 12) -> str:
    """Shorten ``sha256:0123…`` to its first *length* hex characters."""
    if not digest:
        return "—"
    _, _, hexpart = digest.rpartition(":")
    return hexpart[:length]


def _platform(os_name: str, arch: str, variant: str = "") -> str:
    parts = [p for p in (os_name, arch, variant) if p]
    return "/".join(parts) if parts else "—"


def image_rows(images: Sequence[ContainerImage]) -> tuple[Row, list[Row]]:
    """Return ``(headers, rows)`` for an image listing."""
    headers: Row = ("Name", "Tag", "Platform", "Size", "Created", "Digest")
    rows = [
        (
            img.name,
            img.tag or "—",
            _platform(img.os, img.arch, img.variant),
            img.size or "—",
            img.created or "—",
            _short_digest(img.index_digest or img.manifest_digest),
        )
        for img in images
    ]
    return headers, rows


def container_rows(containers: Sequence[ContainerSummary]) -> tuple[Row, list[Row]]:
    headers: Row = ("ID", "Image", "Platform", "State", "Address")
    rows = [
        (
            c.id,
            c.image,
            _platform(c.os, c.arch),
            c.state or "—",
            c.addr or "—",
        )
        for c in containers
    ]
    return headers, rows


def format_plain_table(headers: Row, rows: Sequence[Row]) -> str:
    """Align *rows* under *headers* with two-space gutters."""
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]
    lines = [
        "  ".join(cell.ljust(w) for cell, w in zip(line, widths)).rstrip()
        for line in (headers, *rows)
    ]
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_table(title: str, headers: Row, rows: Sequence[Row]) -> None:
    """Print a table to stdout, via Rich when available."""
    if not rows:
        out.print(f"[dim]No {title.lower()} found.[/dim]")
        return

    if not rich_available():
        print(format_plain_table(headers, rows), file=sys.stdout)
        return

    from rich.markup import escape
    from rich.table import Table

    table = Table(
        title=title,
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    for index, header in enumerate(headers):
        table.add_column(header, style="bold" if index == 0 else None)
    for row in rows:
        table.add_row(*(escape(cell) for cell in row))
    out.print(table)


def render_json(records: Sequence[Any]) -> None:
    """Print dataclass records as a JSON array to stdout."""
    print(json.dumps([asdict(r) for r in records], indent=2), file=sys.stdout)


def render_images(images: Sequence[ContainerImage]) -> None:
    headers, rows = image_rows(images)
    render_table("Images", headers, rows)


def render_containers(containers: Sequence[ContainerSummary]) -> None:
    headers, rows = container_rows(containers)
    render_table("Containers", headers, rows)


def render_history(reference: str, steps: Sequence[str]) -> None:
    """Show image build history as a tree, one node per layer command."""
    if not rich_available():
        print(reference, file=sys.stdout)
        for index, step in enumerate(steps, start=1):
            print(f"  {index:>3}. {step}", file=sys.stdout)
        return

    from rich.markup import escape
    from rich.tree import Tree

    tree = Tree(f"[bold]{escape(reference)}[/bold]")
    for step in steps:
        tree.add(escape(step) or "[dim](empty)[/dim]")
    out.print(tree)


def render_status(status: SystemStatus, version: str | None) -> None:
    colour = "green" if status.running else "red"
    out.print(f"[bold]Status:[/bold] [{colour}]{status.label}[/{colour}]")
    out.print(f"[bold]Version:[/bold] {version or 'unknown'}")
    if status.detail:
        print(status.detail, file=sys.stdout)


def render_lines(title: str, lines: Sequence[str]) -> None:
    if not lines:
        out.print(f"[dim]No {title.lower()} configured.[/dim]")
        return
    for line in lines:
        print(line, file=sys.stdout)
