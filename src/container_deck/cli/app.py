"""CLI application entry point and command routing for container-deck.

This module is the **sole error boundary** for the entire application.
It catches :class:`~container_deck.exceptions.ContainerDeckError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the
  :class:`~container_deck.core.container_service.ContainerService`.
* Listings go to stdout; messages and errors go to stderr.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Callable

from container_deck.cli import exit_codes
from container_deck.cli.console import console, escape
from container_deck.config import Settings, load_settings
from container_deck.core.container_service import ContainerService
from container_deck.exceptions import ContainerDeckError
from container_deck.version import __version__

logger = logging.getLogger(__name__)

Handler = Callable[[argparse.Namespace, ContainerService], int]


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser and its sub-commands."""
    parser = argparse.ArgumentParser(
        prog="container-deck",
        description="Browse and manage images and containers of the container CLI.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every command that is run.",
    )
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    images = commands.add_parser("images", help="List and manage images.")
    images.add_argument("--json", action="store_true", help="Print records as JSON.")
    image_actions = images.add_subparsers(dest="action", metavar="ACTION")
    pull = image_actions.add_parser("pull", help="Pull an image.")
    pull.add_argument("reference", help="Image to pull, as name[:tag].")
    delete = image_actions.add_parser("delete", help="Delete an image.")
    delete.add_argument("reference", help="Image to delete, as name[:tag].")
    delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation.")
    inspect = image_actions.add_parser("inspect", help="Show the build history of an image.")
    inspect.add_argument("reference", help="Image to inspect, as name[:tag].")

    ps = commands.add_parser("ps", help="List all containers.")
    ps.add_argument("--json", action="store_true", help="Print records as JSON.")

    create = commands.add_parser("create", help="Create and start a container from an image.")
    create.add_argument("image", help="Image to run, as name[:tag].")
    create.add_argument("--name", help="Container name.")
    create.add_argument("--entrypoint", help="Entrypoint override.")
    create.add_argument("--dns-domain", help="DNS domain; prompts when omitted and domains exist.")
    create.add_argument("--ssh", action="store_true", help="Forward the SSH agent socket.")
    create.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; use only the options given.",
    )

    commands.add_parser("dns", help="List configured DNS domains.")

    system = commands.add_parser("system", help="Inspect or control the system service.")
    system.add_argument(
        "action",
        nargs="?",
        choices=("status", "start", "stop"),
        default="status",
    )

    commands.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command handlers (no business logic)
# ---------------------------------------------------------------------------

def _handle_images(args: argparse.Namespace, service: ContainerService) -> int:
    from container_deck.cli import render

    action = getattr(args, "action", None)

    if action == "pull":
        console.print(f"[bold]Pulling image…[/bold]  {args.reference}")
        service.pull_image(args.reference)
        console.print(f"[bold green]Pulled {args.reference}.[/bold green]")
        return exit_codes.SUCCESS

    if action == "delete":
        if not args.yes:
            from container_deck.cli.prompts import confirm

            if not confirm(f"Are you sure you want to delete image {args.reference}?"):
                console.print("[yellow]Nothing deleted.[/yellow]")
                return exit_codes.CANCELLED
        service.delete_image(args.reference)
        console.print(f"[bold green]Deleted {args.reference}.[/bold green]")
        return exit_codes.SUCCESS

    if action == "inspect":
        steps = service.inspect_image_history(args.reference)
        render.render_history(args.reference, steps)
        return exit_codes.SUCCESS

    images = service.list_images()
    if args.json:
        render.render_json(images)
    else:
        render.render_images(images)
    return exit_codes.SUCCESS


def _handle_ps(args: argparse.Namespace, service: ContainerService) -> int:
    from container_deck.cli import render

    containers = service.list_containers()
    if args.json:
        render.render_json(containers)
    else:
        render.render_containers(containers)
    return exit_codes.SUCCESS


def _handle_create(args: argparse.Namespace, service: ContainerService) -> int:
    from container_deck.core.models import ContainerOptions

    dns_domain = args.dns_domain
    if dns_domain is None and not args.no_input:
        from container_deck.cli.prompts import choose_dns_domain

        dns_domain = choose_dns_domain(service.list_dns_domains())

    options = ContainerOptions(
        name=args.name,
        entrypoint=args.entrypoint,
        dns_domain=dns_domain,
        forward_ssh=args.ssh,
    )
    result = service.create_container(args.image, options)
    container_id = result.output.strip()
    console.print(
        f"[bold green]Container created.[/bold green]  {container_id or args.image}",
    )
    return exit_codes.SUCCESS


def _handle_dns(args: argparse.Namespace, service: ContainerService) -> int:
    from container_deck.cli import render

    render.render_lines("DNS domains", service.list_dns_domains())
    return exit_codes.SUCCESS


def _handle_system(args: argparse.Namespace, service: ContainerService) -> int:
    from container_deck.cli import render

    if args.action == "start":
        service.start_system()
        console.print("[bold green]System service started.[/bold green]")
        return exit_codes.SUCCESS
    if args.action == "stop":
        service.stop_system()
        console.print("[bold green]System service stopped.[/bold green]")
        return exit_codes.SUCCESS

    status = service.system_status()
    render.render_status(status, service.version())
    return exit_codes.SUCCESS if status.running else exit_codes.GENERAL_ERROR


_HANDLERS: dict[str, Handler] = {
    "images": _handle_images,
    "ps": _handle_ps,
    "create": _handle_create,
    "dns": _handle_dns,
    "system": _handle_system,
}


def _build_service(settings: Settings) -> ContainerService:
    """Wire the infra runner into the core service."""
    from container_deck.infra.process_runner import SubprocessRunner

    runner = SubprocessRunner(settings.binary, timeout=settings.timeout)
    return ContainerService(
        runner,
        min_gap=settings.header_gap,
        elevated_system=settings.elevated_system,
    )


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the container-deck CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    from container_deck.cli.logging_setup import configure_logging

    configure_logging(args.verbose)
    settings = load_settings()

    if args.command == "doctor":
        from container_deck.cli.doctor import run_doctor

        return run_doctor(settings)

    logger.debug("Dispatching '%s' with %s", args.command, settings)
    return _HANDLERS[args.command](args, _build_service(settings))


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except ContainerDeckError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
