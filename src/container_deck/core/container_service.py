"""Core container service — one method per container CLI operation.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~container_deck.core.protocols.CommandRunner`
injected at construction time (dependency inversion), keeping the core
free of any ``subprocess`` import.

Guarantees
----------
* Pure orchestration — no direct I/O, no ``print()``.
* Only :class:`~container_deck.exceptions.ContainerDeckError`
  subclasses escape.
* Listing output from a failed command is never parsed.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any

from container_deck.core.models import (
    CommandResult,
    ContainerImage,
    ContainerOptions,
    ContainerSummary,
    SystemStatus,
)
from container_deck.core.protocols import CommandRunner
from container_deck.core.records import records_from_rows
from container_deck.core.table_parser import (
    DEFAULT_MIN_GAP,
    Record,
    ValueTransform,
    parse_table,
)
from container_deck.exceptions import (
    CommandFailedError,
    ConfigurationError,
    ContainerDeckError,
    InvalidOutputFormatError,
    InvalidReferenceError,
)

logger = logging.getLogger(__name__)


class ContainerService:
    """Stateless service wrapping the container CLI.

    Parameters
    ----------
    runner:
        Any object satisfying the :class:`CommandRunner` protocol.
    min_gap:
        Whitespace run length separating header labels.
    elevated_system:
        Start/stop the system service with elevated privilege.
    """

    def __init__(
        self,
        runner: CommandRunner,
        *,
        min_gap: int = DEFAULT_MIN_GAP,
        elevated_system: bool = False,
    ) -> None:
        if min_gap < 2:
            raise ConfigurationError(
                f"Header gap must be at least 2 spaces, got {min_gap}.",
                hint="Multi-word labels such as INDEX DIGEST need a wider gap.",
            )
        self._runner: CommandRunner = runner
        self._min_gap: int = min_gap
        self._elevated_system: bool = elevated_system

    # ------------------------------------------------------------------
    # Generic listing
    # ------------------------------------------------------------------

    def list_records(
        self,
        args: Sequence[str],
        transform: ValueTransform | None = None,
    ) -> list[Record]:
        """Run a listing command and parse its table.

        Raises
        ------
        CommandFailedError
            If the command exits non-zero.
        InvalidOutputFormatError
            If the command succeeded but printed no table.
        """
        result = self._run(args)
        if not result.successful:
            raise self._failure(result)
        try:
            records = parse_table(result.output, transform, min_gap=self._min_gap)
        except InvalidOutputFormatError as exc:
            raise InvalidOutputFormatError(
                f"'{' '.join(args)}' is not a list command: {exc}",
                detail=exc.detail,
            ) from exc
        logger.debug("Parsed %d row(s) from '%s'", len(records), " ".join(args))
        return records

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def list_images(self) -> list[ContainerImage]:
        return records_from_rows(ContainerImage, self.list_records(["images", "list"]))

    def pull_image(self, reference: str) -> CommandResult:
        """Pull *reference* (``name[:tag]``) from its registry."""
        ref = self._validate_reference(reference)
        return self._checked(["images", "pull", ref])

    def delete_image(self, image: ContainerImage | str) -> CommandResult:
        ref = self._validate_reference(
            image.full_name if isinstance(image, ContainerImage) else image,
        )
        return self._checked(["images", "delete", ref])

    def inspect_image_history(self, image: ContainerImage | str) -> list[str]:
        """Return the ``created_by`` line of every history entry.

        Entries are flattened across all platform variants of the image,
        in the order the tool reports them.

        Raises
        ------
        InvalidOutputFormatError
            When the inspect output is not the expected JSON document.
        """
        ref = self._validate_reference(
            image.full_name if isinstance(image, ContainerImage) else image,
        )
        result = self._checked(["images", "inspect", ref])
        try:
            document: Any = json.loads(result.output)
            variants = document[0]["variants"]
            return [
                str(entry.get("created_by", ""))
                for variant in variants
                for entry in variant.get("config", {}).get("history", [])
            ]
        except (ValueError, LookupError, TypeError, AttributeError) as exc:
            raise InvalidOutputFormatError(
                f"Unexpected inspect output for {ref}.",
                detail=result.output,
            ) from exc

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def list_containers(self) -> list[ContainerSummary]:
        return records_from_rows(
            ContainerSummary, self.list_records(["list", "--all"]),
        )

    def create_container(
        self,
        image: ContainerImage | str,
        options: ContainerOptions | None = None,
    ) -> CommandResult:
        """Create and start a detached container from *image*."""
        ref = self._validate_reference(
            image.full_name if isinstance(image, ContainerImage) else image,
        )
        opts = options or ContainerOptions()
        return self._checked(["run", "--detach", *opts.to_args(), ref])

    # ------------------------------------------------------------------
    # System
    # ------------------------------------------------------------------

    def list_dns_domains(self) -> list[str]:
        result = self._checked(["system", "dns", "list"])
        return [line.strip() for line in result.output.splitlines() if line.strip()]

    def version(self) -> str | None:
        """Return the CLI version string, or ``None`` if it cannot run."""
        try:
            result = self._run(["--version"])
        except ContainerDeckError as exc:
            logger.debug("Version probe failed: %s", exc)
            return None
        if not result.successful:
            return None
        return result.output.strip() or None

    def system_status(self) -> SystemStatus:
        result = self._run(["system", "status"])
        return SystemStatus(running=result.successful, detail=result.message)

    def start_system(self) -> CommandResult:
        return self._checked(["system", "start"], elevated=self._elevated_system)

    def stop_system(self) -> CommandResult:
        return self._checked(["system", "stop"], elevated=self._elevated_system)

    # ------------------------------------------------------------------
    # Runner delegation (safe boundary)
    # ------------------------------------------------------------------

    def _run(self, args: Sequence[str], *, elevated: bool = False) -> CommandResult:
        """Call the runner and ensure only our exceptions escape."""
        try:
            return self._runner.run(list(args), elevated=elevated)
        except ContainerDeckError:
            # Already one of ours — let it propagate unchanged.
            raise
        except Exception as exc:
            raise CommandFailedError(
                f"Unexpected runner error: {exc}",
                command=args,
            ) from exc

    def _checked(self, args: Sequence[str], *, elevated: bool = False) -> CommandResult:
        result = self._run(args, elevated=elevated)
        if not result.successful:
            raise self._failure(result)
        return result

    @staticmethod
    def _failure(result: CommandResult) -> CommandFailedError:
        command = " ".join(result.args)
        return CommandFailedError(
            f"Command '{command}' failed with exit code {result.code}.",
            command=result.args,
            code=result.code,
            detail=result.message,
            hint=result.message or None,
        )

    @staticmethod
    def _validate_reference(reference: str) -> str:
        """Raise :class:`InvalidReferenceError` for empty or spaced refs."""
        stripped = reference.strip()
        if not stripped:
            raise InvalidReferenceError("Image reference must not be empty.")
        if any(ch.isspace() for ch in stripped):
            raise InvalidReferenceError(
                f"Invalid image reference: {stripped!r}",
                hint="Use the form name[:tag], e.g. alpine:latest.",
            )
        return stripped
