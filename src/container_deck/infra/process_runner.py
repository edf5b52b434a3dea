"""``subprocess``-backed implementation of :class:`~container_deck.core.protocols.CommandRunner`.

This module is the **only** place in the codebase that spawns
processes.  ``OSError`` and ``subprocess`` exceptions are caught here
and re-raised as typed
:class:`~container_deck.exceptions.ContainerDeckError` subclasses —
nothing raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from container_deck.core.models import CommandResult
from container_deck.exceptions import CommandFailedError, ContainerCliNotFoundError
from container_deck.infra.cli_detector import detect_container_cli, install_hint

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Concrete :class:`CommandRunner` that runs one process per call.

    Usage::

        runner = SubprocessRunner("container")
        result = runner.run(["images", "list"])

    This class satisfies the
    :class:`~container_deck.core.protocols.CommandRunner` protocol
    structurally — no explicit inheritance required.
    """

    _ELEVATE: tuple[str, ...] = ("sudo", "-n")

    def __init__(self, binary: str = "container", *, timeout: float = 120.0) -> None:
        self._binary: str = binary
        self._timeout: float = timeout

    @property
    def binary(self) -> str:
        return self._binary

    def build_argv(self, args: Sequence[str], *, elevated: bool = False) -> list[str]:
        argv = [self._binary, *args]
        if elevated:
            argv = [*self._ELEVATE, *argv]
        return argv

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def run(self, args: Sequence[str], *, elevated: bool = False) -> CommandResult:
        """Run the binary with *args* and capture its output.

        Raises
        ------
        ContainerCliNotFoundError
            When the binary (or ``sudo``) cannot be executed.
        CommandFailedError
            When the process times out or cannot be started.
        """
        argv = self.build_argv(args, elevated=elevated)
        logger.debug("Running %s", " ".join(argv))

        try:
            completed = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self._timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ContainerCliNotFoundError(
                f"'{argv[0]}' is not installed or not on PATH.",
                hint=install_hint(detect_container_cli(self._binary)),
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise CommandFailedError(
                f"'{' '.join(argv)}' timed out after {self._timeout:g}s.",
                command=argv,
                hint="Raise CONTAINER_DECK_TIMEOUT if the service is slow to respond.",
            ) from exc
        except OSError as exc:
            raise CommandFailedError(
                f"Could not run '{' '.join(argv)}': {exc}",
                command=argv,
            ) from exc

        result = CommandResult(
            args=tuple(args),
            code=completed.returncode,
            output=completed.stdout or "",
            error=completed.stderr or "",
        )
        if not result.successful:
            logger.warning(
                "'%s' failed: [%d] %s",
                " ".join(argv),
                result.code,
                result.error.strip(),
            )
        return result
