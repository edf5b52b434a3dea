"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from container_deck.core.models import CommandResult


class CommandRunner(Protocol):
    """Contract for executing the container CLI.

    Any object that implements :meth:`run` with the correct signature
    satisfies this protocol structurally (no explicit inheritance
    required).
    """

    def run(self, args: Sequence[str], *, elevated: bool = False) -> CommandResult:
        """Run the container CLI with *args* and wait for it to exit.

        A non-zero exit code is reported through
        :attr:`CommandResult.code`, not raised — callers decide whether
        a failure is fatal.

        Parameters
        ----------
        args:
            Arguments placed after the binary name
            (e.g. ``["images", "list"]``).
        elevated:
            Run with elevated privilege (service start/stop).

        Raises
        ------
        ContainerCliNotFoundError
            When the binary cannot be executed at all.
        CommandFailedError
            When the process could not be run to completion
            (e.g. timeout).
        """
        ...  # pragma: no cover
