"""Custom exception hierarchy for container-deck.

All exceptions that cross layer boundaries must inherit from
:class:`ContainerDeckError`.  Raw ``OSError`` / ``subprocess`` /
``json`` exceptions must NEVER propagate beyond the layer that
produced them — they are caught and re-raised as a typed subclass
defined here.

Hierarchy
---------
ContainerDeckError
├── CommandFailedError
├── InvalidOutputFormatError
├── RecordFieldError
├── InvalidReferenceError
├── ConfigurationError
└── EnvironmentError
    └── ContainerCliNotFoundError
"""

from __future__ import annotations

from collections.abc import Sequence


class ContainerDeckError(Exception):
    """Base exception for all container-deck errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command execution -----------------------------------------------------

class CommandFailedError(ContainerDeckError):
    """Raised when the upstream command did not complete successfully.

    The captured error text is kept verbatim in :attr:`detail` so the
    presentation layer can show exactly what the tool reported.
    """

    def __init__(
        self,
        message: str,
        *,
        command: Sequence[str] = (),
        code: int | None = None,
        detail: str = "",
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.command: tuple[str, ...] = tuple(command)
        self.code: int | None = code
        self.detail: str = detail


# --- Output parsing --------------------------------------------------------

class InvalidOutputFormatError(ContainerDeckError):
    """Raised when output is empty or has no discernible header line."""

    def __init__(
        self,
        message: str,
        *,
        detail: str = "",
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.detail: str = detail


class RecordFieldError(ContainerDeckError):
    """Raised when a parsed row lacks a field its record schema requires."""


# --- User input ------------------------------------------------------------

class InvalidReferenceError(ContainerDeckError):
    """Raised when an image reference is empty or malformed."""


# --- Configuration ---------------------------------------------------------

class ConfigurationError(ContainerDeckError):
    """Raised when an environment setting holds an unusable value."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(ContainerDeckError):
    """Raised when a required runtime dependency is not available."""


class ContainerCliNotFoundError(EnvironmentError):
    """Raised when the ``container`` binary cannot be located on PATH."""
