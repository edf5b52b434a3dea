"""Infrastructure layer — external system integration.

This layer wraps all interaction with the container binary and the
operating system.  Every raw ``OSError`` / ``subprocess`` exception must
be caught here and re-raised as a
:class:`~container_deck.exceptions.ContainerDeckError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from container_deck.infra.cli_detector import CliStatus, detect_container_cli, require_container_cli
from container_deck.infra.process_runner import SubprocessRunner

__all__: list[str] = [
    "CliStatus",
    "SubprocessRunner",
    "detect_container_cli",
    "require_container_cli",
]
