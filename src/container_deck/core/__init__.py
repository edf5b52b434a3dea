"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No ``subprocess`` or filesystem access.
* No imports from ``cli`` or ``infra``.
* Parsing functions are fully typed and deterministic.
"""

from container_deck.core.container_service import ContainerService
from container_deck.core.models import (
    ColumnSpec,
    CommandResult,
    ContainerImage,
    ContainerOptions,
    ContainerSummary,
    SystemStatus,
)
from container_deck.core.protocols import CommandRunner
from container_deck.core.table_parser import camelize, parse_header, parse_table

__all__: list[str] = [
    "ColumnSpec",
    "CommandResult",
    "CommandRunner",
    "ContainerImage",
    "ContainerOptions",
    "ContainerService",
    "ContainerSummary",
    "SystemStatus",
    "camelize",
    "parse_header",
    "parse_table",
]
