"""Domain models for container-deck.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and zero
dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass


# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of one invocation of the container CLI."""

    args: tuple[str, ...]
    """Arguments passed after the binary name."""

    code: int
    """Process exit code."""

    output: str
    """Captured standard output."""

    error: str = ""
    """Captured standard error."""

    @property
    def successful(self) -> bool:
        return self.code == 0

    @property
    def message(self) -> str:
        """Best available diagnostic text: stderr, else stdout."""
        return self.error.strip() or self.output.strip()


# ---------------------------------------------------------------------------
# Tabular parsing
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ColumnSpec:
    """One column of a tabular listing, derived from the header line."""

    name: str
    """Normalized (lower camel case) field name."""

    label: str
    """Header label exactly as printed by the tool."""

    start: int
    """Offset of the column's first character."""

    end: int | None
    """Exclusive end offset, or ``None`` for the last column."""

    def slice(self, line: str) -> str:
        return line[self.start:self.end].strip()


# ---------------------------------------------------------------------------
# Typed records
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ContainerImage:
    """A row of ``container images list``."""

    name: str
    tag: str
    index_digest: str = ""
    os: str = ""
    arch: str = ""
    variant: str = ""
    size: str = ""
    created: str = ""
    manifest_digest: str = ""

    @property
    def full_name(self) -> str:
        """``name:tag``, or just ``name`` when the tag is empty."""
        return f"{self.name}:{self.tag}" if self.tag else self.name


@dataclass(frozen=True, slots=True)
class ContainerSummary:
    """A row of ``container list --all``."""

    id: str
    image: str
    os: str = ""
    arch: str = ""
    state: str = ""
    addr: str = ""


@dataclass(frozen=True, slots=True)
class ContainerOptions:
    """User-supplied options for creating a container from an image."""

    name: str | None = None
    entrypoint: str | None = None
    dns_domain: str | None = None
    forward_ssh: bool = False

    def to_args(self) -> list[str]:
        args: list[str] = []
        if self.name:
            args += ["--name", self.name]
        if self.entrypoint:
            args += ["--entrypoint", self.entrypoint]
        if self.dns_domain:
            args += ["--dns-domain", self.dns_domain]
        if self.forward_ssh:
            args.append("--ssh")
        return args


@dataclass(frozen=True, slots=True)
class SystemStatus:
    """Whether the container system service is running."""

    running: bool
    detail: str

    @property
    def label(self) -> str:
        return "Running" if self.running else "Stopped"
