"""Infrastructure: container CLI detection and platform guidance.

Locates the container binary on the system PATH and provides
installation guidance when it is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from container_deck.exceptions import ContainerCliNotFoundError


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CliStatus:
    """Result of a container CLI detection probe.

    Attributes
    ----------
    binary : str
        Name or path that was looked up.
    found : bool
        Whether the binary was located.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested installation steps for the current platform.  Empty
        when the binary is already present.
    """

    binary: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_container_cli(binary: str = "container") -> CliStatus:
    """Probe the system for *binary*.

    Returns a :class:`CliStatus` regardless of whether the binary is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(binary)

    if result is not None:
        return CliStatus(
            binary=binary,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    return CliStatus(
        binary=binary,
        found=False,
        path=None,
        install_commands=_platform_install_commands(),
    )


def require_container_cli(binary: str = "container") -> Path:
    """Locate *binary* or raise :class:`ContainerCliNotFoundError`."""
    status = detect_container_cli(binary)
    if not status.found or status.path is None:
        raise ContainerCliNotFoundError(
            f"'{binary}' is not installed or not on PATH.",
            hint=install_hint(status),
        )
    return status.path


def install_hint(status: CliStatus) -> str | None:
    """Render :attr:`CliStatus.install_commands` as a hint block."""
    if not status.install_commands:
        return None
    lines = ["Install the container CLI:"]
    lines.extend(f"  {cmd}" for cmd in status.install_commands)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_commands() -> tuple[str, ...]:
    """Return install steps appropriate for the current OS."""
    system = platform.system().lower()
    if system == "darwin":
        return (
            "brew install container",
            "or download the signed installer from "
            "https://github.com/apple/container/releases",
        )
    # The tool only ships for macOS on Apple silicon.
    return ("The container CLI requires macOS on Apple silicon.",)
