"""Runtime settings read from the process environment.

Only a handful of knobs exist, so settings are a frozen dataclass built
from an explicit mapping (``os.environ`` by default).  Passing the
mapping in keeps tests free of global state.

Variables
---------
``CONTAINER_DECK_BINARY``
    Name or path of the container CLI.  Default ``container``.
``CONTAINER_DECK_TIMEOUT``
    Per-command timeout in seconds.  Default ``120``.
``CONTAINER_DECK_ELEVATED_SYSTEM``
    When truthy, ``system start`` / ``system stop`` run through sudo.
``CONTAINER_DECK_HEADER_GAP``
    Minimum whitespace run separating header labels (2 or 3).
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from container_deck.exceptions import ConfigurationError

ENV_PREFIX: str = "CONTAINER_DECK_"

_TRUTHY: frozenset[str] = frozenset({"1", "true", "yes", "on"})
_FALSY: frozenset[str] = frozenset({"", "0", "false", "no", "off"})
_ALLOWED_GAPS: tuple[int, ...] = (2, 3)


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved configuration for one CLI invocation."""

    binary: str = "container"
    """Executable used for every command."""

    timeout: float = 120.0
    """Seconds before a running command is abandoned."""

    elevated_system: bool = False
    """Run service start/stop with elevated privilege."""

    header_gap: int = 2
    """Whitespace run length that separates column labels."""


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ConfigurationError(
        f"{name} must be a boolean, got {raw!r}.",
        hint="Use one of: 1, 0, true, false, yes, no.",
    )


def _parse_timeout(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be a number of seconds, got {raw!r}.",
        ) from exc
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive finite number, got {raw!r}.")
    return value


def _parse_gap(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}.",
        ) from exc
    if value not in _ALLOWED_GAPS:
        raise ConfigurationError(
            f"{name} must be 2 or 3, got {value}.",
            hint="Use 3 only when the tool pads columns with wide gutters.",
        )
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from *environ* (``os.environ`` when ``None``).

    Raises
    ------
    ConfigurationError
        When any variable holds a value that cannot be interpreted.
    """
    env = os.environ if environ is None else environ
    defaults = Settings()

    binary = env.get(f"{ENV_PREFIX}BINARY", "").strip() or defaults.binary

    raw_timeout = env.get(f"{ENV_PREFIX}TIMEOUT")
    timeout = (
        _parse_timeout(f"{ENV_PREFIX}TIMEOUT", raw_timeout)
        if raw_timeout is not None
        else defaults.timeout
    )

    raw_elevated = env.get(f"{ENV_PREFIX}ELEVATED_SYSTEM")
    elevated = (
        _parse_bool(f"{ENV_PREFIX}ELEVATED_SYSTEM", raw_elevated)
        if raw_elevated is not None
        else defaults.elevated_system
    )

    raw_gap = env.get(f"{ENV_PREFIX}HEADER_GAP")
    gap = (
        _parse_gap(f"{ENV_PREFIX}HEADER_GAP", raw_gap)
        if raw_gap is not None
        else defaults.header_gap
    )

    return Settings(
        binary=binary,
        timeout=timeout,
        elevated_system=elevated,
        header_gap=gap,
    )
