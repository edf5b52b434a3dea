"""Shared pytest fixtures and configuration for the container-deck test suite.

Guidelines
----------
* The real ``container`` binary is never executed.
* ``subprocess`` / ``shutil.which`` are mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state or environment variables.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from container_deck.cli.logging_setup import PACKAGE_LOGGER
from container_deck.config import ENV_PREFIX


@pytest.fixture(autouse=True)
def _clean_package_logger() -> Iterator[None]:
    """Undo any handler/level the CLI entry point installed."""
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Hide developer-machine settings from every test."""
    import os

    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
