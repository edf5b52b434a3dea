"""Logging configuration for the ``container-deck`` console script.

Library modules only ever call ``logging.getLogger(__name__)``; handlers
are attached here, once, by the CLI entry point.  Rich's
:class:`~rich.logging.RichHandler` is used when Rich is installed,
otherwise a plain stderr handler.
"""

from __future__ import annotations

import logging

PACKAGE_LOGGER: str = "container_deck"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single handler to the package logger and set its level.

    Calling this more than once replaces the handler instead of
    stacking duplicates.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler: logging.Handler
    try:
        from rich.console import Console
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=verbose,
            show_path=verbose,
            markup=False,
            rich_tracebacks=True,
        )

    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
