"""Logging configuration for the html-embed CLI."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_LOGGER_NAME = "html_embed"


def configure_logging(*, verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Route the html_embed logger hierarchy to a rich console handler.

    Verbose runs log diagnostics at DEBUG; otherwise only warnings (skipped
    resources) and errors are shown.
    """

    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated invocations (tests, CliRunner) don't duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console,
        level=level,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["configure_logging"]
