"""Logging configuration for the diskscope command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: bool = False, console: Console | None = None) -> None:
    """Route diskscope logs through rich; DEBUG when verbose, else WARNING."""
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger("diskscope")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
