"""
Logging configuration for secretgate.

Log records go to stderr so that stdout carries only the report.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(debug: bool = False) -> logging.Logger:
    """
    Configure the ``secretgate`` logger with a rich handler.

    Args:
        debug: Enable DEBUG level logging (WARNING otherwise)

    Returns:
        Configured logger instance for secretgate
    """
    level = logging.DEBUG if debug else logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=debug,
        show_path=debug,
    )

    logger = logging.getLogger("secretgate")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
