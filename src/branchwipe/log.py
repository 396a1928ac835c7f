"""Logging configuration for branchwipe."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "branchwipe"


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the branchwipe root logger."""
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(level: str = "WARNING", console: Optional[Console] = None) -> logging.Logger:
    """Configure logging for branchwipe.

    Calling this again replaces the handler installed by a previous call.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        console: Console the handler writes to, stderr by default
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(numeric_level)

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=False,
    )
    handler.setLevel(numeric_level)
    logger.addHandler(handler)

    # Keep our records out of the root logger
    logger.propagate = False
    return logger
