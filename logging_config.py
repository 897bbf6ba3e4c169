"""Loguru sink configuration."""

import sys

from loguru import logger

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {name}: {message}"


def configure_logging(level: str = "WARNING") -> None:
    """Replace loguru's default sink with a single stderr sink.

    Call once at start-up; calling again swaps the sink instead of adding
    a duplicate.
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
