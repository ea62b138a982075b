"""Logging setup for the CyberLens command line."""

import logging
import sys
from typing import TextIO

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Route ``cyberlens.*`` records to a single stream handler.

    Library modules only call ``logging.getLogger(__name__)``; nothing is
    emitted until an entry point calls this. Repeated calls adjust the level
    and reuse the existing handler.

    Args:
        level: Threshold for the ``cyberlens`` namespace
        fmt: Log format string
        stream: Destination, stderr by default

    Returns:
        The ``cyberlens`` package logger
    """
    logger = logging.getLogger("cyberlens")
    if not logger.handlers:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
