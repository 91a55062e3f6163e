"""Structured logging configuration for the tag engine."""

from __future__ import annotations

import logging
import sys


def setup_logging(
    level: int | str = logging.INFO,
    module_name: str = "src",
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Library modules log through ``logging.getLogger(__name__)``, so the
    default ``"src"`` logger catches every module in the project.

    Args:
        level: Logging level (default INFO). Level names are accepted.
        module_name: Name for the logger instance.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
