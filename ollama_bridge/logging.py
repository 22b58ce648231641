"""Logging setup for ollama-bridge.

The library itself only emits records under the ``ollama_bridge`` logger and
stays silent until an application (or the CLI) calls :func:`setup_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER = "ollama_bridge"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

BRIEF_FORMAT = "%(levelname)-8s %(message)s"
DEBUG_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s"

logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def resolve_level(level: str = "INFO", verbose: int = 0, quiet: bool = False) -> int:
    """Map the configured level and CLI verbosity flags to a logging level.

    ``quiet`` wins over everything; each ``-v`` lowers the threshold one step
    below the configured level, bottoming out at DEBUG.
    """
    if quiet:
        return logging.ERROR
    base = LEVELS.get(level.upper(), logging.INFO)
    return max(logging.DEBUG, base - 10 * verbose)


def setup_logging(
    level: str = "INFO",
    verbose: int = 0,
    quiet: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a single stderr handler to the ``ollama_bridge`` logger.

    Model output is printed on stdout, so diagnostics never share it. Calling
    this again replaces the previous handler instead of stacking another one.
    """
    effective_level = resolve_level(level, verbose, quiet)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(effective_level)
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(effective_level)
    if effective_level <= logging.DEBUG:
        handler.setFormatter(logging.Formatter(DEBUG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    else:
        handler.setFormatter(logging.Formatter(BRIEF_FORMAT))
    logger.addHandler(handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``ollama_bridge`` or one of its children, e.g. ``get_logger("platform")``."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER}.{name}")
    return logging.getLogger(ROOT_LOGGER)
