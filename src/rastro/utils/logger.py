"""Minimal logging utilities for Rastro.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from rastro.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Compiling pattern")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "rastro." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'rastro.mymodule'
    """
    if not (name == "rastro" or name.startswith("rastro.")):
        name = f"rastro.{name}"
    return logging.getLogger(name)
