"""Minimal logging utilities for textbuf.

Provides a simple get_logger function that wraps the standard library logging.
The library installs no handlers; applications decide where records go.

Example:
    >>> from textbuf.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Grew buffer to %d bytes", 64)
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "textbuf." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'textbuf.mymodule'
    """
    # Ensure textbuf prefix for consistent namespacing
    if not (name == "textbuf" or name.startswith("textbuf.")):
        name = f"textbuf.{name}"
    return logging.getLogger(name)
