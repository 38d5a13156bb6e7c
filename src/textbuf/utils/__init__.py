"""Utility modules for textbuf.

Provides:
- logger: get_logger for logging
"""

from textbuf.utils.logger import get_logger

__all__ = [
    "get_logger",
]
