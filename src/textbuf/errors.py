"""Exception classes for textbuf.

Content operations on a TextBuffer never raise by default: growth and
formatting failures abandon the operation and leave the buffer unchanged.
These exceptions are raised only when a buffer runs with
``strict_capacity=True`` (see textbuf.config.BufferConfig).
"""

from __future__ import annotations


class TextBufError(Exception):
    """Base exception for all textbuf errors.
    
    Subclass this for specific error categories.
    """

    pass


class CapacityError(TextBufError):
    """Storage could not grow to the requested capacity.
    
    Raised for allocator failures and for requests the doubling
    sequence cannot reach without passing ``max_capacity``.
    """

    def __init__(self, requested: int, capacity: int, reason: str) -> None:
        """Initialize capacity error.
        
        Args:
            requested: Minimum capacity that was asked for
            capacity: Capacity the buffer still has
            reason: Short description of why growth failed
        """
        self.requested = requested
        self.capacity = capacity
        self.reason = reason
        super().__init__(
            f"Cannot grow buffer to {requested} bytes (capacity {capacity}): {reason}"
        )


class FormatError(TextBufError):
    """The formatting capability could not render a template."""

    def __init__(self, template: str | bytes, message: str) -> None:
        self.template = template
        super().__init__(f"Cannot render template {template!r}: {message}")
