"""Storage allocators for TextBuffer.

An allocator grows, shrinks and releases the contiguous byte region a
TextBuffer owns. Failure is reported by returning None, and a failed
resize leaves the region it was given untouched.

Example:
    >>> from textbuf.allocator import HeapAllocator
    >>> storage = HeapAllocator().resize(None, 16)
    >>> len(storage)
    16
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Allocator(Protocol):
    """Protocol for storage allocators.

    Implementations must not mutate ``storage`` when they fail.

    """

    def resize(self, storage: bytearray | None, capacity: int) -> bytearray | None:
        """Return a region of exactly ``capacity`` bytes.

        Args:
            storage: Current region (None when nothing is allocated yet)
            capacity: Requested size in bytes

        Returns:
            Region whose first ``min(len(storage), capacity)`` bytes equal
            those of ``storage``, or None if the request cannot be met.
        """
        ...

    def release(self, storage: bytearray | None) -> None:
        """Give ``storage`` back. Must accept None."""
        ...


class HeapAllocator:
    """Default allocator backed by ``bytearray``.

    New regions are zero-filled. Growth copies into a fresh region so a
    MemoryError half way through cannot disturb the caller's storage.
    """

    __slots__ = ()

    def resize(self, storage: bytearray | None, capacity: int) -> bytearray | None:
        try:
            region = bytearray(capacity)
        except (MemoryError, OverflowError):
            return None
        if storage:
            keep = min(len(storage), capacity)
            region[:keep] = storage[:keep]
        return region

    def release(self, storage: bytearray | None) -> None:
        if storage is not None:
            del storage[:]


DEFAULT_ALLOCATOR = HeapAllocator()

__all__ = [
    "Allocator",
    "DEFAULT_ALLOCATOR",
    "HeapAllocator",
]
