"""Shared fixtures for textbuf tests."""

from __future__ import annotations

import pytest

from textbuf import BufferConfig, TextBuffer
from textbuf.allocator import HeapAllocator


class BudgetAllocator(HeapAllocator):
    """HeapAllocator that refuses any region larger than ``budget`` bytes."""

    __slots__ = ("budget", "requests")

    def __init__(self, budget: int) -> None:
        self.budget = budget
        self.requests: list[int] = []

    def resize(self, storage: bytearray | None, capacity: int) -> bytearray | None:
        self.requests.append(capacity)
        if capacity > self.budget:
            return None
        return super().resize(storage, capacity)


@pytest.fixture
def budget_allocator() -> BudgetAllocator:
    return BudgetAllocator(budget=64)


@pytest.fixture
def tight_buffer(budget_allocator: BudgetAllocator) -> TextBuffer:
    """Empty buffer that cannot grow past 64 bytes."""
    return TextBuffer(config=BufferConfig(allocator=budget_allocator))


def assert_terminated(buf: TextBuffer) -> None:
    """Check the storage invariants every public operation must keep."""
    assert buf.length <= buf.capacity
    raw = buf.raw()
    if buf.capacity == 0:
        assert buf.value is None
        assert buf.length == 0
    else:
        assert len(raw) == buf.capacity
        assert raw[buf.length] == 0
