"""textbuf BuildAccumulator — opt-in profiling for buffer growth.

This module records what a TextBuffer does with its storage:
- Reallocations and the bytes they allocated
- Replace calls that assembled and adopted new storage
- append_format() calls that needed a second, in-place render

Zero overhead when disabled (get_build_accumulator() returns None).

Example:
    from textbuf import TextBuffer
    from textbuf.profiling import profiled_build

    with profiled_build() as metrics:
        buf = TextBuffer()
        for _ in range(1000):
            buf.append_char("x")

    print(metrics.summary())
    # {"total_ms": 0.4, "reallocations": 7, "bytes_allocated": 2032, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class BuildAccumulator:
    """Accumulated metrics for TextBuffer storage activity.

    Attributes:
        start_time: Profiling start timestamp.
        reallocations: Number of successful capacity increases.
        bytes_allocated: Sum of the capacities requested by those increases.
        failed_growths: Number of ensure_capacity() calls that failed.
        replace_swaps: Number of replace() calls that adopted new storage.
        format_second_passes: Number of append_format() calls rendered twice.

    """

    start_time: float = field(default_factory=perf_counter)
    reallocations: int = 0
    bytes_allocated: int = 0
    failed_growths: int = 0
    replace_swaps: int = 0
    format_second_passes: int = 0

    def record_reallocation(self, capacity: int) -> None:
        """Record a successful reallocation to ``capacity`` bytes."""
        self.reallocations += 1
        self.bytes_allocated += capacity

    def record_failed_growth(self) -> None:
        self.failed_growths += 1

    def record_replace_swap(self) -> None:
        self.replace_swaps += 1

    def record_format_second_pass(self) -> None:
        self.format_second_passes += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of build metrics.

        Returns:
            Dict with total_ms and every counter.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "reallocations": self.reallocations,
            "bytes_allocated": self.bytes_allocated,
            "failed_growths": self.failed_growths,
            "replace_swaps": self.replace_swaps,
            "format_second_passes": self.format_second_passes,
        }


# Module-level ContextVar
_accumulator: ContextVar[BuildAccumulator | None] = ContextVar(
    "build_accumulator",
    default=None,
)


def get_build_accumulator() -> BuildAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_build() -> Iterator[BuildAccumulator]:
    """Context manager for profiled buffer building.

    Creates a BuildAccumulator and makes it available via
    get_build_accumulator() for the duration of the with block.

    Yields:
        BuildAccumulator populated by every TextBuffer used in the block.

    """
    acc = BuildAccumulator()
    token: Token[BuildAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
