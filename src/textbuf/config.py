"""ContextVar-based buffer configuration for textbuf.

Provides context-local configuration using Python's ContextVars (PEP 567).
A TextBuffer snapshots the active config when it is created, so constants
such as the line terminator stay fixed for the buffer's whole lifetime.

Thread Safety:
    ContextVars are thread-local by design. Each thread has independent storage,
    so no locks are needed. TextBuffer instances themselves are not thread-safe.

Usage:
    # Default config
    buf = TextBuffer()

    # Windows line endings for every buffer created in the block
    with buffer_config_context(BufferConfig(newline="\\r\\n")):
        buf = TextBuffer()
        buf.append_line("row")   # b"row\\r\\n"

    # Or pass a config explicitly
    buf = TextBuffer(config=BufferConfig(scratch_size=256))

"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from textbuf.allocator import Allocator
    from textbuf.formatting import Formatter


@dataclass(frozen=True, slots=True)
class BufferConfig:
    """Immutable buffer configuration.

    Attributes:
        newline: Line terminator written by append_line()
        scratch_size: Size of the first-pass scratch area used by append_format()
        growth_base: Smallest capacity ever allocated; growth doubles from here
        max_capacity: Largest capacity the doubling sequence may reach
        encoding: Codec used to turn str input into stored bytes
        errors: Codec error handler for encoding and decoding
        strict_capacity: Raise CapacityError/FormatError instead of
            silently abandoning the operation
        allocator: Storage allocator (None = textbuf.allocator.HeapAllocator)
        formatter: Template renderer (None = textbuf.formatting.PercentFormatter)

    """

    newline: str = "\n"
    scratch_size: int = 4096
    growth_base: int = 16
    max_capacity: int = sys.maxsize
    encoding: str = "utf-8"
    errors: str = "strict"
    strict_capacity: bool = False
    allocator: Allocator | None = None
    formatter: Formatter | None = None

    def __post_init__(self) -> None:
        if self.growth_base <= 0:
            raise ValueError(f"growth_base must be positive, got {self.growth_base}")
        if self.scratch_size < 0:
            raise ValueError(f"scratch_size must be non-negative, got {self.scratch_size}")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "BufferConfig":
        """Create BufferConfig from dictionary.

        Only includes keys that are valid BufferConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                BufferConfig attribute names.

        Returns:
            New BufferConfig instance with values from dict.

        Example:
            >>> config = BufferConfig.from_dict({
            ...     "newline": "\\r\\n",
            ...     "unknown_key": "ignored",
            ... })
            >>> config.newline
            '\\r\\n'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: BufferConfig = BufferConfig()

_buffer_config: ContextVar[BufferConfig] = ContextVar(
    "buffer_config",
    default=_DEFAULT_CONFIG,
)


def get_buffer_config() -> BufferConfig:
    """Get current buffer configuration (context-local).

    Returns:
        The active BufferConfig for this thread/context.

    """
    return _buffer_config.get()


def set_buffer_config(config: BufferConfig) -> None:
    """Set buffer configuration for current context.

    Buffers that already exist keep the config they were created with.

    Args:
        config: BufferConfig instance to use for this context.

    """
    _buffer_config.set(config)


def reset_buffer_config() -> None:
    """Reset to default configuration."""
    _buffer_config.set(_DEFAULT_CONFIG)


@contextmanager
def buffer_config_context(config: BufferConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Args:
        config: BufferConfig to use within the context.

    Yields:
        None

    Example:
        >>> with buffer_config_context(BufferConfig(newline="\\r\\n")):
        ...     buf = TextBuffer().append_line("x")
        >>> bytes(buf)
        b'x\\r\\n'

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _buffer_config.get()
    _buffer_config.set(config)
    try:
        yield
    finally:
        _buffer_config.set(previous)


__all__ = [
    "BufferConfig",
    "get_buffer_config",
    "set_buffer_config",
    "reset_buffer_config",
    "buffer_config_context",
]
