"""
textbuf — Growable text buffers with in-place editing

A NUL-terminated byte buffer that grows geometrically, so text built piece
by piece costs amortized O(1) per byte. Content can be appended, formatted,
inserted, removed and substring-replaced in place. Zero runtime dependencies.

Quick Start:
    >>> from textbuf import TextBuffer
    >>> buf = TextBuffer()
    >>> buf.append("Some content...").append_line(" More content.")
    >>> buf.append_format("Some number: %d and a string: \\"%s\\".\\n", 69, "nice")
    >>> buf.insert(0, "First! ")
    >>> print(buf)
    First! Some content... More content.
    Some number: 69 and a string: "nice".

Editing:
    >>> buf = TextBuffer().append("banana")
    >>> buf.replace("a", "XY").text
    'bXYnXYnXY'
    >>> buf.remove(3, 100).text
    'bXY'

Configuration:
    >>> from textbuf import BufferConfig, buffer_config_context
    >>> with buffer_config_context(BufferConfig(newline="\\r\\n")):
    ...     crlf = TextBuffer().append_line("row")
    >>> bytes(crlf)
    b'row\\r\\n'

Installation:
    pip install textbuf              # Core library (zero deps)
    pip install textbuf[test]        # + pytest and Hypothesis for the test suite
"""

from textbuf.allocator import Allocator, HeapAllocator
from textbuf.buffer import TextBuffer
from textbuf.config import (
    BufferConfig,
    buffer_config_context,
    get_buffer_config,
    reset_buffer_config,
    set_buffer_config,
)
from textbuf.errors import CapacityError, FormatError, TextBufError
from textbuf.formatting import Formatter, PercentFormatter
from textbuf.profiling import BuildAccumulator, get_build_accumulator, profiled_build

__version__ = "0.1.0"


def build(*parts: str | bytes | None, config: BufferConfig | None = None) -> TextBuffer:
    """Create a buffer holding the concatenation of ``parts``.

    Args:
        *parts: Pieces to append in order (None entries are skipped)
        config: Configuration (None = the active context config)

    Returns:
        New TextBuffer

    Example:
        >>> build("a", None, "b", b"c").text
        'abc'

    """
    buf = TextBuffer(config=config)
    for part in parts:
        buf.append(part)
    return buf


__all__ = [
    # Core
    "TextBuffer",
    "build",
    # Configuration
    "BufferConfig",
    "buffer_config_context",
    "get_buffer_config",
    "reset_buffer_config",
    "set_buffer_config",
    # Capabilities
    "Allocator",
    "Formatter",
    "HeapAllocator",
    "PercentFormatter",
    # Errors
    "CapacityError",
    "FormatError",
    "TextBufError",
    # Profiling
    "BuildAccumulator",
    "get_build_accumulator",
    "profiled_build",
    "__version__",
]
