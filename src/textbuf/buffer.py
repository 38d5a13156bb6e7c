"""TextBuffer: a growable, NUL-terminated byte buffer for building text.

Appends land in pre-allocated storage that grows geometrically (16, 32,
64, ...), so building a string piece by piece costs amortized O(1) per
byte instead of the O(n²) of repeated concatenation. Unlike a plain
list-and-join builder, the buffer can also be edited in place: insert,
remove and substring replace all work on the stored bytes.

Storage model:
    ``length`` counts content bytes; ``capacity`` counts allocated bytes.
    Whenever storage exists, the byte at ``length`` is NUL, so the
    storage always holds a valid C-style string. Capacity never shrinks
    except through destroy().

Offsets:
    All indices and lengths are byte offsets into the encoded storage.
    ``str`` input is encoded with the configured codec (UTF-8 by default).

Failure model:
    When storage cannot grow, the operation is abandoned and the buffer
    keeps its previous content. Nothing is raised unless the buffer was
    created with ``strict_capacity=True``.

Thread Safety:
    None. A TextBuffer belongs to one caller at a time.

"""

from __future__ import annotations

from collections.abc import Buffer
from typing import Any

from textbuf.allocator import DEFAULT_ALLOCATOR
from textbuf.config import BufferConfig, get_buffer_config
from textbuf.errors import CapacityError, FormatError
from textbuf.formatting import PercentFormatter
from textbuf.profiling import get_build_accumulator
from textbuf.utils.logger import get_logger

logger = get_logger(__name__)

type TextInput = str | Buffer | TextBuffer | None


class TextBuffer:
    """Growable text buffer with in-place editing.

    Usage:
            >>> buf = TextBuffer()
            >>> buf.append("Some content...").append_line(" More content.")
            >>> buf.append_format("Some number: %d\\n", 69)
            >>> buf.insert(0, "First! ")
            >>> str(buf)
            'First! Some content... More content.\\nSome number: 69\\n'
            >>> len(buf), buf.capacity
            (53, 64)

    Mutating methods return self for chaining; ensure_capacity() returns
    a bool so callers can detect growth failure.

    """

    __slots__ = ("_value", "_length", "_capacity", "_config", "_allocator", "_formatter")

    def __init__(self, capacity: int = 0, *, config: BufferConfig | None = None) -> None:
        """Initialize an empty buffer.

        Args:
            capacity: Bytes to reserve up front (0 = allocate lazily)
            config: Configuration (None = the active context config)
        """
        self._config = config if config is not None else get_buffer_config()
        self._allocator = self._config.allocator or DEFAULT_ALLOCATOR
        self._formatter = self._config.formatter or PercentFormatter(
            self._config.encoding, self._config.errors
        )
        self.init()
        if capacity > 0:
            self.ensure_capacity(capacity)

    @classmethod
    def with_capacity(cls, capacity: int, *, config: BufferConfig | None = None) -> TextBuffer:
        """Create an empty buffer with at least ``capacity`` bytes reserved.

        Reservation failure is not an error: the buffer is simply left
        unallocated. Check ``capacity`` to confirm the reservation.
        """
        return cls(capacity, config=config)

    # -- Lifecycle ---------------------------------------------------------

    def init(self) -> TextBuffer:
        """Reset to the empty, unallocated state without releasing storage.

        Use after destroy() to make the intent of reuse explicit.
        """
        self._value: bytearray | None = None
        self._length = 0
        self._capacity = 0
        return self

    def destroy(self) -> None:
        """Release the owned storage. Safe on an unallocated buffer."""
        self._allocator.release(self._value)
        self.init()

    def clear(self) -> TextBuffer:
        """Drop the content but keep the storage for reuse."""
        if self._value is not None:
            self._value[0] = 0
        self._length = 0
        return self

    # -- Capacity ----------------------------------------------------------

    def ensure_capacity(self, min_capacity: int) -> bool:
        """Grow storage so it holds at least ``min_capacity`` bytes.

        The new capacity is the smallest ``growth_base * 2**k`` that is
        ``>= min_capacity``. Content is preserved.

        Args:
            min_capacity: Required capacity in bytes, terminator included

        Returns:
            True if capacity is now sufficient, False if growth failed
            (the buffer is unchanged in that case)

        Raises:
            CapacityError: On failure, only when ``strict_capacity`` is set
        """
        if self._capacity >= min_capacity:
            return True

        capacity = self._next_capacity(min_capacity)
        if capacity is None:
            return self._growth_failed(min_capacity, "exceeds max_capacity")

        storage = self._allocator.resize(self._value, capacity)
        if storage is None:
            return self._growth_failed(min_capacity, "allocation failed")

        storage[self._length] = 0
        self._value = storage
        self._capacity = capacity
        logger.debug("Grew buffer to %d bytes (requested %d)", capacity, min_capacity)

        acc = get_build_accumulator()
        if acc is not None:
            acc.record_reallocation(capacity)
        return True

    def _next_capacity(self, min_capacity: int) -> int | None:
        limit = self._config.max_capacity
        capacity = self._config.growth_base
        while capacity < min_capacity and capacity <= limit:
            capacity *= 2
        if capacity > limit:
            return None
        return capacity

    def _growth_failed(self, min_capacity: int, reason: str) -> bool:
        logger.debug(
            "Cannot grow buffer from %d to %d bytes: %s", self._capacity, min_capacity, reason
        )
        acc = get_build_accumulator()
        if acc is not None:
            acc.record_failed_growth()
        if self._config.strict_capacity:
            raise CapacityError(min_capacity, self._capacity, reason)
        return False

    # -- Append family -----------------------------------------------------

    def append(self, text: TextInput, length: int | None = None) -> TextBuffer:
        """Append text at the end.

        Args:
            text: str, bytes-like, another TextBuffer, or None (no-op)
            length: Take exactly this many leading bytes of ``text``
                (None = up to the first NUL, like a C string)

        Returns:
            self for method chaining
        """
        data = self._coerce(text, length)
        if data:
            self._append_bytes(data)
        return self

    def append_line(self, text: TextInput = None) -> TextBuffer:
        """Append text followed by the configured newline.

        The newline is written even when ``text`` is empty or None.
        """
        self.append(text)
        return self.append(self._config.newline)

    def append_char(self, char: str | bytes | int) -> TextBuffer:
        """Append a single character.

        Args:
            char: One-character str, one-byte bytes, or a byte value 0-255.
                NUL is ignored.

        Returns:
            self for method chaining
        """
        if isinstance(char, int):
            if not 0 <= char <= 0xFF:
                raise ValueError(f"Byte value out of range: {char}")
            data = bytes((char,))
        elif len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        elif isinstance(char, str):
            data = char.encode(self._config.encoding, self._config.errors)
        else:
            data = bytes(char)

        if data != b"\x00":
            self._append_bytes(data)
        return self

    def append_format(self, template: str | bytes, *args: Any) -> TextBuffer:
        """Append ``template % args``.

        Example:
            >>> TextBuffer().append_format("%d. %s", 1, "item").text
            '1. item'
        """
        return self.append_format_args(template, args)

    def append_format_args(self, template: str | bytes, args: tuple[Any, ...]) -> TextBuffer:
        """Append a rendered template whose arguments are already packed.

        Output that fits the scratch area is rendered once and copied in.
        Longer output is rendered a second time straight into the tail of
        the buffer's storage after growing it to the reported length.

        Returns:
            self for method chaining
        """
        limit = self._config.scratch_size
        scratch = bytearray(limit)
        needed = self._formatter.render(template, args, scratch, limit)
        if needed < 0:
            return self._format_failed(template)

        if needed < limit:
            self._append_bytes(scratch[:needed])
            return self

        start = self._length
        end = start + needed
        if not self.ensure_capacity(end + 1):
            return self

        with memoryview(self._value) as view, view[start : end + 1] as tail:
            written = self._formatter.render(template, args, tail, needed + 1)
        if written < 0:
            self._value[start] = 0
            return self._format_failed(template)

        self._length = end
        self._value[end] = 0

        acc = get_build_accumulator()
        if acc is not None:
            acc.record_format_second_pass()
        return self

    def _format_failed(self, template: str | bytes) -> TextBuffer:
        logger.debug("Abandoned formatted append of %r", template)
        if self._config.strict_capacity:
            raise FormatError(template, "formatter reported an error")
        return self

    # -- Insert / remove ---------------------------------------------------

    def insert(self, index: int, text: TextInput, length: int | None = None) -> TextBuffer:
        """Insert text before byte offset ``index``.

        An index at or past the end appends instead.

        Args:
            index: Byte offset to insert at
            text: str, bytes-like, another TextBuffer, or None (no-op)
            length: Explicit byte count, as for append()

        Returns:
            self for method chaining
        """
        _check_offset("index", index)
        data = self._coerce(text, length)
        if not data:
            return self
        if index >= self._length:
            self._append_bytes(data)
            return self

        size = len(data)
        if not self.ensure_capacity(self._length + size + 1):
            return self

        value = self._value
        # Slicing copies, so the shift is safe although the ranges overlap
        value[index + size : self._length + size] = value[index : self._length]
        value[index : index + size] = data
        self._length += size
        value[self._length] = 0
        return self

    def remove(self, index: int, length: int) -> TextBuffer:
        """Delete ``length`` bytes starting at ``index``.

        A range running past the end truncates at ``index``.

        Returns:
            self for method chaining
        """
        _check_offset("index", index)
        _check_offset("length", length)
        if index >= self._length or length == 0:
            return self

        value = self._value
        if index + length < self._length:
            value[index : self._length - length] = value[index + length : self._length]
            self._length -= length
        else:
            self._length = index
        value[self._length] = 0
        return self

    # -- Replace -----------------------------------------------------------

    def replace(self, old: TextInput, new: TextInput) -> TextBuffer:
        """Replace every non-overlapping occurrence of ``old`` with ``new``.

        Matches are found left to right and each search resumes after the
        matched span of the content being searched, so ``new`` is never itself
        searched: replacing "a" with "aa" doubles each "a" exactly once.

        Equal-length replacements overwrite in place. Otherwise the result
        is assembled in fresh storage (reserved at the current capacity)
        which the buffer then adopts.

        Returns:
            self for method chaining
        """
        if self._length == 0 or old is None or new is None:
            return self

        old_data = self._coerce(old, None)
        new_data = self._coerce(new, None)
        if not old_data:
            return self

        value = self._value
        end = self._length
        old_size = len(old_data)
        match = value.find(old_data, 0, end)
        if match < 0:
            return self

        if old_size == len(new_data):
            while match >= 0:
                value[match : match + old_size] = new_data
                match = value.find(old_data, match + old_size, end)
            return self

        result = TextBuffer(self._capacity, config=self._config)
        if result._capacity < self._capacity:
            return self

        start = 0
        while match >= 0:
            if not (
                result._append_bytes(value[start:match]) and result._append_bytes(new_data)
            ):
                result.destroy()
                return self
            start = match + old_size
            match = value.find(old_data, start, end)
        if start < end and not result._append_bytes(value[start:end]):
            result.destroy()
            return self

        self._adopt(result)

        acc = get_build_accumulator()
        if acc is not None:
            acc.record_replace_swap()
        return self

    def _adopt(self, other: TextBuffer) -> None:
        """Take ownership of ``other``'s storage, releasing our own."""
        self._allocator.release(self._value)
        self._value = other._value
        self._length = other._length
        self._capacity = other._capacity
        other.init()

    # -- Internals ---------------------------------------------------------

    def _append_bytes(self, data: bytes | bytearray) -> bool:
        size = len(data)
        if size == 0:
            return True
        if not self.ensure_capacity(self._length + size + 1):
            return False
        start = self._length
        self._value[start : start + size] = data
        self._length = start + size
        self._value[self._length] = 0
        return True

    def _coerce(self, text: TextInput, length: int | None) -> bytes | None:
        """Turn caller input into the bytes to store (None = no input)."""
        if text is None:
            return None
        if isinstance(text, str):
            data = text.encode(self._config.encoding, self._config.errors)
        elif isinstance(text, TextBuffer):
            data = text.value or b""
        elif isinstance(text, Buffer):
            data = bytes(text)
        else:
            raise TypeError(f"Expected str, bytes-like or TextBuffer, got {type(text).__name__}")

        if length is None:
            nul = data.find(0)
            return data if nul < 0 else data[:nul]
        _check_offset("length", length)
        return data[:length]

    # -- Accessors ---------------------------------------------------------

    @property
    def length(self) -> int:
        """Content length in bytes (terminator excluded)."""
        return self._length

    @property
    def capacity(self) -> int:
        """Allocated size in bytes (terminator included)."""
        return self._capacity

    @property
    def config(self) -> BufferConfig:
        return self._config

    @property
    def value(self) -> bytes | None:
        """Copy of the content bytes, or None when nothing is allocated."""
        if self._value is None:
            return None
        return bytes(self._value[: self._length])

    @property
    def text(self) -> str:
        """Content decoded with the configured codec."""
        if self._value is None:
            return ""
        return self._value[: self._length].decode(self._config.encoding, self._config.errors)

    def raw(self) -> bytes:
        """Copy of the whole storage, terminator and spare capacity included."""
        return bytes(self._value) if self._value is not None else b""

    def __len__(self) -> int:
        return self._length

    def __bool__(self) -> bool:
        return self._length > 0

    def __bytes__(self) -> bytes:
        return self.value or b""

    def __str__(self) -> str:
        # Byte offsets can split a multibyte sequence; printing must not fail
        if self._value is None:
            return ""
        return self._value[: self._length].decode(self._config.encoding, "replace")

    def __repr__(self) -> str:
        return f"<TextBuffer length={self._length} capacity={self._capacity} {self.value!r}>"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextBuffer):
            return bytes(self) == bytes(other)
        if isinstance(other, str):
            try:
                encoded = other.encode(self._config.encoding, self._config.errors)
            except UnicodeEncodeError:
                return False
            return bytes(self) == encoded
        if isinstance(other, (bytes, bytearray, memoryview)):
            return bytes(self) == bytes(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]


def _check_offset(name: str, offset: int) -> None:
    if offset < 0:
        raise ValueError(f"{name} must be non-negative, got {offset}")
