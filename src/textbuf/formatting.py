"""Bounded template rendering for TextBuffer.append_format().

The formatting capability follows the bounded-formatting contract: it
renders into caller-supplied storage, writes at most ``limit - 1`` bytes
followed by a NUL, and returns the length the full rendering *would*
have, so the caller can tell whether the output was truncated.

A negative return value reports a rendering error; nothing useful was
written and the caller abandons the append.

Example:
    >>> from textbuf.formatting import PercentFormatter
    >>> scratch = bytearray(8)
    >>> PercentFormatter().render("n=%d!", (12345,), scratch, 8)
    8
    >>> bytes(scratch)
    b'n=12345\\x00'
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from textbuf.utils.logger import get_logger

logger = get_logger(__name__)

# Byte sink accepted by Formatter.render (scratch bytearray or a view on buffer storage)
type Destination = bytearray | memoryview


@runtime_checkable
class Formatter(Protocol):
    """Protocol for template renderers.

    Implementations must be deterministic: TextBuffer may call render()
    twice with the same arguments and relies on both calls reporting the
    same length.

    """

    def render(
        self,
        template: str | bytes,
        args: tuple[Any, ...],
        dest: Destination,
        limit: int,
    ) -> int:
        """Render ``template`` with ``args`` into ``dest``.

        Args:
            template: Template text
            args: Positional arguments for the template
            dest: Writable byte storage of at least ``limit`` bytes
            limit: Maximum bytes to write, including the trailing NUL

        Returns:
            Full rendered length in bytes (excluding NUL), or a negative
            number on error.
        """
        ...


class PercentFormatter:
    """printf-style renderer built on the ``%`` operator.

    Accepts str or bytes templates. A single mapping argument enables
    named conversions (``%(name)s``). Template mismatches and encoding
    failures are reported as -1.

    Example:
        >>> dest = bytearray(64)
        >>> PercentFormatter().render("%(who)s!", ({"who": "nice"},), dest, 64)
        5
    """

    __slots__ = ("encoding", "errors")

    def __init__(self, encoding: str = "utf-8", errors: str = "strict") -> None:
        self.encoding = encoding
        self.errors = errors

    def render(
        self,
        template: str | bytes,
        args: tuple[Any, ...],
        dest: Destination,
        limit: int,
    ) -> int:
        try:
            data = self._encode(self._apply(template, args))
        except (TypeError, ValueError, KeyError) as e:
            # UnicodeEncodeError is a ValueError
            logger.debug("Rendering %r failed: %s", template, e)
            return -1

        needed = len(data)
        if limit > 0:
            count = min(needed, limit - 1)
            dest[:count] = data[:count]
            dest[count] = 0
        return needed

    @staticmethod
    def _apply(template: str | bytes, args: tuple[Any, ...]) -> str | bytes:
        if len(args) == 1 and isinstance(args[0], Mapping):
            return template % args[0]
        return template % args

    def _encode(self, rendered: str | bytes) -> bytes:
        if isinstance(rendered, str):
            return rendered.encode(self.encoding, self.errors)
        return rendered


__all__ = [
    "Destination",
    "Formatter",
    "PercentFormatter",
]
