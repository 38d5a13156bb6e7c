"""Tests for TextBuffer construction, capacity control and accessors."""

import pytest

from conftest import assert_terminated
from textbuf import BufferConfig, TextBuffer, build


class TestConstruction:
    """Empty and pre-sized buffers."""

    def test_empty_buffer_has_no_storage(self) -> None:
        buf = TextBuffer()
        assert buf.length == 0
        assert buf.capacity == 0
        assert buf.value is None
        assert buf.raw() == b""
        assert_terminated(buf)

    def test_reserved_capacity_rounds_up_to_growth_step(self) -> None:
        buf = TextBuffer.with_capacity(100)
        assert buf.capacity == 128
        assert buf.length == 0
        assert buf.value == b""
        assert_terminated(buf)

    def test_capacity_keyword_matches_classmethod(self) -> None:
        assert TextBuffer(capacity=17).capacity == TextBuffer.with_capacity(17).capacity == 32

    def test_zero_capacity_allocates_nothing(self) -> None:
        assert TextBuffer.with_capacity(0).value is None

    def test_small_request_gets_base_capacity(self) -> None:
        assert TextBuffer.with_capacity(1).capacity == 16

    def test_failed_reservation_leaves_empty_buffer(self, budget_allocator) -> None:
        """Construction never raises; callers check capacity."""
        buf = TextBuffer.with_capacity(1000, config=BufferConfig(allocator=budget_allocator))
        assert buf.capacity == 0
        assert buf.value is None
        assert_terminated(buf)

    def test_build_helper_concatenates(self) -> None:
        assert build("a", None, "b", b"c").text == "abc"
        assert build().value is None


class TestEnsureCapacity:
    """Geometric growth from the base capacity."""

    @pytest.mark.parametrize(
        ("requested", "expected"),
        [(1, 16), (16, 16), (17, 32), (33, 64), (1000, 1024), (4097, 8192)],
    )
    def test_growth_sequence(self, requested: int, expected: int) -> None:
        buf = TextBuffer()
        assert buf.ensure_capacity(requested) is True
        assert buf.capacity == expected

    def test_sufficient_capacity_is_noop(self) -> None:
        buf = TextBuffer.with_capacity(64)
        assert buf.ensure_capacity(10) is True
        assert buf.capacity == 64

    def test_growth_preserves_content(self) -> None:
        buf = TextBuffer().append("hello")
        assert buf.ensure_capacity(500)
        assert buf.capacity == 512
        assert buf.text == "hello"
        assert_terminated(buf)

    def test_ensure_capacity_on_empty_buffer_terminates(self) -> None:
        buf = TextBuffer()
        buf.ensure_capacity(5)
        assert buf.value == b""
        assert_terminated(buf)

    def test_custom_growth_base(self) -> None:
        buf = TextBuffer(config=BufferConfig(growth_base=10))
        buf.ensure_capacity(11)
        assert buf.capacity == 20

    def test_overflow_fails_without_growth(self) -> None:
        """Doubling past max_capacity is treated like allocation failure."""
        buf = TextBuffer(config=BufferConfig(max_capacity=100)).append("abc")
        assert buf.ensure_capacity(101) is False
        assert buf.capacity == 16
        assert buf.text == "abc"

    def test_overflow_below_limit_still_grows(self) -> None:
        buf = TextBuffer(config=BufferConfig(max_capacity=100))
        assert buf.ensure_capacity(64) is True
        assert buf.capacity == 64

    def test_allocation_failure_keeps_prior_state(self, tight_buffer: TextBuffer) -> None:
        tight_buffer.append("x" * 40)
        before = tight_buffer.raw()
        assert tight_buffer.ensure_capacity(65) is False
        assert tight_buffer.capacity == 64
        assert tight_buffer.raw() == before
        assert_terminated(tight_buffer)

    def test_capacity_never_shrinks_on_edits(self) -> None:
        buf = TextBuffer().append("x" * 100)
        capacity = buf.capacity
        buf.remove(0, 90)
        buf.clear()
        assert buf.capacity == capacity


class TestClearAndLifecycle:
    """clear(), destroy() and init()."""

    def test_clear_keeps_storage(self) -> None:
        buf = TextBuffer().append("some text")
        buf.clear()
        assert buf.length == 0
        assert buf.capacity == 16
        assert buf.value == b""
        assert_terminated(buf)

    def test_clear_on_empty_buffer(self) -> None:
        buf = TextBuffer().clear()
        assert buf.value is None
        assert buf.capacity == 0

    def test_clear_then_reuse_does_not_reallocate(self) -> None:
        buf = TextBuffer().append("x" * 30)
        buf.clear().append("y" * 30)
        assert buf.capacity == 32
        assert buf.text == "y" * 30

    def test_destroy_releases_storage(self) -> None:
        buf = TextBuffer().append("hello")
        buf.destroy()
        assert buf.capacity == 0
        assert buf.length == 0
        assert buf.value is None

    def test_destroy_is_safe_on_empty_buffer(self) -> None:
        buf = TextBuffer()
        buf.destroy()
        buf.destroy()
        assert buf.capacity == 0

    def test_init_after_destroy_allows_reuse(self) -> None:
        buf = TextBuffer().append("first")
        buf.destroy()
        buf.init().append("second")
        assert buf.text == "second"
        assert_terminated(buf)


class TestAccessors:
    """Python protocol surface."""

    def test_len_and_bool(self) -> None:
        buf = TextBuffer()
        assert len(buf) == 0
        assert not buf
        buf.append("abc")
        assert len(buf) == 3
        assert buf

    def test_bytes_and_str(self) -> None:
        buf = TextBuffer().append("café")
        assert bytes(buf) == "café".encode()
        assert str(buf) == "café"
        assert len(buf) == 5  # byte length

    def test_bytes_of_empty_buffer(self) -> None:
        assert bytes(TextBuffer()) == b""
        assert str(TextBuffer()) == ""

    def test_value_is_a_copy(self) -> None:
        buf = TextBuffer().append("abc")
        value = buf.value
        buf.append("def")
        assert value == b"abc"

    def test_raw_includes_terminator_and_spare_capacity(self) -> None:
        raw = TextBuffer().append("ab").raw()
        assert raw[:3] == b"ab\x00"
        assert len(raw) == 16

    def test_repr(self) -> None:
        assert repr(TextBuffer().append("hi")) == "<TextBuffer length=2 capacity=16 b'hi'>"

    def test_equality(self) -> None:
        buf = TextBuffer().append("abc")
        assert buf == "abc"
        assert buf == b"abc"
        assert buf == TextBuffer().append("abc")
        assert buf != "abd"
        assert buf != 3

    def test_equality_with_split_multibyte_sequence(self) -> None:
        """Removing half of a character leaves undecodable bytes; == must not raise."""
        buf = TextBuffer().append("é!").remove(1, 1)
        assert bytes(buf) == b"\xc3!"
        assert (buf == "x") is False
        assert (buf == "é!") is False
        assert buf == b"\xc3!"
        assert bytes(buf) == b"\xc3!"

    def test_equality_with_invalid_bytes(self) -> None:
        buf = TextBuffer().append(b"\xff")
        assert buf != "x"
        assert buf == b"\xff"

    def test_equality_with_unencodable_str(self) -> None:
        buf = TextBuffer(config=BufferConfig(encoding="ascii")).append("abc")
        assert buf == "abc"
        assert (buf == "ab\u00e9") is False

    def test_str_replaces_undecodable_bytes(self) -> None:
        buf = TextBuffer().append("é!").remove(1, 1)
        assert str(buf) == "\ufffd!"
        assert f"{buf}" == "\ufffd!"

    def test_unhashable(self) -> None:
        with pytest.raises(TypeError):
            hash(TextBuffer())

    def test_config_snapshot(self) -> None:
        config = BufferConfig(newline="\r\n")
        assert TextBuffer(config=config).config is config
