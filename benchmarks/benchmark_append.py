"""Benchmark TextBuffer against naive concatenation and list-join.

Run with:
    pytest benchmarks/benchmark_append.py -v --benchmark-only

Or for quick comparison:
    python benchmarks/benchmark_append.py
"""

import time

import pytest

from textbuf import TextBuffer
from textbuf.profiling import profiled_build


def build_textbuffer(fragments: list[str]) -> str:
    buf = TextBuffer()
    for fragment in fragments:
        buf.append(fragment)
    return buf.text


def build_concat(fragments: list[str]) -> str:
    out = b""
    for fragment in fragments:
        out += fragment.encode()
    return out.decode()


def build_join(fragments: list[str]) -> str:
    return "".join(fragments)


class TestAppendBenchmarks:
    @pytest.mark.benchmark(group="append")
    def test_benchmark_textbuffer(self, benchmark, fragments):
        benchmark(build_textbuffer, fragments)

    @pytest.mark.benchmark(group="append")
    def test_benchmark_bytes_concat(self, benchmark, fragments):
        benchmark(build_concat, fragments)

    @pytest.mark.benchmark(group="append")
    def test_benchmark_join(self, benchmark, fragments):
        benchmark(build_join, fragments)


class TestEditBenchmarks:
    @pytest.mark.benchmark(group="replace")
    def test_benchmark_replace_equal_length(self, benchmark, large_text):
        def run():
            TextBuffer().append(large_text).replace("cat", "dog")

        benchmark(run)

    @pytest.mark.benchmark(group="replace")
    def test_benchmark_replace_longer(self, benchmark, large_text):
        def run():
            TextBuffer().append(large_text).replace("cat", "kitten")

        benchmark(run)

    @pytest.mark.benchmark(group="insert")
    def test_benchmark_insert_front(self, benchmark):
        def run():
            buf = TextBuffer()
            for _ in range(2000):
                buf.insert(0, "x")

        benchmark(run)


def timed(fn, fragments: list[str], iterations: int = 20) -> float:
    fn(fragments[:100])  # Warmup
    start = time.perf_counter()
    for _ in range(iterations):
        fn(fragments)
    return (time.perf_counter() - start) / iterations


if __name__ == "__main__":
    sample = [f"<td>{i}</td>" for i in range(50_000)]

    print(f"{'method':<14} {'ms/run':>10}")
    print("-" * 25)
    for name, fn in [
        ("textbuf", build_textbuffer),
        ("bytes +=", build_concat),
        ("str.join", build_join),
    ]:
        print(f"{name:<14} {timed(fn, sample) * 1000:>10.2f}")

    with profiled_build() as metrics:
        build_textbuffer(sample)
    print()
    print("TextBuffer storage:", metrics.summary())
