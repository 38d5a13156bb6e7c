"""Count reallocations while building a large report."""

from textbuf import TextBuffer
from textbuf.profiling import profiled_build

with profiled_build() as metrics:
    buf = TextBuffer()
    for row in range(10_000):
        buf.append_format("%05d,%s,%.2f\n", row, "item", row * 0.5)

print(f"Built {len(buf)} bytes in {buf.capacity} bytes of storage")
print(metrics.summary())
