"""Cap the buffer size and turn growth failure into an exception."""

from textbuf import BufferConfig, CapacityError, TextBuffer

config = BufferConfig(max_capacity=1024, strict_capacity=True)
buf = TextBuffer(config=config)

try:
    while True:
        buf.append_line("log line")
except CapacityError as e:
    print(f"Stopped at {len(buf)} bytes: {e}")

# Default buffers fail quietly and keep what they have
quiet = TextBuffer(config=BufferConfig(max_capacity=1024))
for _ in range(1000):
    quiet.append_line("log line")
print(f"Quiet buffer holds {len(quiet)} bytes")
