"""Build a string piece by piece, then print it with its length and capacity."""

from textbuf import TextBuffer

buf = TextBuffer()

buf.append("Some content...")
buf.append_line(" More content.")
buf.append_format('Some number: %d and a string: "%s".\n', 69, "nice")
buf.insert(0, "First! ")

print(buf)
print(f"length: {buf.length}, capacity: {buf.capacity}")

buf.destroy()
