"""Insert, remove and replace without rebuilding the string."""

from textbuf import TextBuffer

buf = TextBuffer().append("the cat sat on the mat")

buf.replace("cat", "dog")          # same length: overwritten in place
print(buf)

buf.replace("the", "a")            # shorter: assembled and adopted
print(buf)

buf.insert(2, "big ")
print(buf)

buf.remove(2, 4)
print(buf)

print(f"length: {len(buf)}, capacity: {buf.capacity}")
