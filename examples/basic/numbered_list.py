"""Assemble a titled, numbered list and hand the finished text to the caller."""

from textbuf import TextBuffer


def assemble_some_string() -> str:
    buf = TextBuffer()

    buf.append_line("String builder test")
    buf.append_line("===================")
    buf.append_line("")

    for i in range(1, 6):
        buf.append_format("%d. Some item\n", i)

    return buf.text


print(assemble_some_string())
