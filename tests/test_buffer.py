import pytest

from microini.buffer import Buffer, strip
from microini.exceptions import BufferOverflowError
from microini.flags import MAX_LINE_LENGTH


@pytest.mark.parametrize(
    "text, expected",
    [
        ("  hello  ", "hello"),
        ("\t\r\nhello world\n", "hello world"),
        ("inner   space", "inner   space"),
        ("", ""),
        (" \t\v\f\r\n ", ""),
        # Only ASCII whitespace is stripped.
        ("　x　", "　x　"),
    ],
)
def test_strip(text, expected):
    assert strip(text) == expected


def test_strip_idempotent():
    once = strip("  a b  ")
    assert strip(once) == once


def test_buffer_capacity():
    buf = Buffer()
    assert buf.capacity == MAX_LINE_LENGTH

    buf.write("x" * MAX_LINE_LENGTH)
    assert len(buf) == MAX_LINE_LENGTH


def test_buffer_overflow():
    buf = Buffer(4)
    buf.write("abc")

    with pytest.raises(BufferOverflowError):
        buf.append("de")

    # Refused writes leave the buffer alone.
    assert buf == "abc"


def test_buffer_append_truncate():
    buf = Buffer()
    buf.write("part1\\")
    buf.truncate(len(buf) - 1)
    buf.append(" part2")

    assert str(buf) == "part1 part2"


def test_buffer_strip():
    buf = Buffer()
    buf.write("  value \n")

    buf.rstrip()
    assert buf == "  value"

    buf.lstrip()
    assert buf == "value"

    buf.write(" \t ")
    buf.strip()
    assert buf == ""
    assert not buf


def test_buffer_clear():
    buf = Buffer()
    buf.write("text")
    buf.clear()

    assert len(buf) == 0
    assert buf == Buffer()
