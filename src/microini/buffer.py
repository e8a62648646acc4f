import attrs

from .exceptions import BufferOverflowError
from .flags import MAX_LINE_LENGTH

# ASCII whitespace, as understood by C's isspace() in the "C" locale.
WHITESPACE = " \t\n\v\f\r"


def strip(text: str) -> str:
    """Remove leading and trailing ASCII whitespace from a string.

    Whitespace inside the string is left untouched and non-ASCII whitespace
    (i.e. U+3000) is not considered whitespace.

    Args:
        text: The string to strip.

    Returns:
        The stripped string, which is empty if text was all whitespace.
    """

    return text.strip(WHITESPACE)


@attrs.define
class Buffer:
    """A text buffer which can never hold more than a fixed number of characters.

    The parser keeps one buffer each for the current line, section, key and value.
    Writes which would exceed the capacity are refused instead of being truncated.

    Attributes:
        capacity: The maximum number of characters the buffer can hold.
    """

    capacity: int = MAX_LINE_LENGTH
    _text: str = attrs.field(default="", init=False)

    def write(self, text: str):
        """Replace the contents of the buffer.

        Args:
            text: The new contents.

        Raises:
            BufferOverflowError: text is longer than the capacity.
                The buffer is not modified.
        """

        if len(text) > self.capacity:
            raise BufferOverflowError(
                f"{len(text)} characters do not fit in a buffer of {self.capacity}"
            )

        self._text = text

    def append(self, text: str):
        """Add text to the end of the buffer.

        Raises:
            BufferOverflowError: The result would be longer than the capacity.
        """

        self.write(self._text + text)

    def truncate(self, size: int):
        """Keep only the first size characters."""

        self._text = self._text[:size]

    def clear(self):
        self._text = ""

    def strip(self):
        """Strip whitespace from both ends of the buffer in place."""

        self._text = strip(self._text)

    def rstrip(self):
        self._text = self._text.rstrip(WHITESPACE)

    def lstrip(self):
        self._text = self._text.lstrip(WHITESPACE)

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __bool__(self) -> bool:
        return bool(self._text)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Buffer):
            return self._text == other._text

        if isinstance(other, str):
            return self._text == other

        return NotImplemented
