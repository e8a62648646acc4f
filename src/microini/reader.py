import logging
from collections.abc import Iterable
from typing import Protocol, TextIO

import chardet

_log = logging.getLogger(__name__)


class LineSource(Protocol):
    """Anything the parser can read lines from.

    Files, in-memory strings and network streams alike only need to be able to hand out
    one line at a time and to tell when they have run dry.
    """

    def readline(self, size: int) -> str | None:
        """Read the next line.

        Args:
            size: The maximum number of characters to read.

        Returns:
            At most size characters of the next line, including the line terminator
            if it was reached, or None if there is nothing left to read.
        """
        ...

    def eof(self) -> bool:
        """Whether or not a read has reached the end of the source."""
        ...


class TextStream:
    """Adapts a text file object into a line source.

    The caller remains responsible for closing the file.

    Attributes:
        file: The file to read from.
    """

    file: TextIO

    def __init__(self, file: TextIO):
        self.file = file
        self._eof = False

    def readline(self, size: int) -> str | None:
        if size <= 0:
            # file.readline() treats non-positive sizes as unlimited.
            return ""

        line = self.file.readline(size)

        # Running out of characters before the size or a line terminator
        # means the end of the file was hit.
        if len(line) < size and not line.endswith("\n"):
            self._eof = True

        return line or None

    def eof(self) -> bool:
        return self._eof


def read_line(size: int, stream: LineSource) -> str | None:
    """Read the next line from a line source (fgets-style reader callback)."""

    return stream.readline(size)


def at_eof(stream: LineSource) -> bool:
    """Check if a line source is exhausted (feof-style callback)."""

    return stream.eof()


def detect_encoding(file: Iterable[bytes]) -> str | None:
    """Determine the encoding of a binary file.

    A byte order marker is not consumed by the returned encoding:
    UTF-8 with a BOM is reported as plain UTF-8 so the parser can skip it itself.

    Args:
        file: The file to detect the encoding of.

    Returns:
        The encoding if detected successfully, otherwise None.
    """

    detector = chardet.UniversalDetector()

    for line in file:
        if not detector.done:
            detector.feed(line)
        else:
            break

    result = detector.close()

    if encoding := result["encoding"]:
        encoding = encoding.lower()

        if encoding in ("ascii", "utf-8-sig"):
            # ASCII is a subset of UTF-8 anyway.
            encoding = "utf-8"

        _log.debug("detected encoding %s (confidence %s)", encoding, result["confidence"])
        return encoding

    return None
