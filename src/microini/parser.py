import codecs
import io
import logging
import os
import pathlib
from collections.abc import Callable
from typing import Any, TextIO, TypeVar

from .buffer import WHITESPACE, Buffer
from .exceptions import BufferOverflowError
from .flags import MAX_LINE_LENGTH, Flag, Status
from .line import LineStatus, classify
from .reader import TextStream, at_eof, detect_encoding, read_line

_log = logging.getLogger(__name__)

S = TypeVar("S")

# The UTF-8 byte order marker, as it appears once decoded.
BOM = codecs.BOM_UTF8.decode("utf-8")

Handler = Callable[[Any, str, str, str], None]
ErrorHandler = Callable[[Any, str, int], None]
Reader = Callable[[int, S], str | None]
Eof = Callable[[S], bool]


def load_stream(
    stream: S,
    flags: int,
    handler: Handler | None,
    error: ErrorHandler | None = None,
    reader: Reader[S] | None = None,
    eof: Eof[S] | None = None,
    user_data: Any = None,
) -> int:
    """Parse INI from a user-defined stream.

    The stream can be anything: it is only ever passed back to the reader and eof callbacks.
    Each key/value pair is passed to the handler as (user_data, section, key, value), in the order they
    appear. Properties before the first section have an empty section name.

    Args:
        stream: The stream to parse.
        flags: A combination of Flag options.
        handler: Called for every key/value pair.
        error: Called for every malformed line as (user_data, line, lineno).
            Line numbers start at 1. May be None if errors are not of interest.
        reader: Called as reader(size, stream) to read the next line (fgets-style).
            It must return at most size characters, including the line terminator,
            or None when there is nothing left.
        eof: Called as eof(stream) to check whether the stream has been exhausted (feof-style).
        user_data: Passed as-is to the handler and error callbacks.

    Returns:
        Status.SUCCESS, a negative Status if the arguments were invalid or a line was too long,
        or the number of malformed lines.
    """

    if stream is None:
        return Status.INVALID_STREAM_OBJECT
    elif handler is None:
        return Status.INVALID_HANDLER_CALLBACK
    elif reader is None:
        return Status.INVALID_READER_CALLBACK
    elif eof is None:
        return Status.INVALID_EOF_CALLBACK

    line = Buffer()
    section = Buffer()
    key = Buffer()
    value = Buffer()

    # Where the next read goes. Non-zero while a multi-line value is being joined.
    last = 0
    lineno = 0
    errors = 0
    first_read = True

    while True:
        size = MAX_LINE_LENGTH - last
        if size <= 0:
            _log.warning("line %d: no space left to continue a multi-line value", lineno)
            return Status.BUFFER_OVERFLOW

        chunk = reader(size, stream)
        if chunk is None:
            break

        lineno += 1

        if first_read:
            first_read = False

            if flags & Flag.BOM and chunk.startswith(BOM):
                chunk = chunk[len(BOM) :]

        if not chunk:
            continue

        # A line without a terminator is only allowed at the very end of the stream.
        if not chunk.endswith("\n") and not eof(stream):
            _log.warning("line %d: exceeds %d characters", lineno, MAX_LINE_LENGTH)
            return Status.BUFFER_OVERFLOW

        try:
            line.truncate(last)
            line.append(chunk)
        except BufferOverflowError:
            _log.warning("line %d: reader returned more than %d characters", lineno, size)
            return Status.BUFFER_OVERFLOW

        # Get rid of the line terminator, along with any trailing whitespace.
        line.rstrip()

        if flags & Flag.MULTILINE and str(line).endswith("\\"):
            # Drop the backslash, the next line is read in its place.
            last = len(line) - 1
            _log.debug("line %d: continued on the next line", lineno)
            continue

        last = 0

        # Leading whitespace only goes after checking for multi-line values,
        # so the start of the line is kept when a continuation is appended to it.
        raw = str(line)
        text = raw.lstrip(WHITESPACE)

        status = classify(text, len(text), section, key, value)

        if status == LineStatus.VALUE:
            handler(user_data, str(section), str(key), str(value))

        elif status == LineStatus.ERROR:
            _log.debug("line %d: syntax error: '%s'", lineno, raw)

            if error is not None:
                error(user_data, raw, lineno)

            errors += 1

            if flags & Flag.STOP_ON_FIRST_ERROR:
                return errors

        elif status == LineStatus.SECTION:
            _log.debug("line %d: entering section '%s'", lineno, section)

        line.clear()

    if last:
        _log.warning("input ended in the middle of a multi-line value, discarding it")

    _log.debug("parsed %d line(s) with %d error(s)", lineno, errors)

    return Status.SUCCESS + errors


def load_file(
    file: TextIO | None,
    flags: int,
    handler: Handler | None,
    error: ErrorHandler | None = None,
    user_data: Any = None,
) -> int:
    """Parse INI from an open text file.

    The file is not closed afterwards.

    Args:
        file: The file to parse.
        flags: See load_stream().
        handler: See load_stream().
        error: See load_stream().
        user_data: See load_stream().

    Returns:
        See load_stream(). Status.INVALID_FILE_OBJECT is returned if file is None.
    """

    if file is None:
        return Status.INVALID_FILE_OBJECT
    elif handler is None:
        return Status.INVALID_HANDLER_CALLBACK

    return load_stream(
        TextStream(file),
        flags,
        handler,
        error,
        reader=read_line,
        eof=at_eof,
        user_data=user_data,
    )


def load(
    path: str | os.PathLike | None,
    flags: int,
    handler: Handler | None,
    error: ErrorHandler | None = None,
    user_data: Any = None,
    encoding: str | None = None,
) -> int:
    """Parse an INI file by path.

    Args:
        path: The path to the INI file.
        flags: See load_stream().
        handler: See load_stream().
        error: See load_stream().
        user_data: See load_stream().
        encoding: The file encoding of the INI file.
            If None, encoding detection is attempted and UTF-8 is assumed if that fails.
            Bytes which are invalid in the encoding are replaced with U+FFFD.

    Returns:
        See load_stream(). Status.INVALID_FILE_OBJECT is returned if the file could not be opened
            or path is None.
    """

    if handler is None:
        return Status.INVALID_HANDLER_CALLBACK
    elif path is None:
        return Status.INVALID_FILE_OBJECT

    path = pathlib.Path(path)

    try:
        if encoding is None:
            with path.open("rb") as f:
                encoding = detect_encoding(f)

            if encoding is None:
                _log.warning("failed to detect encoding for %s, assuming utf-8", path)
                encoding = "utf-8"

        # Undecodable bytes become U+FFFD instead of aborting the parse halfway.
        f = path.open(encoding=encoding, errors="replace")

    except OSError as e:
        _log.warning("could not open %s: %s", path, e)
        return Status.INVALID_FILE_OBJECT

    with f:
        return load_file(f, flags, handler, error, user_data)


def loads(
    text: str,
    flags: int,
    handler: Handler | None,
    error: ErrorHandler | None = None,
    user_data: Any = None,
) -> int:
    """Parse INI text.

    Args:
        text: The text to parse.
        flags: See load_stream().
        handler: See load_stream().
        error: See load_stream().
        user_data: See load_stream().

    Returns:
        See load_stream().
    """

    with io.StringIO(text) as f:
        return load_file(f, flags, handler, error, user_data)
