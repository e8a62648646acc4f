import enum
import re

from .buffer import Buffer

# All patterns are matched from the start of an already stripped line.
# Keys are everything up to the first equals sign.
RE_SECTION = re.compile(r"\[(?P<section>[^\]]*)")

RE_QUOTED = re.compile(
    r"""
    (?P<key>[^=]+) = \s*

    # The value runs until the matching quote.
    # Whatever follows the closing quote (if any) is ignored.
    (?:
        "(?P<double>[^"]+)
        | '(?P<single>[^']+)
    )
    """,
    flags=re.VERBOSE,
)

# Quotes with nothing between them, optionally followed by a comment.
RE_EMPTY_QUOTED = re.compile(
    r"""
    (?P<key>[^=]+) = \s*
    (?:""|'')
    \s* (?:[;\#].*)?
    $
    """,
    flags=re.VERBOSE,
)

RE_UNQUOTED = re.compile(
    r"""
    (?P<key>[^=]+) = \s*

    # A comment after the value is discarded.
    (?P<value>[^;\#]+)
    """,
    flags=re.VERBOSE,
)

# key=, key=; and key=#
RE_EMPTY = re.compile(r"(?P<key>[^=]+)=")


class LineStatus(enum.IntEnum):
    """What a line turned out to be after classification."""

    UNPROCESSED = 0
    EMPTY = 1
    ERROR = 2
    COMMENT = 3
    SECTION = 4
    VALUE = 5


def classify(
    line: str,
    length: int | None,
    section: Buffer,
    key: Buffer,
    value: Buffer,
) -> LineStatus:
    """Classify a single INI line.

    The rules are tried in order and the first one to match wins:
    1. Empty lines.
    2. Comments starting with '#' or ';'.
    3. Sections, i.e. [name].
    4. Quoted values, i.e. key = "value" or key = 'value'.
    5. Unquoted values, i.e. key = value ; comment
    6. Values with nothing after the equals sign, i.e. key= or key=;
    7. Anything else is an error.

    Quoted values are taken verbatim, everything else has surrounding whitespace removed.

    Args:
        line: The line to classify. Line terminators and leading whitespace
            must already be removed.
        length: How much of the line to consider. If None, the whole line is used.
        section: Receives the section name. Only written to for sections, so it
            holds the most recent section across calls.
            Empty brackets, i.e. [], set it to the empty string instead of
            keeping the previous section.
        key: Receives the key. Cleared on every call.
        value: Receives the value. Cleared on every call.

    Returns:
        The kind of line. The key and value buffers are only meaningful for
        LineStatus.VALUE.
    """

    if length is not None:
        line = line[:length]

    key.clear()
    value.clear()

    if not line:
        return LineStatus.EMPTY

    if line[0] in "#;":
        return LineStatus.COMMENT

    if line[0] == "[" and line[-1] == "]":
        # A closing bracket is guaranteed, so this always matches.
        m = RE_SECTION.match(line)
        section.write(m["section"])
        section.strip()

        return LineStatus.SECTION

    if m := RE_QUOTED.match(line):
        key.write(m["key"])
        key.strip()

        # Whitespace inside quotes is significant.
        quoted = m["double"] if m["double"] is not None else m["single"]
        value.write(quoted)

        return LineStatus.VALUE

    if m := RE_EMPTY_QUOTED.match(line):
        key.write(m["key"])
        key.strip()

        return LineStatus.VALUE

    if m := RE_UNQUOTED.match(line):
        key.write(m["key"])
        key.strip()

        value.write(m["value"])
        value.strip()

        return LineStatus.VALUE

    if m := RE_EMPTY.match(line):
        key.write(m["key"])
        key.strip()

        return LineStatus.VALUE

    return LineStatus.ERROR
