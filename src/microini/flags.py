import enum

# The longest line (continuations and line terminator included) the parser accepts.
MAX_LINE_LENGTH = 512


class Flag(enum.IntFlag):
    """Options for configuring a parse.

    Attributes:
        NONE: Default behaviour.
        BOM: Skip a UTF-8 byte order marker at the start of the input.
        MULTILINE: Join lines ending in a backslash with the following line.
        STOP_ON_FIRST_ERROR: Stop parsing at the first malformed line.
    """

    NONE = 0
    BOM = 0x1
    MULTILINE = 0x2
    STOP_ON_FIRST_ERROR = 0x4


class Status(enum.IntEnum):
    """Return codes of the load functions.

    Positive return values are not listed here: they count the malformed lines
    which were tolerated during the parse.
    """

    SUCCESS = 0
    INVALID_FILE_OBJECT = -1
    INVALID_STREAM_OBJECT = -2
    INVALID_HANDLER_CALLBACK = -3
    INVALID_READER_CALLBACK = -4
    INVALID_EOF_CALLBACK = -5
    BUFFER_OVERFLOW = -6
