"""A streaming INI parser which reports key/value pairs through callbacks
instead of building a document.

Lines are read one at a time into fixed-size buffers, so memory use does not grow with the input.
"""

from .buffer import Buffer, strip
from .exceptions import (
    BufferOverflowError,
    MicroIniError,
    SyntaxErrors,
    UsageError,
    check,
)
from .flags import MAX_LINE_LENGTH, Flag, Status
from .line import LineStatus, classify
from .parser import load, load_file, load_stream, loads
from .reader import LineSource, TextStream, at_eof, read_line

VERSION_MAJOR = 1
VERSION_MINOR = 0
VERSION_HOTFIX = 0

__version__ = f"{VERSION_MAJOR}.{VERSION_MINOR}.{VERSION_HOTFIX}"
