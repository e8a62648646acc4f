# coding: utf8
from .flags import Status


class MicroIniError(Exception):
    pass


class UsageError(MicroIniError):
    """The parser was called with a missing source or callback.

    Attributes:
        code: The return code describing what was missing.
    """

    def __init__(self, code: Status):
        self.code = code
        super().__init__(f"invalid parser arguments: {code.name.lower()}")


class BufferOverflowError(MicroIniError):
    pass


class SyntaxErrors(MicroIniError):
    """One or more lines could not be parsed.

    Attributes:
        count: The number of malformed lines.
    """

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"{count} malformed line(s)")


def check(code: int) -> int:
    """Turn a return code of the load functions into an exception.

    Args:
        code: The return code.

    Returns:
        Status.SUCCESS if the parse succeeded.

    Raises:
        BufferOverflowError: A line was too long.
        UsageError: The parser was called with invalid arguments.
        SyntaxErrors: Malformed lines were encountered.
    """

    if code == Status.BUFFER_OVERFLOW:
        raise BufferOverflowError("line exceeds the maximum length")

    if code < 0:
        raise UsageError(Status(code))

    if code > 0:
        raise SyntaxErrors(code)

    return Status.SUCCESS
