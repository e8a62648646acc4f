from ..flags import Flag


def make_flags(bom: bool, multiline: bool, stop_on_first_error: bool) -> Flag:
    """Combine command line switches into parser flags.

    Returns:
        The parser flags.
    """

    flags = Flag.NONE

    if bom:
        flags |= Flag.BOM
    if multiline:
        flags |= Flag.MULTILINE
    if stop_on_first_error:
        flags |= Flag.STOP_ON_FIRST_ERROR

    return flags
