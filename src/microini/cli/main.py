import logging
import pathlib
from typing import Annotated, Optional

import typer
from rich.table import Table

from .. import parser
from ..exceptions import MicroIniError, SyntaxErrors, check

from .console import console, err_console
from .utils import make_flags

LOG_LEVELS = [
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
]

app = typer.Typer(no_args_is_help=True)

File = Annotated[
    pathlib.Path, typer.Argument(exists=True, dir_okay=False, resolve_path=True)
]
Bom = Annotated[bool, typer.Option(help="Skip a UTF-8 byte order marker")]
Multiline = Annotated[
    bool, typer.Option(help="Join lines ending in a backslash with the next line")
]
StopOnFirstError = Annotated[
    bool, typer.Option(help="Stop at the first malformed line")
]
Encoding = Annotated[
    Optional[str], typer.Option(help="File encoding (detected if not given)")
]


@app.callback()
def common(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, min=0, max=5, help="set logging level"
        ),
    ] = 0
):
    """Streaming INI parser."""

    if verbose == 0:
        logging.disable()
    else:
        logging.disable(logging.NOTSET)
        logging.basicConfig(level=LOG_LEVELS[verbose - 1])


def _run(
    file: pathlib.Path,
    bom: bool,
    multiline: bool,
    stop_on_first_error: bool,
    encoding: str | None,
) -> tuple[int, list[tuple[str, str, str]], list[tuple[int, str]]]:
    values: list[tuple[str, str, str]] = []
    errors: list[tuple[int, str]] = []

    code = parser.load(
        file,
        make_flags(bom, multiline, stop_on_first_error),
        lambda _, section, key, value: values.append((section, key, value)),
        lambda _, line, lineno: errors.append((lineno, line)),
        encoding=encoding,
    )

    return code, values, errors


def _exit(file: pathlib.Path, code: int):
    try:
        check(code)
    except SyntaxErrors as e:
        err_console.print(f"{file}: {e}", markup=False)
        raise typer.Exit(1)
    except MicroIniError as e:
        err_console.print(f"{file}: {e}", markup=False)
        raise typer.Exit(2)


@app.command()
def dump(
    file: File,
    bom: Bom = True,
    multiline: Multiline = True,
    stop_on_first_error: StopOnFirstError = False,
    encoding: Encoding = None,
):
    """Show every key/value pair in an INI file."""

    code, values, errors = _run(file, bom, multiline, stop_on_first_error, encoding)

    table = Table()
    for column in ("Section", "Key", "Value"):
        table.add_column(column)

    for row in values:
        table.add_row(*row)

    console.print(table)

    for lineno, line in errors:
        err_console.print(f"line {lineno}: {line}", markup=False)

    _exit(file, code)


@app.command("check")
def check_file(
    file: File,
    bom: Bom = True,
    multiline: Multiline = True,
    stop_on_first_error: StopOnFirstError = False,
    encoding: Encoding = None,
):
    """Check an INI file for malformed lines."""

    code, values, errors = _run(file, bom, multiline, stop_on_first_error, encoding)

    for lineno, line in errors:
        err_console.print(f"{file}:{lineno}: {line}", markup=False)

    if code == 0:
        console.print(f"{file}: {len(values)} value(s), no errors", markup=False)

    _exit(file, code)
