import logging
import pathlib

import pytest
from typer.testing import CliRunner

from microini.cli.main import app

runner = CliRunner()


@pytest.fixture
def ini(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "ok.ini"
    path.write_text("[srv]\nhost = local\nport = 80\n", encoding="utf-8")
    return path


@pytest.fixture
def bad_ini(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "bad.ini"
    path.write_text("[srv]\nnot valid\nport = 80\n", encoding="utf-8")
    return path


def test_dump(ini: pathlib.Path):
    result = runner.invoke(app, ["dump", str(ini)])

    assert result.exit_code == 0
    assert "host" in result.output
    assert "local" in result.output
    assert "srv" in result.output


def test_dump_errors(bad_ini: pathlib.Path):
    result = runner.invoke(app, ["dump", str(bad_ini)])

    assert result.exit_code == 1
    assert "line 2: not valid" in result.output


def test_check(ini: pathlib.Path):
    result = runner.invoke(app, ["check", str(ini)])

    assert result.exit_code == 0
    assert "2 value(s), no errors" in result.output


def test_check_errors(bad_ini: pathlib.Path):
    result = runner.invoke(app, ["check", str(bad_ini)])

    assert result.exit_code == 1
    assert "1 malformed line(s)" in result.output


def test_check_overflow(tmp_path: pathlib.Path):
    path = tmp_path / "long.ini"
    path.write_text(f"k={'x' * 1000}\nnext=1\n", encoding="utf-8")

    result = runner.invoke(app, ["check", str(path)])

    assert result.exit_code == 2


def test_check_missing_file(tmp_path: pathlib.Path):
    result = runner.invoke(app, ["check", str(tmp_path / "missing.ini")])

    assert result.exit_code != 0


def test_check_undecodable_bytes(tmp_path: pathlib.Path):
    path = tmp_path / "latin.ini"
    path.write_bytes(b"name = caf\xe9\xff\xfe\n")

    result = runner.invoke(app, ["check", "--encoding", "utf-8", str(path)])

    assert result.exit_code == 0
    assert "1 value(s), no errors" in result.output


def test_verbose(bad_ini: pathlib.Path, caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.DEBUG, logger="microini")

    # Quiet runs disable logging, louder ones must turn it back on.
    runner.invoke(app, ["check", str(bad_ini)])
    result = runner.invoke(app, ["-vvvvv", "check", str(bad_ini)])

    assert result.exit_code == 1
    assert "line 2: syntax error" in caplog.text


def test_stop_on_first_error(tmp_path: pathlib.Path):
    path = tmp_path / "bad.ini"
    path.write_text("one bad\nk = v\ntwo bad\n", encoding="utf-8")

    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 1
    assert "2 malformed line(s)" in result.output

    result = runner.invoke(app, ["check", "--stop-on-first-error", str(path)])
    assert result.exit_code == 1
    assert "1 malformed line(s)" in result.output
    assert "two bad" not in result.output


def test_no_bom(tmp_path: pathlib.Path):
    path = tmp_path / "bom.ini"
    path.write_bytes("\ufeff[s]\nk = v\n".encode("utf-8"))

    result = runner.invoke(app, ["check", str(path)])
    assert result.exit_code == 0

    result = runner.invoke(app, ["check", "--no-bom", str(path)])
    assert result.exit_code == 1
    assert "1 malformed line(s)" in result.output
