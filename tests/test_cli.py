from __future__ import annotations

import textwrap
from pathlib import Path

from roffmark.cli import cli


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


PAGE = """
.TH LS 1 2024-01-01 coreutils
.SH NAME
ls \\- list directory contents
"""


def test_cli_prints_html_document(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    page = _write(tmp_path, "ls.1", PAGE)

    result = cli_runner.invoke(cli, [str(page)])

    assert result.exit_code == 0
    assert result.output.startswith("<!DOCTYPE html>\n")
    assert '<h1 id="NAME"><a href="#NAME">NAME</a></h1>\n' in result.output
    assert "ls &ndash; list directory contents\n" in result.output
    assert result.output.endswith("</body>\n</html>\n")


def test_cli_raw_style(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    page = _write(tmp_path, "ls.1", PAGE)

    result = cli_runner.invoke(cli, ["--style", "raw", str(page)])

    assert result.exit_code == 0
    assert result.output == (
        '<h1 id="NAME"><a href="#NAME">NAME</a></h1>\nls &ndash; list directory contents\n'
    )


def test_cli_front_matter_options(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    page = _write(tmp_path, "ls.1", PAGE)

    result = cli_runner.invoke(
        cli,
        ["--style", "frontmatter", "--permalink", "/man/ls.1/", "--package", "gnu", str(page)],
    )

    assert result.exit_code == 0
    assert result.output.startswith("---\npermalink: /man/ls.1/\nlayout: manpage\n")
    assert "package: gnu\n" in result.output


def test_cli_reads_stdin(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, ["--style", "raw"], input="Hello \\fBworld\\fP!\n")

    assert result.exit_code == 0
    assert result.output == "Hello <b>world</b>!\n"


def test_cli_writes_output_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    page = _write(tmp_path, "ls.1", PAGE)
    target = tmp_path / "ls.1.html"

    result = cli_runner.invoke(cli, ["--style", "raw", "-o", str(target), str(page)])

    assert result.exit_code == 0
    assert result.output == ""
    assert target.read_text(encoding="utf-8").startswith('<h1 id="NAME">')


def test_cli_reports_unwritable_output(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    page = _write(tmp_path, "ls.1", PAGE)

    result = cli_runner.invoke(cli, ["-o", str(tmp_path / "missing" / "out.html"), str(page)])

    assert result.exit_code == 1
    assert "Error writing" in result.output


def test_cli_reports_missing_input(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, ["missing.1"])

    assert result.exit_code == 1
    assert "Cannot open input source missing.1" in result.output


def test_cli_reports_warnings_and_succeeds(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    page = _write(tmp_path, "odd.1", ".XY\ntext\n")

    result = cli_runner.invoke(cli, ["--style", "raw", str(page)])

    assert result.exit_code == 0
    assert "warning: unknown request .XY" in result.output
    assert "text\n" in result.output


def test_cli_fails_on_unterminated_table_cell(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    page = _write(tmp_path, "table.1", ".TS\nl.\nT{\ntext\n")

    result = cli_runner.invoke(cli, [str(page)])

    assert result.exit_code == 1
    assert "unterminated T{ table cell" in result.output


def test_cli_uses_config_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.roffmark]
        output_style = "raw"
        """,
    )
    page = _write(tmp_path, "ls.1", PAGE)

    result = cli_runner.invoke(cli, [str(page)])

    assert result.exit_code == 0
    assert not result.output.startswith("<!DOCTYPE html>")


def test_cli_rejects_invalid_config(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.roffmark]
        output_style = "pdf"
        """,
    )
    page = _write(tmp_path, "ls.1", PAGE)

    result = cli_runner.invoke(cli, [str(page)])

    assert result.exit_code == 2
    assert "Unknown output style" in result.output


def test_cli_rejects_unknown_style_option(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    page = _write(tmp_path, "ls.1", PAGE)

    result = cli_runner.invoke(cli, ["--style", "pdf", str(page)])

    assert result.exit_code == 2
