from __future__ import annotations

import io
from pathlib import Path

import pytest

from roffmark.exceptions import IncludeDepthError, SourceNotFoundError
from roffmark.source import InputResolver


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_open_missing_source_reports_name(tmp_path: Path):
    missing = tmp_path / "missing.1"

    with pytest.raises(SourceNotFoundError) as excinfo:
        InputResolver().open(str(missing))

    assert excinfo.value.name == str(missing)
    assert str(missing) in str(excinfo.value)


def test_reads_lines_without_line_endings(tmp_path: Path):
    page = _write(tmp_path / "page.1", "one\r\ntwo\n")
    resolver = InputResolver()
    resolver.open(str(page))

    assert resolver.next_line() == "one"
    assert resolver.next_line() == "two"
    assert resolver.next_line() is None


def test_nested_source_resumes_outer_frame(tmp_path: Path):
    main = _write(tmp_path / "man" / "main.1", "first\nsecond\n")
    _write(tmp_path / "man" / "inc.1", "included\n")
    resolver = InputResolver()
    resolver.open(str(main))

    assert resolver.next_line() == "first"
    resolver.open("inc.1")
    assert resolver.frames[-1].name == str(tmp_path / "man" / "inc.1")
    assert resolver.next_line() == "included"
    assert resolver.location == f"{tmp_path / 'man' / 'inc.1'}:1"
    assert resolver.next_line() == "second"
    assert resolver.location == f"{main}:2"


def test_relative_name_without_enclosing_directory_is_unchanged():
    resolver = InputResolver()
    resolver.push("<string>", io.StringIO(""))

    assert resolver.resolve("inc.1") == "inc.1"


def test_absolute_include_is_not_rebased(tmp_path: Path):
    resolver = InputResolver()
    resolver.push(str(tmp_path / "a" / "main.1"), io.StringIO(""))
    target = str(tmp_path / "b" / "inc.1")

    assert resolver.resolve(target) == target


def test_owned_handles_are_closed_and_pushed_handles_are_not(tmp_path: Path):
    page = _write(tmp_path / "page.1", "text\n")
    stream = io.StringIO("outer\n")
    resolver = InputResolver()
    resolver.push("<stdin>", stream)
    resolver.open(str(page))
    handle = resolver.frames[-1].handle

    resolver.close()

    assert handle.closed
    assert not stream.closed
    assert resolver.frames == []


def test_exhausted_frame_is_closed(tmp_path: Path):
    page = _write(tmp_path / "page.1", "only\n")
    resolver = InputResolver()
    resolver.open(str(page))
    handle = resolver.frames[-1].handle

    resolver.next_line()
    resolver.next_line()

    assert handle.closed


def test_depth_limit(tmp_path: Path):
    page = _write(tmp_path / "page.1", "text\n")
    resolver = InputResolver(max_depth=2)
    resolver.open(str(page))
    resolver.open(str(page))

    with pytest.raises(IncludeDepthError) as excinfo:
        resolver.open(str(page))

    assert excinfo.value.limit == 2
    resolver.close()


def test_location_after_end_of_input():
    resolver = InputResolver()
    resolver.push("<string>", io.StringIO("x\n"))
    resolver.next_line()
    resolver.next_line()

    assert resolver.location == "<eof>"
