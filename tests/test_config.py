from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from roffmark.config import (
    ConfigError,
    ConvertConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".roffmark.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.roffmark]
        output_style = "frontmatter"
        permalink = "/man/curl.1/"
        package = "curl"
        date = "2024-01-01"
        max_include_depth = 4
        """,
    )

    assert load_config(tmp_path) == ConvertConfig(
        output_style="frontmatter",
        permalink="/man/curl.1/",
        package="curl",
        date="2024-01-01",
        max_include_depth=4,
    )


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [roffmark]
        output_style = "raw"
        """,
    )

    assert load_config(tmp_path) == ConvertConfig(output_style="raw")


def test_searches_parent_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.roffmark]
        output_style = "doxygen"
        """,
    )
    nested = tmp_path / "man" / "man1"
    nested.mkdir(parents=True)

    assert load_config(nested).output_style == "doxygen"


def test_pyproject_without_table_falls_through_to_defaults(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.other]
        key = 1
        """,
    )

    assert load_config(tmp_path) == ConvertConfig()


def test_undecodable_config_is_skipped(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.roffmark\n", encoding="utf-8")

    assert load_config(tmp_path) == ConvertConfig()


def test_unknown_keys_are_rejected(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.roffmark]
        colour = "blue"
        """,
    )

    with pytest.raises(ConfigError, match="Invalid `\\[tool.roffmark\\]` settings"):
        load_config(tmp_path)


def test_non_table_value_is_rejected(tmp_path: Path):
    _write_dotfile(tmp_path, 'roffmark = "raw"\n')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "config",
    [
        ConvertConfig(output_style="xml"),
        ConvertConfig(max_include_depth=0),
        ConvertConfig(max_include_depth=True),
        ConvertConfig(permalink=3),
    ],
)
def test_validate_config_rejects_invalid_values(config: ConvertConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_apply_overrides_ignores_none():
    config = ConvertConfig(output_style="raw")

    assert apply_overrides(config, output_style=None, package=None) is config
    assert apply_overrides(config, package="curl").package == "curl"


def test_build_config_applies_overrides_over_file(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.roffmark]
        output_style = "raw"
        package = "curl"
        """,
    )

    config = build_config(tmp_path, output_style="frontmatter", permalink="/p/")

    assert config == ConvertConfig(output_style="frontmatter", permalink="/p/", package="curl")


def test_build_config_validates_file_values(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.roffmark]
        output_style = "pdf"
        """,
    )

    with pytest.raises(ConfigError, match="Unknown output style"):
        build_config(tmp_path)
