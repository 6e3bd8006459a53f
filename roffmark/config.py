"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

OUTPUT_STYLES = ("html", "frontmatter", "raw", "doxygen")


@dataclass
class ConvertConfig:
    """Configuration for converting man pages.

    Attributes:
        output_style: Output strategy selector (``"html"``, ``"frontmatter"``,
            ``"raw"`` or ``"doxygen"``).
        permalink: Location override written into the front matter block.
        package: Package name written into the front matter block. Falls back
            to the ``.TH`` source argument.
        date: Date written into the front matter block. Falls back to the
            ``.TH`` date argument.
        max_include_depth: Maximum nesting of ``.so`` includes.

    Examples:
        ConvertConfig(output_style="frontmatter", permalink="/man/foo.3/")
    """

    output_style: str = "html"
    permalink: str | None = None
    package: str | None = None
    date: str | None = None
    max_include_depth: int = 20


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("Unknown output style: xml")
    """


def load_config(search_path: Path) -> ConvertConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.roffmark]`` table from `pyproject.toml` and the ``[roffmark]``
    or ``[tool.roffmark]`` table from `.roffmark.toml` when present. Returns
    default values when no configuration is found. TOML files that cannot be
    read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ConvertConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("man"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "roffmark")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".roffmark.toml",
            table_paths=[("roffmark",), ("tool", "roffmark")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ConvertConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ConvertConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ConvertConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return ConvertConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return ConvertConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ConvertConfig) -> None:
    """Validate a `ConvertConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If the output style is unknown, optional text fields are
            not strings, or the include depth is not a positive integer.

    Examples:
        validate_config(ConvertConfig(output_style="raw"))
    """
    if config.output_style not in OUTPUT_STYLES:
        raise ConfigError(
            f"Unknown output style: {config.output_style!r} "
            f"(expected one of: {', '.join(OUTPUT_STYLES)})"
        )

    for key in ("permalink", "package", "date"):
        value = getattr(config, key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"`{key}` must be a string")

    depth = config.max_include_depth
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise ConfigError("`max_include_depth` must be an integer")
    if depth <= 0:
        raise ConfigError("`max_include_depth` must be a positive integer")


def apply_overrides(config: ConvertConfig, **overrides: object) -> ConvertConfig:
    """Apply override values to a `ConvertConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ConvertConfig: New configuration with the provided overrides applied.

    Raises:
        TypeError: If an override name is not defined on `ConvertConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ConvertConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ConvertConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), output_style="frontmatter")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
