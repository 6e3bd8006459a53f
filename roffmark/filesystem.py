"""Filesystem helpers for roffmark."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TextIO

from .exceptions import OutputError, SourceNotFoundError


def safe_read(filepath: Path | str) -> TextIO:
    """Open a source file for reading with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        SourceNotFoundError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("curl.1")) as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        raise SourceNotFoundError(str(filepath), error.strerror) from error


def write_output(lines: list[str], filepath: Path):
    """Write converted output to `filepath` atomically.

    The lines go to a temporary file in the destination directory, which then
    replaces `filepath`. A failure at any step leaves `filepath` untouched.

    Args:
        lines: Output lines, each ending with a newline.
        filepath: Destination path.

    Raises:
        OutputError: If the temporary file cannot be written, closed, or moved
            into place.

    Examples:
        write_output(["<p>\\n"], Path("out.html"))
    """
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.writelines(lines)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())

        os.replace(temp_path, filepath)
        temp_path = None
    except OSError as error:
        raise OutputError(f"Error writing {filepath}: {error}") from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
