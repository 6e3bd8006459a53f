"""Package-specific exception types."""

from __future__ import annotations


class ConvertError(ValueError):
    """Base class for conversion errors.

    Represents fatal errors encountered while converting man page source.
    """


class SourceNotFoundError(ConvertError):
    """Raised when an input source cannot be opened.

    Args:
        name: Name of the source as it was requested.
        reason: Optional detail from the underlying OS error.
    """

    def __init__(self, name: str, reason: str | None = None):
        self.name = name
        self.reason = reason
        message = f"Cannot open input source {name}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class IncludeDepthError(ConvertError):
    """Raised when nested `.so` inclusion exceeds the configured depth.

    Args:
        name: Source whose inclusion crossed the limit.
        limit: Maximum nesting depth permitted.
    """

    def __init__(self, name: str, limit: int):
        self.name = name
        self.limit = limit
        super().__init__(f"Including {name} exceeds the maximum nesting depth of {limit}")


class UnmatchedTableCellError(ConvertError):
    """Raised when input ends inside a multi-line ``T{`` table cell.

    Args:
        location: ``name:line`` of the line that opened the cell.
    """

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"{location}: unterminated T{{ table cell")


class OutputError(ConvertError):
    """Raised when the output destination cannot be written or closed."""
