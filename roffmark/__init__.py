"""
roffmark: man page (roff) to HTML converter.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    roffmark curl.1 -o curl.1.html

Library Usage:
    from roffmark import ConvertConfig, convert_file

    lines = convert_file("curl.1", ConvertConfig(output_style="raw"))
    html = "".join(lines)
"""

from .config import ConfigError, ConvertConfig
from .converter import ManConverter, convert_file, convert_text
from .exceptions import (
    ConvertError,
    IncludeDepthError,
    OutputError,
    SourceNotFoundError,
    UnmatchedTableCellError,
)
from .fragments import FragmentRegistry
from .lexer import split_request
from .specials import link_urls, translate_specials

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "convert_file",
    "convert_text",
    "ManConverter",
    # Building blocks
    "split_request",
    "translate_specials",
    "link_urls",
    "FragmentRegistry",
    # Configuration
    "ConvertConfig",
    # Exceptions
    "ConfigError",
    "ConvertError",
    "IncludeDepthError",
    "OutputError",
    "SourceNotFoundError",
    "UnmatchedTableCellError",
    # Version
    "__version__",
]
