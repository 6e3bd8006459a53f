"""Special-character and predefined-string translation.

The passes in `TRANSLATION_PASSES` run in a fixed order. Later passes must not
see escapes produced by earlier ones, so the order is part of the contract.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from .constants import (
    BACKSLASH_ENTITY,
    BACKSLASH_PLACEHOLDER,
    BRACKETED_ESCAPE_PATTERN,
    LOOSE_AMPERSAND_PATTERN,
    NAMED_ESCAPE_PATTERN,
    PREDEFINED_STRINGS,
    SINGLE_ESCAPE_PATTERN,
    SINGLE_ESCAPES,
    SPECIAL_CHARACTERS,
    STRING_ESCAPE_PATTERN,
    URL_EXCEPTIONS,
    URL_PATTERN,
)


def _lookup(match: re.Match[str]) -> str:
    return SPECIAL_CHARACTERS.get(match.group(1), match.group(0))


def protect_backslashes(text: str) -> str:
    r"""Hide ``\\`` behind a placeholder so it never starts an escape."""
    return text.replace("\\\\", BACKSLASH_PLACEHOLDER)


def strip_zero_width(text: str) -> str:
    r"""Drop the zero-width ``\&`` and ``\)`` escapes."""
    return text.replace("\\&", "").replace("\\)", "")


def normalize_hyphens(text: str) -> str:
    r"""Rewrite ``\-`` as the ``\(en`` escape.

    Examples:
        normalize_hyphens("\\-v")  # "\\(env"
    """
    return text.replace("\\-", "\\(en")


def escape_ampersands(text: str) -> str:
    """Escape literal ampersands, leaving entities the translation emits alone.

    Examples:
        escape_ampersands("AT&T &amp; co")  # "AT&amp;T &amp; co"
    """
    return LOOSE_AMPERSAND_PATTERN.sub("&amp;", text)


def replace_named_escapes(text: str) -> str:
    r"""Replace ``\(xx`` escapes, then single-character escapes."""
    text = NAMED_ESCAPE_PATTERN.sub(_lookup, text)
    return SINGLE_ESCAPE_PATTERN.sub(lambda match: SINGLE_ESCAPES[match.group(1)], text)


def replace_bracketed_escapes(text: str) -> str:
    r"""Replace ``\[name]`` escapes found in the special-character table."""
    return BRACKETED_ESCAPE_PATTERN.sub(_lookup, text)


def restore_backslashes(text: str) -> str:
    """Turn protected backslashes into the ``&#92;`` entity."""
    return text.replace(BACKSLASH_PLACEHOLDER, BACKSLASH_ENTITY)


def expand_strings(text: str) -> str:
    r"""Expand predefined strings (``\*(xx``, ``\*x``, ``\*[name]``).

    Unknown names are left as they are.

    Examples:
        expand_strings("Linux\\*R")  # "Linux&reg;"
    """

    def replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2) or match.group(3)
        return PREDEFINED_STRINGS.get(name, match.group(0))

    return STRING_ESCAPE_PATTERN.sub(replace, text)


def escape_angle_brackets(text: str) -> str:
    return text.replace("<", "&lt;").replace(">", "&gt;")


TRANSLATION_PASSES: tuple[Callable[[str], str], ...] = (
    protect_backslashes,
    strip_zero_width,
    normalize_hyphens,
    escape_ampersands,
    replace_named_escapes,
    replace_bracketed_escapes,
    restore_backslashes,
    expand_strings,
    escape_angle_brackets,
)


def translate_specials(text: str) -> str:
    r"""Translate roff special characters into HTML entities.

    Unknown escape names are left untouched. Running the translation again on
    its own output leaves it unchanged.

    Args:
        text: Raw roff text.

    Returns:
        str: Text with named escapes, predefined strings, ampersands and angle
            brackets converted to HTML.

    Examples:
        translate_specials("a \\(em b")  # "a &mdash; b"
        translate_specials("x < y & z")  # "x &lt; y &amp; z"
    """
    for translate in TRANSLATION_PASSES:
        text = translate(text)
    return text


def _link(match: re.Match[str]) -> str:
    url = match.group(0)
    if any(exception in url for exception in URL_EXCEPTIONS):
        return url
    return f'<a href="{url}">{url}</a>'


def link_urls(text: str) -> str:
    """Wrap bare ``http(s)://`` URLs in hyperlinks.

    Examples:
        link_urls("see https://curl.se/docs/") # 'see <a href="https://curl.se/docs/">...'
    """
    return URL_PATTERN.sub(_link, text)
