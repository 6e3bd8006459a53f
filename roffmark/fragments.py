"""Unique anchor ids for headings."""

from __future__ import annotations

import re

from .constants import HEADING_ID_SEPARATOR

_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")


def normalize_fragment(text: str) -> str:
    """Strip markup and collapse whitespace runs into the id separator.

    Examples:
        normalize_fragment("<b>SEE</b>  ALSO")  # "SEE_ALSO"
    """
    text = _TAG_PATTERN.sub("", text).strip()
    return _WHITESPACE_PATTERN.sub(HEADING_ID_SEPARATOR, text)


class FragmentRegistry:
    """Allocate heading ids that are unique within one document.

    A repeated heading gets ``_2``, ``_3``, ... appended. Keys are never
    released, so an explicit ``NAME_2`` heading pushes a later duplicate
    ``NAME`` on to ``NAME_3``.
    """

    def __init__(self):
        self.used: set[str] = set()

    def allocate(self, text: str) -> str:
        """Reserve and return a unique id for a heading.

        Args:
            text: Heading text, possibly containing markup.

        Returns:
            str: The normalized heading text, suffixed when already taken.

        Examples:
            registry = FragmentRegistry()
            registry.allocate("NAME")  # "NAME"
            registry.allocate("NAME")  # "NAME_2"
        """
        base = normalize_fragment(text)
        key = base
        count = 1
        while key in self.used:
            count += 1
            key = f"{base}{HEADING_ID_SEPARATOR}{count}"
        self.used.add(key)
        return key
