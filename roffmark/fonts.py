"""Font escape interpretation."""

from __future__ import annotations

import re
from dataclasses import replace

from .constants import FONT_ESCAPE_PATTERN, FONT_NAMES
from .models import Font, FontState

FONT_TAGS = {Font.BOLD: "b", Font.ITALIC: "i"}


def _open(font: Font) -> str:
    tag = FONT_TAGS.get(font)
    return f"<{tag}>" if tag else ""


def _close(font: Font) -> str:
    tag = FONT_TAGS.get(font)
    return f"</{tag}>" if tag else ""


class FontInterpreter:
    """Track the current/previous font pair and render font changes as HTML.

    Body text keeps its font across lines; headings and table cells call
    `translate` with ``add_close=True`` so nothing stays open after them.

    Args:
        state: Initial font state. Defaults to Roman/Roman.
    """

    def __init__(self, state: FontState | None = None):
        self.state = state or FontState()

    def switch(self, name: str) -> str:
        """Change the current font and return the markup for the change.

        Args:
            name: ``"B"``, ``"I"``, ``"R"``, or ``"P"`` for the previous font.

        Returns:
            str: Closing tag of the old font followed by the opening tag of the
                new one. Empty when the font does not change.

        Examples:
            FontInterpreter().switch("B")  # "<b>"
        """
        old = self.state.current
        new = self.state.previous if name == "P" else Font(name)
        self.state.previous = old
        self.state.current = new
        if new is old:
            return ""
        return _close(old) + _open(new)

    def close(self) -> str:
        """Close any open font element and reset to Roman/Roman."""
        markup = _close(self.state.current)
        self.state.reset()
        return markup

    def translate(self, text: str, add_close: bool = False) -> str:
        r"""Replace inline font escapes (``\fB``, ``\fI``, ``\fR``, ``\fP``) with tags.

        Args:
            text: Text that already went through special-character translation.
            add_close: Close the open font element at the end of `text` and
                reset the state to Roman/Roman.

        Returns:
            str: Text with font escapes turned into ``<b>``/``<i>`` elements.

        Examples:
            FontInterpreter().translate("Hello \\fBworld\\fP!")  # "Hello <b>world</b>!"
        """

        def replace_escape(match: re.Match[str]) -> str:
            name = next(group for group in match.groups() if group is not None)
            font = FONT_NAMES.get(name)
            if font is None:
                return match.group(0)
            return self.switch(font)

        result = FONT_ESCAPE_PATTERN.sub(replace_escape, text)
        if add_close:
            result += self.close()
        return result

    def apply(self, font: str, words: list[str]) -> str:
        """Render `words` in a fixed font, then return to the font active before.

        Used by the ``.B``/``.I``/``.R`` family; words are joined with spaces.

        Examples:
            FontInterpreter().apply("B", ["foo", "bar"])  # "<b>foo bar</b>"
        """
        saved = replace(self.state)
        markup = self.switch(font) + self.translate(" ".join(words))
        return markup + self._restore(saved)

    def alternate(self, fonts: str, words: list[str]) -> str:
        """Render `words` in alternating fonts, joined without spaces.

        The font letters are cycled when there are more words than letters.

        Examples:
            FontInterpreter().alternate("BR", ["ls", "(1)"])  # "<b>ls</b>(1)"
        """
        saved = replace(self.state)
        parts = []
        for index, word in enumerate(words):
            parts.append(self.switch(fonts[index % len(fonts)]))
            parts.append(self.translate(word))
        return "".join(parts) + self._restore(saved)

    def _restore(self, saved: FontState) -> str:
        markup = ""
        if self.state.current is not saved.current:
            markup = _close(self.state.current) + _open(saved.current)
        self.state.current = saved.current
        self.state.previous = saved.previous
        return markup
