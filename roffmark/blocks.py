"""Paragraph, list and margin bookkeeping."""

from __future__ import annotations

from .models import BlockMode

CLOSING_MARKUP = {
    BlockMode.PARAGRAPH: [],
    BlockMode.BULLET_LIST: ["</li>", "</ul>"],
    BlockMode.DEFINITION_LIST: ["</dd>", "</dl>"],
}


class BlockStack:
    """One block mode per margin level.

    The stack always holds at least the base level. Every method returns the
    markup lines owed for the transition it performs.
    """

    def __init__(self):
        self.modes: list[BlockMode] = [BlockMode.PARAGRAPH]

    @property
    def mode(self) -> BlockMode:
        return self.modes[-1]

    @property
    def depth(self) -> int:
        return len(self.modes)

    def enter_margin(self) -> list[str]:
        """Open a new margin level in paragraph mode. Emits no markup."""
        self.modes.append(BlockMode.PARAGRAPH)
        return []

    def exit_margin(self) -> tuple[list[str], bool]:
        """Leave the innermost margin level.

        Returns:
            tuple[list[str], bool]: Closing markup owed by the level, and
                whether a matching margin was open. When it was not, the base
                level is closed and reset instead.
        """
        if len(self.modes) == 1:
            markup = self.close_current()
            return markup, False
        return list(CLOSING_MARKUP[self.modes.pop()]), True

    def close_current(self) -> list[str]:
        """Close the innermost level's block and return it to paragraph mode."""
        markup = list(CLOSING_MARKUP[self.mode])
        self.modes[-1] = BlockMode.PARAGRAPH
        return markup

    def close_all(self) -> list[str]:
        """Close the block of every level, innermost first, keeping the depth."""
        markup: list[str] = []
        for index in range(len(self.modes) - 1, -1, -1):
            markup.extend(CLOSING_MARKUP[self.modes[index]])
            self.modes[index] = BlockMode.PARAGRAPH
        return markup

    def finish(self) -> list[str]:
        """Close everything at end of input and drop back to the base level."""
        markup = self.close_all()
        del self.modes[1:]
        return markup

    def paragraph(self, indented: bool = False) -> list[str]:
        """Start a paragraph.

        An indented paragraph stays inside the current list.
        """
        markup = [] if indented else self.close_current()
        return [*markup, "<p>"]

    def bullet_item(self, body: str) -> list[str]:
        """Start a bullet list item holding `body`.

        Opens a list first unless the current level is already one, in which
        case the previous item is closed.

        Args:
            body: Rendered text of the item's first line.

        Returns:
            list[str]: Markup lines, ending with the open ``<li>``.

        Examples:
            BlockStack().bullet_item("first")  # ["<ul>", "<li>first"]
        """
        if self.mode is BlockMode.BULLET_LIST:
            markup = ["</li>"]
        else:
            markup = [*self.close_current(), "<ul>"]
            self.modes[-1] = BlockMode.BULLET_LIST
        return [*markup, f"<li>{body}"]

    def definition_term(self, term: str) -> list[str]:
        """Emit a definition term and open its description.

        Args:
            term: Rendered term text.

        Returns:
            list[str]: Markup lines, ending with the open ``<dd>``.

        Examples:
            BlockStack().definition_term("-v")  # ["<dl>", "<dt>-v</dt>", "<dd>"]
        """
        if self.mode is BlockMode.DEFINITION_LIST:
            markup = ["</dd>"]
        else:
            markup = [*self.close_current(), "<dl>"]
            self.modes[-1] = BlockMode.DEFINITION_LIST
        return [*markup, f"<dt>{term}</dt>", "<dd>"]
