"""Data models for roffmark."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TextIO


class Font(Enum):
    """Fonts tracked by the font escape interpreter.

    Attributes:
        BOLD: Rendered with ``<b>``.
        ITALIC: Rendered with ``<i>``.
        ROMAN: Plain text; no element is open.
    """

    BOLD = "B"
    ITALIC = "I"
    ROMAN = "R"


@dataclass
class FontState:
    """Current and previous font.

    ``\\fP`` swaps the two fields; no deeper history is kept.
    """

    current: Font = Font.ROMAN
    previous: Font = Font.ROMAN

    def reset(self) -> None:
        self.current = Font.ROMAN
        self.previous = Font.ROMAN


class BlockMode(Enum):
    """Block kinds tracked per margin level.

    Attributes:
        PARAGRAPH: Plain paragraphs; owes no closing markup.
        BULLET_LIST: Inside ``<ul>``.
        DEFINITION_LIST: Inside ``<dl>``.
    """

    PARAGRAPH = auto()
    BULLET_LIST = auto()
    DEFINITION_LIST = auto()


@dataclass
class InputFrame:
    """One entry of the nested-input stack.

    Attributes:
        name: Source name used for diagnostics and relative includes.
        handle: Open text handle the lines are read from.
        line_number: Number of lines consumed so far from this source.
        owned: Whether the frame opened `handle` and must close it.
    """

    name: str
    handle: TextIO
    line_number: int = 0
    owned: bool = True


@dataclass
class ColumnFormat:
    """Format of one table column taken from a tbl format line.

    Attributes:
        align: One of ``"l"``, ``"r"``, ``"c"``, ``"n"``.
        span: True for an ``s`` entry that widens the column to its left.
        bold: Cell text is rendered bold.
        italic: Cell text is rendered italic.
        rule: ``""``, ``"single"`` or ``"double"`` vertical rule before the column.
    """

    align: str = "l"
    span: bool = False
    bold: bool = False
    italic: bool = False
    rule: str = ""


@dataclass
class TableSpec:
    """Parsed tbl options, format lines and data rows.

    Attributes:
        formats: One list of column formats per format line.
        separator: Cell separator character.
        options: Table-wide option keywords (``center``, ``box``, ...).
        rows: Logical data rows, each a list of raw cell strings.
    """

    formats: list[list[ColumnFormat]] = field(default_factory=list)
    separator: str = "\t"
    options: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    @property
    def header_rows(self) -> int:
        """Number of leading rows rendered as header cells."""
        return len(self.formats) - 1 if len(self.formats) > 1 else 0


@dataclass
class TitleInfo:
    """Arguments of the ``.TH`` request.

    Attributes:
        name: Page name.
        section: Manual section.
        date: Date argument, if supplied.
        source: Source/package argument, if supplied.
        manual: Manual title, if supplied.
    """

    name: str
    section: str = ""
    date: str | None = None
    source: str | None = None
    manual: str | None = None
