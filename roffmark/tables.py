"""tbl table parsing and rendering."""

from __future__ import annotations

import re
from collections.abc import Callable

from .constants import (
    REQUEST_MARKERS,
    TABLE_CELL_CLOSE,
    TABLE_CELL_JOINER,
    TABLE_CELL_OPEN,
)
from .exceptions import UnmatchedTableCellError
from .models import ColumnFormat, TableSpec

TAB_OPTION_PATTERN = re.compile(r"tab\s*\((.)\)")
BORDER_OPTIONS = ("box", "allbox", "doublebox", "frame", "doubleframe")
ALIGNMENTS = {"r": ' align="right"', "n": ' align="right"', "c": ' align="center"'}
RULE_STYLES = {"single": "border-left: 1px solid", "double": "border-left: 3px double"}


def parse_options(line: str, spec: TableSpec) -> None:
    """Read the table-wide options line (the one ending in ``;``).

    Examples:
        spec = TableSpec()
        parse_options("tab(;) center;", spec)  # spec.separator == ";"
    """
    tab_match = TAB_OPTION_PATTERN.search(line)
    if tab_match:
        spec.separator = tab_match.group(1)
    remainder = TAB_OPTION_PATTERN.sub(" ", line)
    spec.options = [word.lower() for word in re.findall(r"[A-Za-z]+", remainder)]


def parse_format_line(line: str) -> list[ColumnFormat]:
    """Parse one tbl format line into column formats.

    Key letters ``l r c n a s`` start a column; ``b``, ``i`` and ``fB``/``fI``
    modify the column before them; ``|`` and ``||`` put a rule before the next
    column. Width, spacing and other modifiers are skipped.

    Examples:
        parse_format_line("lb | r.")  # [ColumnFormat(bold=True), ColumnFormat(align="r", rule="single")]
    """
    text = line.strip().rstrip(".")
    columns: list[ColumnFormat] = []
    pending_rule = ""
    i = 0

    while i < len(text):
        char = text[i]
        lower = char.lower()
        if char == "|":
            if text.startswith("||", i):
                pending_rule = "double"
                i += 2
                continue
            pending_rule = "single"
        elif lower in "lrcn":
            columns.append(ColumnFormat(align=lower, rule=pending_rule))
            pending_rule = ""
        elif lower in "as^_-=":
            columns.append(ColumnFormat(span=lower == "s", rule=pending_rule))
            pending_rule = ""
        elif lower == "b" and columns:
            columns[-1].bold = True
        elif lower == "i" and columns:
            columns[-1].italic = True
        elif lower == "f" and columns and i + 1 < len(text):
            font = text[i + 1].upper()
            columns[-1].bold = columns[-1].bold or font == "B"
            columns[-1].italic = columns[-1].italic or font == "I"
            i += 1
        elif lower == "w" and text.startswith("(", i + 1):
            end = text.find(")", i)
            i = end if end != -1 else len(text)
        i += 1

    return columns


def _is_request(line: str) -> bool:
    return line.startswith(REQUEST_MARKERS)


def _is_table_end(line: str) -> bool:
    return _is_request(line) and line[1:].strip().split()[:1] == ["TE"]


def parse_table(
    read_line: Callable[[], str | None], location: Callable[[], str]
) -> TableSpec:
    """Consume a table body up to and including ``.TE``.

    The format phase reads the optional options line and the format lines, the
    last of which ends with a period. The body phase collects data rows;
    a row holding more ``T{`` than ``T}`` markers keeps absorbing input lines
    until the cells are closed.

    Args:
        read_line: Returns the next raw input line, or None at the end of input.
        location: Returns ``name:line`` of the line read last.

    Returns:
        TableSpec: Options, format lines and logical data rows.

    Raises:
        UnmatchedTableCellError: If the input ends inside a ``T{`` cell.
    """
    spec = TableSpec()

    while True:
        line = read_line()
        if line is None:
            return spec
        stripped = line.strip()
        if not stripped:
            continue
        if _is_table_end(line):
            return spec
        if stripped.endswith(";") and not spec.formats:
            parse_options(stripped[:-1], spec)
            continue
        # A comma separates format rows just like a line break.
        spec.formats.extend(
            parse_format_line(part) for part in stripped.split(",") if part.strip()
        )
        if stripped.endswith("."):
            break

    while True:
        line = read_line()
        if line is None or _is_table_end(line):
            return spec
        if _is_request(line) or line.strip() in ("_", "="):
            continue
        if TABLE_CELL_OPEN in line:
            opened_at = location()
            while line.count(TABLE_CELL_OPEN) > line.count(TABLE_CELL_CLOSE):
                more = read_line()
                if more is None:
                    raise UnmatchedTableCellError(opened_at)
                if _is_request(more):
                    continue
                line += TABLE_CELL_JOINER + more
        spec.rows.append([_clean_cell(cell) for cell in line.split(spec.separator)])


def _clean_cell(cell: str) -> str:
    cell = cell.strip()
    if cell.startswith(TABLE_CELL_OPEN):
        cell = cell[len(TABLE_CELL_OPEN) :]
    if cell.endswith(TABLE_CELL_CLOSE):
        cell = cell[: -len(TABLE_CELL_CLOSE)]
    return cell.strip()


def layout_row(
    cells: list[str], formats: list[ColumnFormat]
) -> list[tuple[str, ColumnFormat, int]]:
    """Pair each cell with its column format and column span.

    Formats are assigned by position; cells beyond the declared columns reuse
    the last format. A span column widens the cell to its left.

    Examples:
        layout_row(["a", "b"], [ColumnFormat(align="r")])  # both cells right-aligned
    """
    layout = []
    column = 0
    for text in cells:
        column_format = formats[min(column, len(formats) - 1)] if formats else ColumnFormat()
        column += 1
        colspan = 1
        while column < len(formats) and formats[column].span:
            colspan += 1
            column += 1
        layout.append((text, column_format, colspan))
    return layout


def _cell_attributes(column_format: ColumnFormat, colspan: int) -> str:
    attributes = ALIGNMENTS.get(column_format.align, "")
    if colspan > 1:
        attributes += f' colspan="{colspan}"'
    if column_format.rule:
        attributes += f' style="{RULE_STYLES[column_format.rule]}"'
    return attributes


def render_table(spec: TableSpec, render_cell: Callable[[str], str]) -> list[str]:
    """Render a parsed table as HTML lines.

    The first ``len(spec.formats) - 1`` rows become header cells when more
    than one format line was given; row ``i`` takes format line ``i`` and later
    rows take the last one.

    Args:
        spec: Parsed table.
        render_cell: Translates raw cell text (with font escapes) to HTML.

    Returns:
        list[str]: ``<table>`` markup, one row per line.
    """
    attributes = ""
    if "center" in spec.options:
        attributes += ' align="center"'
    if any(option in spec.options for option in BORDER_OPTIONS):
        attributes += ' border="1"'

    lines = [f"<table{attributes}>"]
    for index, row in enumerate(spec.rows):
        tag = "th" if index < spec.header_rows else "td"
        formats = spec.formats[min(index, len(spec.formats) - 1)] if spec.formats else []
        cells = []
        for text, column_format, colspan in layout_row(row, formats):
            if column_format.bold:
                text = f"\\fB{text}"
            elif column_format.italic:
                text = f"\\fI{text}"
            cells.append(
                f"<{tag}{_cell_attributes(column_format, colspan)}>{render_cell(text)}</{tag}>"
            )
        lines.append(f"<tr>{''.join(cells)}</tr>")
    lines.append("</table>")
    return lines
