from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st
from roffmark.config import ConvertConfig
from roffmark.converter import convert_text
from roffmark.fonts import FontInterpreter
from roffmark.fragments import FragmentRegistry
from roffmark.models import ColumnFormat, Font
from roffmark.specials import translate_specials
from roffmark.tables import layout_row

escape_tokens = st.sampled_from(
    [
        "\\(em",
        "\\(co",
        "\\(rs",
        "\\[bu]",
        "\\[co]",
        "\\*(lq",
        "\\*R",
        "\\e",
        "\\\\",
        "\\-",
        "\\&",
        "\\(zz",
        "\\[nosuch]",
        "&",
        "<",
        ">",
        ";",
        "#",
        "word",
        " ",
    ]
)


@given(st.lists(escape_tokens, max_size=20))
def test_translation_is_idempotent(tokens: list[str]):
    once = translate_specials("".join(tokens))
    assert translate_specials(once) == once


@given(st.text(alphabet="abc &<>;#12 ", max_size=40))
def test_translation_of_plain_text_is_idempotent(text: str):
    once = translate_specials(text)
    assert translate_specials(once) == once
    assert "<" not in once
    assert ">" not in once


@given(st.lists(st.sampled_from("BIR"), min_size=1, max_size=10))
def test_previous_font_is_the_one_before_the_last_switch(names: list[str]):
    fonts = FontInterpreter()
    for name in names[:-1]:
        fonts.switch(name)
    before_last = fonts.state.current
    fonts.switch(names[-1])

    fonts.switch("P")

    assert fonts.state.current is before_last
    assert fonts.state.previous is Font(names[-1])


@given(st.lists(st.sampled_from(["NAME", "SEE ALSO", "NAME_2", "A  B", "A_B"]), max_size=20))
def test_allocated_fragments_are_unique(headings: list[str]):
    registry = FragmentRegistry()
    anchors = [registry.allocate(heading) for heading in headings]

    assert len(anchors) == len(set(anchors))


@given(st.text(alphabet="ABCXYZ", min_size=1, max_size=8))
def test_first_occurrence_keeps_plain_key(heading: str):
    assert FragmentRegistry().allocate(heading) == heading


operations = st.lists(
    st.sampled_from(
        ["bullet", "term", "tagged", "para", "indent", "rs", "re", "heading", "space", "text"]
    ),
    max_size=30,
)


def _document(ops: list[str]) -> str:
    lines = []
    depth = 0
    for op in ops:
        if op == "bullet":
            lines += [".IP \\(bu 4", "item"]
        elif op == "term":
            lines += [".TP", ".B term"]
        elif op == "tagged":
            lines += [".IP \\-x 4"]
        elif op == "para":
            lines += [".PP"]
        elif op == "indent":
            lines += [".IP"]
        elif op == "rs":
            lines += [".RS 4"]
            depth += 1
        elif op == "re" and depth:
            lines += [".RE"]
            depth -= 1
        elif op == "heading":
            lines += [".SH Section"]
        elif op == "space":
            lines += [".sp"]
        else:
            lines += ["text"]
    return "\n".join(lines) + "\n"


@given(operations)
def test_block_markup_is_balanced(ops: list[str]):
    output = "".join(convert_text(_document(ops), ConvertConfig(output_style="raw")))

    pairs = (("<ul>", "</ul>"), ("<li>", "</li>"), ("<dl>", "</dl>"), ("<dd>", "</dd>"))
    for opening, closing in pairs:
        assert output.count(opening) == output.count(closing)


@given(
    st.lists(st.sampled_from("lrcn"), min_size=1, max_size=5),
    st.integers(min_value=0, max_value=10),
)
def test_formats_are_assigned_by_position(aligns: list[str], cell_count: int):
    formats = [ColumnFormat(align=align) for align in aligns]
    cells = [f"c{index}" for index in range(cell_count)]

    layout = layout_row(cells, formats)

    assert [text for text, _, _ in layout] == cells
    assert [column_format.align for _, column_format, _ in layout] == [
        aligns[min(index, len(aligns) - 1)] for index in range(cell_count)
    ]
