"""Conversion of man page source into HTML."""

from __future__ import annotations

import html
import io
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import TextIO

from .blocks import BlockStack
from .config import ConvertConfig, validate_config
from .constants import BULLET_GLYPHS, FONT_NAMES, HEADING_TAGS, REQUEST_MARKERS
from .fonts import FontInterpreter
from .fragments import FragmentRegistry
from .lexer import split_request, strip_comment
from .models import TitleInfo
from .output import select_output
from .source import InputResolver
from .specials import link_urls, translate_specials
from .tables import parse_table, render_table

FONT_MACROS = {"B": "B", "I": "I", "R": "R", "SB": "B", "SM": "R"}
ALTERNATING_MACROS = ("BI", "BR", "IB", "IR", "RB", "RI")
INLINE_MACROS = (*FONT_MACROS, *ALTERNATING_MACROS)
PARAGRAPH_REQUESTS = ("PP", "P", "LP", "HP")
# Layout-only requests with no HTML counterpart.
IGNORED_REQUESTS = "ad na hy nh ne PD in ti ll ta bp ns rs hw cs ss pc lf UC DT".split()


class ManConverter:
    """Interpret man page requests and text lines, producing HTML lines.

    One instance converts one document: the font state, block stack, heading
    ids and trailer all live on the instance.

    Args:
        config: Conversion settings. Defaults to a new `ConvertConfig`.
        warn: Optional callback receiving each warning message.

    Raises:
        ConfigError: If the configuration is invalid, including an unknown
            output style.

    Examples:
        lines = ManConverter(ConvertConfig(output_style="raw")).convert("ls.1")
    """

    def __init__(
        self,
        config: ConvertConfig | None = None,
        warn: Callable[[str], None] | None = None,
    ):
        self.config = config or ConvertConfig()
        validate_config(self.config)
        self.output = select_output(self.config)
        self.source = InputResolver(max_depth=self.config.max_include_depth)
        self.fonts = FontInterpreter()
        self.blocks = BlockStack()
        self.fragments = FragmentRegistry()
        self.warn = warn
        self.warnings: list[str] = []
        self.lines: list[str] = []
        self.trailer: list[str] = []
        self.preformatted = False
        self.link_open = False
        self.requests = self._build_request_table()

    def _build_request_table(self) -> dict[str, Callable[[list[str]], list[str]]]:
        requests: dict[str, Callable[[list[str]], list[str]]] = {
            "TH": self._title,
            "IP": self._indented_paragraph,
            "TP": self._tagged_paragraph,
            "RS": self._enter_margin,
            "RE": self._exit_margin,
            "ft": self._font_request,
            "br": self._line_break,
            "sp": self._vertical_space,
            "nf": self._no_fill,
            "EX": self._no_fill,
            "fi": self._fill,
            "EE": self._fill,
            "UR": partial(self._link_start, ""),
            "MT": partial(self._link_start, "mailto:"),
            "UE": self._link_end,
            "ME": self._link_end,
            "so": self._include,
            "TS": self._table,
            "TE": self._stray_table_end,
        }
        for name in HEADING_TAGS:
            requests[name] = partial(self._heading, name)
        for name in PARAGRAPH_REQUESTS:
            requests[name] = self._paragraph
        for name in FONT_MACROS:
            requests[name] = partial(self._font_macro, name)
        for name in ALTERNATING_MACROS:
            requests[name] = partial(self._alternating_macro, name)
        for name in IGNORED_REQUESTS:
            requests[name] = self._ignore
        return requests

    def convert(self, name: str) -> list[str]:
        """Convert the named source file.

        Raises:
            SourceNotFoundError: If the file or one of its includes is missing.
        """
        self.source.open(name)
        return self.run()

    def convert_stream(self, name: str, handle: TextIO) -> list[str]:
        """Convert an already open stream; `name` is used in diagnostics."""
        self.source.push(name, handle)
        return self.run()

    def run(self) -> list[str]:
        """Process every line of the sources on the input stack.

        Returns:
            list[str]: Output lines, each ending with a newline.
        """
        try:
            while True:
                line = self.source.next_line()
                if line is None:
                    break
                self.lines.extend(self.process_line(line))
        finally:
            self.source.close()

        self.lines.extend(self._finish())
        return [f"{line}\n" for line in self.lines]

    def _finish(self) -> list[str]:
        markup = []
        font_close = self.fonts.close()
        if font_close:
            markup.append(font_close)
        if self.link_open:
            markup.append("</a>")
            self.link_open = False
        if self.preformatted:
            markup.append("</pre>")
            self.preformatted = False
        markup.extend(self.blocks.finish())
        markup.extend(self.trailer)
        return markup

    def warning(self, message: str) -> None:
        """Record a recoverable problem at the current input location."""
        message = f"{self.source.location}: warning: {message}"
        self.warnings.append(message)
        if self.warn is not None:
            self.warn(message)

    def process_line(self, line: str) -> list[str]:
        """Route one input line to the request table or the text path."""
        if line.startswith(REQUEST_MARKERS):
            return self.process_request(line[1:])

        text = strip_comment(line)
        if not text.strip():
            if text != line:
                return []
            return [""] if self.preformatted else self.blocks.paragraph()
        return [self.render_text(text)]

    def process_request(self, text: str) -> list[str]:
        words = split_request(strip_comment(text))
        if not words:
            return []
        command, args = words[0], words[1:]
        handler = self.requests.get(command)
        if handler is None:
            self.warning(f"unknown request .{command}")
            return []
        return handler(args)

    def render_text(self, text: str) -> str:
        """Translate a text line; the font stays open across lines."""
        markup = self.fonts.translate(translate_specials(text))
        return markup if self.link_open else link_urls(markup)

    def _render_closed(self, text: str) -> str:
        return self.fonts.translate(translate_specials(text), add_close=True)

    def _render_cell(self, text: str) -> str:
        return FontInterpreter().translate(translate_specials(text), add_close=True)

    def _read_argument_line(self, request: str, font: str | None = None) -> str:
        """Consume the next input line as the text argument of `request`.

        Comment lines are skipped. A font macro may stand in for the text and
        is rendered inline; any other request is reported and dropped, leaving
        the text empty.

        Args:
            request: Name of the request that wants the text, for diagnostics.
            font: Set the text in this font and return to the previous one
                afterwards.

        Returns:
            str: Rendered text, without a trailing newline.
        """
        while True:
            line = self.source.next_line()
            if line is None:
                self.warning(f"end of input while reading the text of .{request}")
                return ""
            if not line.startswith(REQUEST_MARKERS):
                text = strip_comment(line)
                if font is None:
                    return self.render_text(text)
                return self.fonts.apply(font, [translate_specials(text)])

            words = split_request(strip_comment(line[1:]))
            if not words:
                continue
            command, args = words[0], words[1:]
            if command in INLINE_MACROS:
                return "".join(self.requests[command](args))
            self.warning(f"request .{command} in the text of .{request} ignored")
            return ""

    def _title(self, args: list[str]) -> list[str]:
        fields = args + [None] * (5 - len(args))
        title = TitleInfo(
            name=fields[0] or "",
            section=fields[1] or "",
            date=fields[2] or None,
            source=fields[3] or None,
            manual=fields[4] or None,
        )
        self.trailer = self.output.trailer()
        return self.output.header(title)

    def _heading(self, request: str, args: list[str]) -> list[str]:
        tag = HEADING_TAGS[request]
        markup = []
        font_close = self.fonts.close()
        if font_close:
            markup.append(font_close)
        markup.extend(self.blocks.close_all())

        if args:
            label = self._render_closed(" ".join(args))
        else:
            label = self._read_argument_line(request) + self.fonts.close()
        anchor = self.fragments.allocate(label).replace('"', "&quot;")
        markup.append(f'<{tag} id="{anchor}"><a href="#{anchor}">{label}</a></{tag}>')
        return markup

    def _paragraph(self, args: list[str]) -> list[str]:
        if self.preformatted:
            return [""]
        return self.blocks.paragraph()

    def _indented_paragraph(self, args: list[str]) -> list[str]:
        tag = args[0] if args else ""
        if not tag:
            return self.blocks.paragraph(indented=True)
        if tag in BULLET_GLYPHS:
            return self.blocks.bullet_item(self._read_argument_line("IP"))
        return self.blocks.definition_term(self._render_closed(tag))

    def _tagged_paragraph(self, args: list[str]) -> list[str]:
        term = self._read_argument_line("TP") + self.fonts.close()
        return self.blocks.definition_term(term)

    def _enter_margin(self, args: list[str]) -> list[str]:
        return self.blocks.enter_margin()

    def _exit_margin(self, args: list[str]) -> list[str]:
        markup, matched = self.blocks.exit_margin()
        if not matched:
            self.warning(".RE without matching .RS")
        return markup

    def _font_macro(self, request: str, args: list[str]) -> list[str]:
        font = FONT_MACROS[request]
        if args:
            markup = self.fonts.apply(font, [translate_specials(arg) for arg in args])
        else:
            # With no arguments the macro applies to the next input line only.
            markup = self._read_argument_line(request, font=font)
        return [markup] if markup else []

    def _alternating_macro(self, fonts: str, args: list[str]) -> list[str]:
        if not args:
            return []
        return [self.fonts.alternate(fonts, [translate_specials(arg) for arg in args])]

    def _font_request(self, args: list[str]) -> list[str]:
        font = FONT_NAMES.get(args[0] if args else "P")
        if font is None:
            self.warning(f"unknown font {args[0]}")
            return []
        markup = self.fonts.switch(font)
        return [markup] if markup else []

    def _line_break(self, args: list[str]) -> list[str]:
        return ["<br>"]

    def _vertical_space(self, args: list[str]) -> list[str]:
        if self.preformatted:
            return [""]
        return self.blocks.paragraph(indented=True)

    def _no_fill(self, args: list[str]) -> list[str]:
        if self.preformatted:
            return []
        self.preformatted = True
        return ["<pre>"]

    def _fill(self, args: list[str]) -> list[str]:
        if not self.preformatted:
            return []
        self.preformatted = False
        return ["</pre>"]

    def _link_start(self, scheme: str, args: list[str]) -> list[str]:
        if not args or self.link_open:
            return []
        self.link_open = True
        return [f'<a href="{html.escape(scheme + args[0])}">']

    def _link_end(self, args: list[str]) -> list[str]:
        if not self.link_open:
            return []
        self.link_open = False
        return ["</a>" + self.render_text(" ".join(args))]

    def _include(self, args: list[str]) -> list[str]:
        if not args:
            self.warning(".so without a file name")
            return []
        self.source.open(args[0])
        return []

    def _table(self, args: list[str]) -> list[str]:
        spec = parse_table(self.source.next_line, lambda: self.source.location)
        return render_table(spec, self._render_cell)

    def _stray_table_end(self, args: list[str]) -> list[str]:
        self.warning(".TE without matching .TS")
        return []

    def _ignore(self, args: list[str]) -> list[str]:
        return []


def convert_file(
    filepath: Path | str,
    config: ConvertConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> list[str]:
    """Convert a man page file.

    Args:
        filepath: Path to the roff source.
        config: Conversion settings; defaults to a new `ConvertConfig`.
        warn: Optional callback receiving warning messages.

    Returns:
        list[str]: Output lines, each ending with a newline.

    Raises:
        ConvertError: If a source cannot be opened or a table cell is left open.
        ConfigError: If the configuration is invalid.

    Examples:
        html_lines = convert_file("curl.1", ConvertConfig(output_style="raw"))
    """
    return ManConverter(config, warn).convert(str(filepath))


def convert_text(
    content: str,
    config: ConvertConfig | None = None,
    warn: Callable[[str], None] | None = None,
    name: str = "<string>",
) -> list[str]:
    """Convert man page source held in a string.

    ``.so`` includes are resolved relative to the directory part of `name`.

    Examples:
        "".join(convert_text(".SH NAME\\n", ConvertConfig(output_style="raw")))
    """
    return ManConverter(config, warn).convert_stream(name, io.StringIO(content))
