"""Output strategies: document header, front matter and trailer."""

from __future__ import annotations

from dataclasses import dataclass

from .config import ConfigError, ConvertConfig
from .constants import (
    FRONT_MATTER_DELIMITER,
    FRONT_MATTER_LAYOUT,
    HTML_PREAMBLE,
    HTML_TRAILER,
    SECTION_DESCRIPTIONS,
)
from .models import TitleInfo
from .specials import translate_specials


def page_title(title: TitleInfo) -> str:
    name = translate_specials(title.name)
    return f"{name}({title.section})" if title.section else name


@dataclass(frozen=True)
class HtmlOutput:
    """Full HTML document: preamble on ``.TH``, closing tags at the end."""

    def header(self, title: TitleInfo) -> list[str]:
        return HTML_PREAMBLE.format(title=page_title(title)).splitlines()

    def trailer(self) -> list[str]:
        return HTML_TRAILER.splitlines()


@dataclass(frozen=True)
class FrontMatterOutput:
    """HTML fragment preceded by a ``---`` delimited metadata block.

    Only fields that were supplied are written. `package` and `date` fall back
    to the ``.TH`` source and date arguments.
    """

    permalink: str | None = None
    package: str | None = None
    date: str | None = None

    def header(self, title: TitleInfo) -> list[str]:
        lines = [FRONT_MATTER_DELIMITER]
        if self.permalink:
            lines.append(f"permalink: {self.permalink}")
        lines.append(f"layout: {FRONT_MATTER_LAYOUT}")
        lines.append(f"title: {page_title(title)}")
        package = self.package or title.source
        if package:
            lines.append(f"package: {package}")
        date = self.date or title.date
        if date:
            lines.append(f"date: {date}")
        description = SECTION_DESCRIPTIONS.get(title.section[:1])
        if description:
            lines.append(f"section: {title.section}")
            lines.append(f"description: {description}")
        lines.append(FRONT_MATTER_DELIMITER)
        return lines

    def trailer(self) -> list[str]:
        return []


@dataclass(frozen=True)
class RawOutput:
    """Bare HTML fragment with no header or trailer."""

    def header(self, title: TitleInfo) -> list[str]:
        return []

    def trailer(self) -> list[str]:
        return []


@dataclass(frozen=True)
class DoxygenOutput:
    """HTML fragment wrapped in a Doxygen ``@page`` comment block."""

    def header(self, title: TitleInfo) -> list[str]:
        anchor = f"{title.name}_{title.section}" if title.section else title.name
        return ["/**", f"@page {anchor} {page_title(title)}"]

    def trailer(self) -> list[str]:
        return [" */"]


OutputStyle = HtmlOutput | FrontMatterOutput | RawOutput | DoxygenOutput


def select_output(config: ConvertConfig) -> OutputStyle:
    """Build the output strategy named by ``config.output_style``.

    Raises:
        ConfigError: If the style name is unknown.

    Examples:
        select_output(ConvertConfig(output_style="raw"))  # RawOutput()
    """
    style = config.output_style
    if style == "html":
        return HtmlOutput()
    if style == "frontmatter":
        return FrontMatterOutput(
            permalink=config.permalink, package=config.package, date=config.date
        )
    if style == "raw":
        return RawOutput()
    if style == "doxygen":
        return DoxygenOutput()
    raise ConfigError(f"Unknown output style: {style!r}")
