"""
Converts a man page written in roff to HTML.
The result goes to stdout unless an output file is given.
"""

from __future__ import annotations

from pathlib import Path

import click
from .config import OUTPUT_STYLES, ConfigError, build_config
from .converter import ManConverter
from .exceptions import ConvertError
from .filesystem import write_output

__all__ = ["cli"]

STDIO = "-"


@click.command()
@click.version_option()
@click.option("-o", "--output", "output_path", default=STDIO, help="Output file (default: stdout)")
@click.option("--style", type=click.Choice(OUTPUT_STYLES), help="Output style")
@click.option("--permalink", help="Permalink written into the front matter")
@click.option("--package", help="Package name written into the front matter")
@click.option("--date", help="Date written into the front matter")
@click.argument(
    "input_path", default=STDIO, required=False, type=click.Path(dir_okay=False, allow_dash=True)
)
def cli(
    input_path: str = STDIO,
    output_path: str = STDIO,
    style: str | None = None,
    permalink: str | None = None,
    package: str | None = None,
    date: str | None = None,
):
    """
    Entry point for converting a man page.

    Args:
        input_path: Path to the roff source, or ``-`` for stdin.
        output_path: Path of the output file, or ``-`` for stdout.
        style: Override for the output style.
        permalink: Front matter permalink.
        package: Front matter package name.
        date: Front matter date.

    Raises:
        click.BadParameter: If the configuration is invalid.
        click.ClickException: If a source cannot be read, a table cell is left
            open, or the output cannot be written.

    Examples:
        roffmark curl.1 -o curl.1.html
        roffmark --style frontmatter --permalink /man/curl.1/ curl.1
    """
    search_path = Path.cwd() if input_path == STDIO else Path(input_path).parent
    try:
        config = build_config(
            search_path,
            output_style=style,
            permalink=permalink,
            package=package,
            date=date,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    converter = ManConverter(config, warn=lambda message: click.echo(message, err=True))
    try:
        if input_path == STDIO:
            lines = converter.convert_stream("<stdin>", click.get_text_stream("stdin"))
        else:
            lines = converter.convert(input_path)
    except ConvertError as error:
        raise click.ClickException(str(error)) from error

    if output_path == STDIO:
        click.echo("".join(lines), nl=False)
        return

    try:
        write_output(lines, Path(output_path))
    except ConvertError as error:
        raise click.ClickException(str(error)) from error


if __name__ == "__main__":
    cli()
