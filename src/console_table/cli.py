"""Command-line interface for console-table."""

from __future__ import annotations

import logging
import sys
from dataclasses import replace

import click

from .exceptions import ConsoleTableError
from .manifest import FORMATS, TableDocument
from .models import Align, Border, TableOptions

logger = logging.getLogger(__name__)

NEWLINES = {"crlf": "\r\n", "lf": "\n"}


def _parse_columns(value: str | None) -> list[int]:
    if not value:
        return []
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError as e:
        raise click.BadParameter(f"expected comma-separated column numbers, got {value!r}") from e


def _parse_column_aligns(values: tuple[str, ...]) -> dict[int, Align]:
    result: dict[int, Align] = {}
    for value in values:
        col, sep, align = value.partition("=")
        if not sep:
            raise click.BadParameter(f"expected COLUMN=ALIGN, got {value!r}")
        try:
            result[int(col)] = Align.parse(align)
        except (ValueError, ConsoleTableError) as e:
            raise click.BadParameter(f"expected COLUMN=ALIGN, got {value!r}") from e
    return result


@click.group()
@click.version_option(package_name="console-table")
@click.option("-v", "--verbose", is_flag=True, help="Log layout details to stderr")
def cli(verbose: bool) -> None:
    """console-table: render tabular data as bordered text."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@click.argument("source", type=click.Path(allow_dash=True, dir_okay=False), default="-")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(FORMATS),
    default="auto",
    help="Input format (default: from file suffix, YAML for stdin)",
)
@click.option(
    "--align",
    type=click.Choice(["left", "center", "right"]),
    help="Default column alignment",
)
@click.option(
    "--border",
    help="'ascii', 'none', or a single border character",
)
@click.option(
    "--padding",
    type=click.IntRange(min=0),
    help="Spaces on each side of a cell",
)
@click.option("--encoding", help="Text encoding used to measure display width")
@click.option("--totals", help="Comma-separated column numbers to total (e.g. 1,2)")
@click.option(
    "--column-align",
    "column_aligns",
    multiple=True,
    help="Per-column alignment as COLUMN=ALIGN (repeatable, e.g. 1=right)",
)
@click.option(
    "--newline",
    type=click.Choice(sorted(NEWLINES)),
    help="Line terminator (default: crlf, or CONSOLE_TABLE_LINE_TERMINATOR)",
)
def render(
    source: str,
    fmt: str,
    align: str | None,
    border: str | None,
    padding: int | None,
    encoding: str | None,
    totals: str | None,
    column_aligns: tuple[str, ...],
    newline: str | None,
) -> None:
    """Render a YAML, JSON or CSV table document.

    SOURCE is a file path, or '-' to read standard input.
    """
    total_columns = _parse_columns(totals)
    aligns = _parse_column_aligns(column_aligns)

    try:
        if source == "-":
            document = TableDocument.loads(click.get_text_stream("stdin").read(), fmt, "<stdin>")
        else:
            document = TableDocument.load(source, fmt)

        options = document.table_options(TableOptions.from_environment())
        overrides: dict[str, object] = {}
        if align is not None:
            overrides["align"] = Align.parse(align)
        if border is not None:
            overrides["border"] = Border.parse(border)
        if padding is not None:
            overrides["padding"] = padding
        if encoding is not None:
            overrides["encoding"] = encoding
        if newline is not None:
            overrides["line_terminator"] = NEWLINES[newline]
        options = replace(options, **overrides)

        table = document.build(options)
        for col_index, col_align in aligns.items():
            table.set_align(col_index, col_align)
        if total_columns:
            table.calculate_totals_for(total_columns)

        output = table.get_table()
    except ConsoleTableError as e:
        logger.debug("Render failed", exc_info=True)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(output, nl=False)


if __name__ == "__main__":
    cli()
