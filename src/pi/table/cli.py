"""CLI entry point for pi-table. Uses Click for argument parsing."""

from __future__ import annotations

import logging

import click

from pi.table.config import load_options, parse_border
from pi.table.table import Table
from pi.table.types import ALIGNMENTS, Alignment
from pi.table.utils import is_known_charset

logger = logging.getLogger(__name__)

SEPARATOR_LINE = "---"


def _parse_column_alignment(ctx, param, values) -> list[tuple[int, Alignment]]:
    """Validate repeated ``COL=ALIGN`` options."""
    parsed: list[tuple[int, Alignment]] = []
    for value in values:
        col, sep, align = value.partition("=")
        align = align.strip().lower()
        if not sep or not col.strip().isdigit() or align not in ALIGNMENTS:
            raise click.BadParameter(
                f"expected COL=ALIGN with ALIGN one of {', '.join(ALIGNMENTS)}, got {value!r}",
                ctx=ctx,
                param=param,
            )
        parsed.append((int(col), align))  # type: ignore[arg-type]
    return parsed


def _decode(data: bytes, charset: str) -> str:
    if not is_known_charset(charset):
        charset = "utf-8"
    return data.decode(charset, errors="replace")


def build_table(
    text: str,
    table: Table,
    delimiter: str = "\t",
    header: bool = True,
) -> Table:
    """Load delimited *text* into *table*. ``---`` lines become separators."""
    first = True
    for line in text.splitlines():
        if not line.strip():
            continue
        if line.strip() == SEPARATOR_LINE:
            table.add_separator()
            continue
        cells = line.split(delimiter)
        if header and first:
            table.set_headers(cells)
        else:
            table.add_row(cells)
        first = False
    return table


@click.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option("-d", "--delimiter", default="\t", show_default="tab", help="Cell delimiter")
@click.option("--header/--no-header", default=True, help="Treat the first line as the header")
@click.option(
    "-a",
    "--align",
    type=click.Choice(ALIGNMENTS, case_sensitive=False),
    default=None,
    help="Default column alignment",
)
@click.option(
    "--align-column",
    "column_aligns",
    multiple=True,
    metavar="COL=ALIGN",
    callback=_parse_column_alignment,
    help="Alignment for a single column (repeatable)",
)
@click.option("-b", "--border", default=None, help="Border style: ascii, none, or a single character")
@click.option("-p", "--padding", type=click.IntRange(min=0), default=None, help="Spaces around borders")
@click.option("--strip-ansi/--no-strip-ansi", default=None, help="Ignore ANSI colors when measuring")
@click.option("-t", "--total", "totals", type=click.IntRange(min=0), multiple=True, help="Column to sum (repeatable)")
@click.option("--charset", default=None, help="Input character set")
@click.option(
    "--log-level",
    default="warning",
    type=click.Choice(["debug", "info", "warning", "error"]),
)
def main(
    source,
    delimiter,
    header,
    align,
    column_aligns,
    border,
    padding,
    strip_ansi,
    totals,
    charset,
    log_level,
):
    """Render delimited text from SOURCE (or stdin) as an aligned table."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    options = load_options()
    if align is not None:
        options.align = align.lower()
    if border is not None:
        try:
            options.border = parse_border(border)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--border") from exc
    if padding is not None:
        options.padding = padding
    if strip_ansi is not None:
        options.strip_ansi = strip_ansi
    if charset:
        options.charset = charset

    if not delimiter:
        raise click.BadParameter("delimiter must not be empty", param_hint="--delimiter")

    table = options.create_table()
    for col, col_align in column_aligns:
        table.set_column_alignment(col, col_align)
    if totals:
        table.calculate_totals_for(totals)

    text = _decode(source.read(), options.charset)
    build_table(text, table, delimiter=delimiter, header=header)
    logger.debug("Loaded %d rows x %d columns", table.max_rows, table.max_cols)

    click.echo(table.render(), nl=False)


if __name__ == "__main__":
    main()
