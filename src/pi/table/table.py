"""Table - build a grid of cells incrementally and render it as bordered text.

Example::

    table = Table()
    table.set_headers(["Name", "Age"])
    table.add_row(["Alice", 30])
    table.add_row(["Bob", 5])
    print(table.render(), end="")

Rendering works on a copy of the data: filters and totals are applied afresh
each time, so repeated renders of the same table produce the same text.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from pi.table.grid import Grid, as_values
from pi.table.layout import column_widths, split_header_lines, split_multiline_rows
from pi.table.render import border_glyphs, join_lines, render_lines
from pi.table.types import (
    BORDER_ASCII,
    Alignment,
    DataRow,
    Row,
    coerce_alignment,
    is_rule,
)
from pi.table.utils import display_width, is_known_charset, resolve_width_fn, to_cell

logger = logging.getLogger(__name__)

CellFilter = Callable[[str], Any]


def _identity(text: str) -> str:
    return text


class Table:
    """A console table with configurable alignment, border and padding."""

    def __init__(
        self,
        align: Alignment = "left",
        border: str | None = BORDER_ASCII,
        padding: int = 1,
        charset: str = "utf-8",
        color_strip_fn: Callable[[str], str] | None = None,
        width_fn: Callable[[str], int] | None = None,
    ) -> None:
        if color_strip_fn and not callable(color_strip_fn):
            raise TypeError("Invalid color strip function")
        if width_fn is not None and not callable(width_fn):
            raise TypeError("Invalid width function")

        self._default_align: Alignment = coerce_alignment(align)
        self._border = border
        try:
            self._padding = max(0, int(padding))
        except (TypeError, ValueError):
            self._padding = 1
        self._color_strip_fn: Callable[[str], str] = color_strip_fn or _identity
        self._custom_width_fn = width_fn
        self._width_fn: Callable[[str], int] = width_fn or display_width

        self._grid = Grid()
        self._col_align: dict[int, Alignment] = {}
        self._filters: list[tuple[int, CellFilter]] = []
        self._totals: list[int] = []

        self.set_charset(charset)

    # -- configuration ------------------------------------------------------

    @property
    def charset(self) -> str:
        return self._grid.charset

    def set_charset(self, charset: str) -> None:
        """Set the charset used to decode bytes cells and to pick a width strategy."""
        charset = (charset or "utf-8").lower()
        self._grid.charset = charset
        if self._custom_width_fn is None:
            if not is_known_charset(charset):
                logger.warning(
                    "Unknown charset %r, measuring cell width in bytes", charset
                )
            self._width_fn = resolve_width_fn(charset)

    def set_column_alignment(self, col: int, align: Alignment = "left") -> None:
        """Override alignment for one column. Unknown values use the default."""
        self._col_align[col] = coerce_alignment(align, self._default_align)

    def column_alignment(self, col: int) -> Alignment:
        return self._col_align.get(col, self._default_align)

    def add_filter(self, col: int, callback: CellFilter) -> None:
        """Register a callback run over column *col* of every data row before rendering.

        Filters run in the order they were added. Their results are coerced
        back to text.
        """
        if not callable(callback):
            raise TypeError("Invalid filter callback")
        self._filters.append((col, callback))

    def calculate_totals_for(self, cols: Iterable[int]) -> None:
        """Append a rule and a row of column sums for *cols* when rendering."""
        totals: list[int] = []
        for c in cols:
            try:
                totals.append(int(c))
            except (TypeError, ValueError):
                logger.debug("Ignoring totals column %r", c)
        self._totals = totals

    # -- building -----------------------------------------------------------

    @property
    def headers(self) -> list[str]:
        return list(self._grid.headers[0]) if self._grid.headers else []

    @property
    def rows(self) -> list[Row]:
        self._grid.normalize()
        return list(self._grid.rows)  # type: ignore[arg-type]

    @property
    def max_cols(self) -> int:
        return self._grid.max_cols

    @property
    def max_rows(self) -> int:
        return self._grid.max_rows

    def set_headers(self, headers: Iterable[Any]) -> None:
        self._grid.set_headers(headers)

    def add_row(self, row: Iterable[Any], append: bool = True) -> None:
        """Add a row at the end, or at the start when *append* is false."""
        if append:
            self._grid.append(row)
        else:
            self._grid.prepend(row)

    def insert_row(self, row: Iterable[Any], index: int = 0) -> None:
        """Insert a row before row number *index*, shifting later rows down."""
        self._grid.insert(row, index)

    def add_column(self, cells: Iterable[Any], col: int = 0, start_row: int = 0) -> None:
        """Fill column *col* downwards from *start_row*, overwriting existing cells."""
        self._grid.add_column(cells, col, start_row)

    def add_bulk_data(
        self, rows: Iterable[Any], start_col: int = 0, start_row: int = 0
    ) -> None:
        """Write a block of rows starting at (*start_row*, *start_col*).

        Entries equal to :data:`HORIZONTAL_RULE` become separator rows.
        """
        self._grid.add_bulk(rows, start_col, start_row)

    def add_separator(self) -> None:
        self._grid.append_rule()

    # -- rendering ----------------------------------------------------------

    def _measure(self, text: str) -> int:
        return self._width_fn(self._color_strip_fn(text))

    def _apply_filters(self, grid: Grid) -> None:
        for col, callback in self._filters:
            for row in grid.rows:
                if not isinstance(row, DataRow):
                    continue
                if col < 0 or col >= len(row.cells):
                    logger.debug("Filter column %d out of range, skipping row", col)
                    continue
                row.cells[col] = to_cell(callback(row.cells[col]), grid.charset)

    def _apply_totals(self, grid: Grid) -> None:
        cols = sorted({c for c in self._totals if c >= 0})
        if not cols or (not grid.headers and not grid.rows):
            return

        sums = {c: Decimal(0) for c in cols}
        for row in grid.rows:
            if not isinstance(row, DataRow):
                continue
            for c in cols:
                if c < len(row.cells):
                    sums[c] += _parse_number(row.cells[c])

        totals = [""] * (cols[-1] + 1)
        for c in cols:
            totals[c] = str(sums[c])

        grid.append_rule()
        grid.append(totals)
        logger.debug("Appended totals row for columns %s", cols)

    def render(self) -> str:
        """Return the table as text, lines terminated by ``\\r\\n``.

        An empty table renders as ``""``.
        """
        self._grid.normalize()
        grid = self._grid.copy()

        self._apply_filters(grid)
        self._apply_totals(grid)
        grid.normalize()

        headers = split_header_lines(grid.headers)
        rows: list[Row] = split_multiline_rows(list(grid.rows))  # type: ignore[arg-type]

        if not headers and not rows:
            return ""

        widths = column_widths(headers, rows, grid.max_cols, self._measure)
        aligns = [self.column_alignment(col) for col in range(len(widths))]
        glyphs = border_glyphs(self._border)

        lines = render_lines(headers, rows, widths, aligns, glyphs, self._padding, self._measure)
        logger.debug(
            "Rendered table: %d header lines, %d body rows, %d columns",
            len(headers), len(rows), len(widths),
        )
        return join_lines(lines)

    def __str__(self) -> str:
        return self.render()


def _parse_number(text: str) -> Decimal:
    """Parse a cell for totals. Blank or non-numeric cells count as zero."""
    text = text.strip()
    if not text:
        return Decimal(0)
    try:
        value = Decimal(text)
    except InvalidOperation:
        return Decimal(0)
    if not value.is_finite():
        return Decimal(0)
    return value


# ---------------------------------------------------------------------------
# Convenience constructors
# ---------------------------------------------------------------------------

def _is_collection(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, Iterable)


def build(headers: Any, rows: Any, **options: Any) -> Table | None:
    """Build a table from *headers* and *rows*.

    Returns ``None`` if either argument is not a collection. *options* are
    passed through to :class:`Table`.
    """
    if not _is_collection(headers) or not _is_collection(rows):
        return None

    table = Table(**options)
    table.set_headers(as_values(headers))
    for row in as_values(rows):
        if is_rule(row):
            table.add_separator()
        else:
            table.add_row(row)
    return table


def render(table: Table) -> str:
    return table.render()
