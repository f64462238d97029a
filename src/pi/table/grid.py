"""Grid - the growable row/column store behind a table.

Rows live in a plain list indexed by row number. Writes past the end leave
``None`` holes, and cells past the end of a row are ``None`` until
:meth:`Grid.normalize` densifies the grid. Every mutation marks the grid
dirty; normalizing a clean grid is a no-op.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from pi.table.types import HORIZONTAL_RULE, DataRow, Row, is_rule
from pi.table.utils import to_cell


def as_values(entry: Any) -> list[Any]:
    """Turn a row-like input into a list of raw cell values.

    Mappings contribute their values in insertion order. Strings, bytes and
    other scalars become a single cell.
    """
    if isinstance(entry, Mapping):
        return list(entry.values())
    if isinstance(entry, (str, bytes, bytearray)) or not isinstance(entry, Iterable):
        return [entry]
    return list(entry)


class Grid:
    """Header lines plus a list of rows, with column/row bookkeeping."""

    def __init__(self, charset: str = "utf-8") -> None:
        self.charset = charset
        self.headers: list[list[str]] = []
        self.rows: list[Row | None] = []
        self.max_cols = 0
        self.dirty = False

    @property
    def max_rows(self) -> int:
        return len(self.rows)

    def _cells(self, entry: Any) -> list[str]:
        return [to_cell(value, self.charset) for value in as_values(entry)]

    def _touch(self, width: int = 0) -> None:
        self.max_cols = max(self.max_cols, width)
        self.dirty = True

    def _grow(self, index: int) -> None:
        if index >= len(self.rows):
            self.rows.extend([None] * (index + 1 - len(self.rows)))

    def _data_row_at(self, index: int) -> DataRow:
        self._grow(index)
        row = self.rows[index]
        if not isinstance(row, DataRow):
            row = DataRow()
            self.rows[index] = row
        return row

    # -- building -----------------------------------------------------------

    def set_headers(self, entry: Any) -> None:
        line = self._cells(entry)
        self.headers = [line] if line else []
        self._touch(len(line))

    def append(self, entry: Any) -> None:
        cells = self._cells(entry)
        self.rows.append(DataRow(cells))
        self._touch(len(cells))

    def prepend(self, entry: Any) -> None:
        self.insert(entry, 0)

    def insert(self, entry: Any, index: int = 0) -> None:
        cells = self._cells(entry)
        self.rows.insert(index, DataRow(cells))
        self._touch(len(cells))

    def append_rule(self) -> None:
        self.rows.append(HORIZONTAL_RULE)
        self._touch()

    def set_rule(self, index: int) -> None:
        self._grow(index)
        self.rows[index] = HORIZONTAL_RULE
        self._touch()

    def set_cell(self, row_index: int, col_index: int, value: Any) -> None:
        """Write one cell, overwriting whatever was there."""
        row = self._data_row_at(row_index)
        if col_index >= len(row.cells):
            row.cells.extend([None] * (col_index + 1 - len(row.cells)))
        row.cells[col_index] = to_cell(value, self.charset)
        self._touch(col_index + 1)

    def add_column(self, entry: Any, col_index: int = 0, start_row: int = 0) -> None:
        col_index = max(0, col_index)
        row_index = max(0, start_row)
        for offset, value in enumerate(as_values(entry)):
            self.set_cell(row_index + offset, col_index, value)
        self._touch(col_index + 1)

    def add_bulk(self, rows: Iterable[Any], start_col: int = 0, start_row: int = 0) -> None:
        start_col = max(0, start_col)
        row_index = max(0, start_row)
        for entry in rows:
            if is_rule(entry):
                self.set_rule(row_index)
            else:
                values = as_values(entry)
                for offset, value in enumerate(values):
                    self.set_cell(row_index, start_col + offset, value)
                self._touch(start_col + len(values))
            row_index += 1

    # -- normalizing --------------------------------------------------------

    def normalize(self) -> None:
        """Fill holes so every data row and header line has ``max_cols`` cells."""
        if not self.dirty:
            return

        width = self.max_cols
        for line in self.headers:
            if len(line) < width:
                line.extend([""] * (width - len(line)))

        for index, row in enumerate(self.rows):
            if row is None:
                row = DataRow()
                self.rows[index] = row
            if is_rule(row):
                continue
            cells = ["" if cell is None else cell for cell in row.cells]
            if len(cells) < width:
                cells.extend([""] * (width - len(cells)))
            row.cells = cells

        self.dirty = False

    def copy(self) -> Grid:
        clone = Grid(self.charset)
        clone.headers = [list(line) for line in self.headers]
        clone.rows = [
            DataRow(list(row.cells)) if isinstance(row, DataRow) else row
            for row in self.rows
        ]
        clone.max_cols = self.max_cols
        clone.dirty = self.dirty
        return clone
