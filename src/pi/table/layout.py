"""Row heights, multi-line splitting and column widths.

All functions expect a normalized grid: data rows hold exactly ``max_cols``
text cells.
"""

from __future__ import annotations

from typing import Callable, Sequence

from pi.table.types import DataRow, Row, is_rule
from pi.table.utils import line_count, split_lines


def row_height(row: Row) -> int:
    """Number of display lines the tallest cell of *row* needs."""
    if is_rule(row):
        return 1
    return max((line_count(cell) for cell in row.cells), default=1)


def split_row(cells: Sequence[str], height: int) -> list[list[str]]:
    """Split one logical row into *height* one-line rows."""
    split = [split_lines(cell) for cell in cells]
    return [
        [lines[i] if i < len(lines) else "" for lines in split]
        for i in range(height)
    ]


def split_header_lines(lines: list[list[str]]) -> list[list[str]]:
    """Expand multi-line header cells into extra header lines, in place."""
    heights = [row_height(DataRow(line)) for line in lines]
    inserted = 0
    for i, height in enumerate(heights):
        if height > 1:
            pos = i + inserted
            lines[pos:pos + 1] = split_row(lines[pos], height)
            inserted += height - 1
    return lines


def split_multiline_rows(rows: list[Row]) -> list[Row]:
    """Expand rows with multi-line cells into synchronized one-line rows.

    The list is modified in place; ``inserted`` tracks how far later rows
    have shifted.
    """
    heights = [row_height(row) for row in rows]
    inserted = 0
    for i, height in enumerate(heights):
        if height <= 1:
            continue
        pos = i + inserted
        row = rows[pos]
        rows[pos:pos + 1] = [DataRow(cells) for cells in split_row(row.cells, height)]
        inserted += height - 1
    return rows


def column_widths(
    header_lines: Sequence[Sequence[str]],
    rows: Sequence[Row],
    max_cols: int,
    measure: Callable[[str], int],
) -> list[int]:
    """Widest measured cell per column across header lines and data rows."""
    widths = [0] * max_cols

    def _update(cells: Sequence[str]) -> None:
        for col, cell in enumerate(cells):
            if col >= len(widths):
                widths.append(0)
            w = measure(cell)
            if w > widths[col]:
                widths[col] = w

    for line in header_lines:
        _update(line)
    for row in rows:
        if not is_rule(row):
            _update(row.cells)

    return widths
