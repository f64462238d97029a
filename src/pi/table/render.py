"""Turn a measured grid into bordered text lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from pi.table.types import BORDER_ASCII, LINE_TERMINATOR, Alignment, Row, is_rule
from pi.table.utils import pad_to_width


@dataclass(frozen=True)
class BorderGlyphs:
    vertical: str
    horizontal: str
    intersection: str

    @property
    def enabled(self) -> bool:
        return bool(self.horizontal or self.intersection)


def border_glyphs(border: str | None) -> BorderGlyphs:
    """Glyphs for *border*. A custom border draws with its first character only."""
    if not border:
        return BorderGlyphs("", "", "")
    if border == BORDER_ASCII:
        return BorderGlyphs("|", "-", "+")
    char = border[0]
    return BorderGlyphs(char, char, char)


def separator_line(widths: Sequence[int], glyphs: BorderGlyphs, padding: int) -> str:
    """Horizontal rule: ``+-----+---+`` for ASCII borders, ``""`` without borders."""
    if not glyphs.enabled:
        return ""
    rule = glyphs.horizontal
    sect = glyphs.intersection
    edge = rule * padding
    begin = sect + edge
    end = edge + sect
    joiner = edge + sect + edge
    return begin + joiner.join(rule * w for w in widths) + end


def format_line(
    cells: Sequence[str],
    widths: Sequence[int],
    aligns: Sequence[Alignment],
    glyphs: BorderGlyphs,
    padding: int,
    measure: Callable[[str], int],
) -> str:
    """Pad every cell to its column width and join with border glyphs."""
    pad = " " * padding
    begin = glyphs.vertical + pad
    end = pad + glyphs.vertical
    joiner = pad + glyphs.vertical + pad
    padded = [
        pad_to_width(cell, widths[col], aligns[col], measure)
        for col, cell in enumerate(cells)
    ]
    return begin + joiner.join(padded) + end


def render_lines(
    header_lines: Sequence[Sequence[str]],
    rows: Sequence[Row],
    widths: Sequence[int],
    aligns: Sequence[Alignment],
    glyphs: BorderGlyphs,
    padding: int,
    measure: Callable[[str], int],
) -> list[str]:
    """Lay out the header block and body block, with separators between them."""
    separator = separator_line(widths, glyphs, padding)

    head = [
        format_line(line, widths, aligns, glyphs, padding, measure)
        for line in header_lines
    ]
    body: list[str] = []
    for row in rows:
        if is_rule(row):
            if separator:
                body.append(separator)
        else:
            body.append(format_line(row.cells, widths, aligns, glyphs, padding, measure))

    blocks = [block for block in (head, body) if block]
    lines: list[str] = []
    if blocks and separator:
        lines.append(separator)
    for block in blocks:
        lines.extend(block)
        if separator:
            lines.append(separator)
    return lines


def join_lines(lines: Sequence[str]) -> str:
    if not lines:
        return ""
    return LINE_TERMINATOR.join(lines) + LINE_TERMINATOR
