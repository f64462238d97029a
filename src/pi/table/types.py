"""Core type definitions for pi-table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

Alignment = Literal["left", "center", "right"]

ALIGNMENTS: tuple[Alignment, ...] = ("left", "center", "right")

# Border styles: BORDER_ASCII draws |, - and +; any other non-empty string is
# used for every glyph; "" or None disables borders.
BORDER_ASCII = "ascii"
BORDER_NONE = ""

LINE_TERMINATOR = "\r\n"


@dataclass(frozen=True)
class Rule:
    """A row that only draws a horizontal separator."""

    def __repr__(self) -> str:
        return "HORIZONTAL_RULE"


HORIZONTAL_RULE = Rule()


@dataclass
class DataRow:
    cells: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.cells)


Row = Union[DataRow, Rule]


def is_rule(row: object) -> bool:
    return isinstance(row, Rule)


def coerce_alignment(value: object, default: Alignment = "left") -> Alignment:
    """Return *value* if it names an alignment, otherwise *default*."""
    if isinstance(value, str) and value.lower() in ALIGNMENTS:
        return value.lower()  # type: ignore[return-value]
    return default
