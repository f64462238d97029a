"""pi-table: aligned, bordered text tables for the terminal."""

# Configuration
from pi.table.config import TableOptions, load_options

# Table and convenience constructors
from pi.table.table import Table, build, render

# Core types
from pi.table.types import (
    ALIGNMENTS,
    BORDER_ASCII,
    BORDER_NONE,
    HORIZONTAL_RULE,
    LINE_TERMINATOR,
    Alignment,
    DataRow,
    Row,
    Rule,
)

# Utilities
from pi.table.utils import byte_width, display_width, pad_to_width, strip_ansi

__all__ = [
    # Config
    "TableOptions",
    "load_options",
    # Table
    "Table",
    "build",
    "render",
    # Types
    "ALIGNMENTS",
    "BORDER_ASCII",
    "BORDER_NONE",
    "HORIZONTAL_RULE",
    "LINE_TERMINATOR",
    "Alignment",
    "DataRow",
    "Row",
    "Rule",
    # Utilities
    "byte_width",
    "display_width",
    "pad_to_width",
    "strip_ansi",
]
