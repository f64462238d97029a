"""Text utilities for table layout: width measurement, ANSI stripping, padding.

Display width is measured per grapheme cluster so that wide CJK characters,
emoji sequences and combining marks line up in a terminal. ANSI sequences are
*not* stripped here; tables opt into that through a color-strip function such
as :func:`strip_ansi`.
"""

from __future__ import annotations

import codecs
import math
import re
from typing import Any, Callable

import grapheme
import wcwidth as _wcwidth

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# SGR and other CSI sequences, plus OSC 8 hyperlinks terminated by BEL or ST.
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]|\x1b\]8;[^\x07\x1b]*(?:\x07|\x1b\\)")

_LINE_BREAK_RE = re.compile(r"\r\n|\n|\r")

_TAB_WIDTH = 3

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# ANSI stripping
# ---------------------------------------------------------------------------

def strip_ansi(text: str) -> str:
    """Remove terminal color codes and hyperlinks from *text*."""
    if "\x1b" not in text:
        return text
    return _ANSI_RE.sub("", text)


def _cluster_width(cluster: str) -> int:
    # Emoji presentation (VS16) and ZWJ sequences render as one wide glyph.
    # Otherwise the base character decides and marks riding on it add nothing.
    if "\ufe0f" in cluster or "\u200d" in cluster:
        return 2
    return max(_wcwidth.wcwidth(cluster[0]), 0)


# ---------------------------------------------------------------------------
# Width strategies
# ---------------------------------------------------------------------------

def display_width(text: str) -> int:
    """Calculate the number of terminal columns *text* occupies.

    * Tabs count as 3 columns.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    text = text.replace("\t", " " * _TAB_WIDTH)

    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(text):
        total += _cluster_width(g)

    return _cache_width(text, total)


def byte_width(text: str) -> int:
    """Degraded width: the length of the UTF-8 encoding of *text*."""
    return len(text.encode("utf-8", errors="surrogateescape"))


def is_known_charset(charset: str) -> bool:
    try:
        codecs.lookup(charset)
    except LookupError:
        return False
    return True


def resolve_width_fn(charset: str) -> Callable[[str], int]:
    """Pick the width strategy for *charset*.

    Any charset Python can decode gets grapheme-aware measurement; unknown
    names fall back to :func:`byte_width`.
    """
    if is_known_charset(charset):
        return display_width
    return byte_width


# ---------------------------------------------------------------------------
# Cells
# ---------------------------------------------------------------------------

def to_cell(value: Any, charset: str = "utf-8") -> str:
    """Coerce an arbitrary value into cell text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        if not is_known_charset(charset):
            charset = "utf-8"
        return bytes(value).decode(charset, errors="replace")
    return str(value)


def split_lines(text: str) -> list[str]:
    """Split on ``\\r\\n``, ``\\n`` or ``\\r``. Always returns at least one line."""
    return _LINE_BREAK_RE.split(text)


def line_count(text: str) -> int:
    if "\n" not in text and "\r" not in text:
        return 1
    return len(split_lines(text))


def pad_to_width(
    text: str,
    width: int,
    align: Alignment = "left",
    measure: Callable[[str], int] = display_width,
) -> str:
    """Pad *text* with spaces to *width* columns.

    Center alignment puts the smaller half of the slack on the left. Text
    that is already wide enough is returned unchanged.
    """
    slack = width - measure(text)
    if slack <= 0:
        return text
    if align == "right":
        return " " * slack + text
    if align == "center":
        left = math.floor(slack / 2)
        return " " * left + text + " " * (slack - left)
    return text + " " * slack
