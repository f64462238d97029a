"""Default table options, overridable through PI_TABLE_* environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

from pi.table.table import Table
from pi.table.types import BORDER_ASCII, Alignment, coerce_alignment
from pi.table.utils import strip_ansi

logger = logging.getLogger(__name__)

ENV_ALIGN = "PI_TABLE_ALIGN"
ENV_BORDER = "PI_TABLE_BORDER"
ENV_PADDING = "PI_TABLE_PADDING"
ENV_CHARSET = "PI_TABLE_CHARSET"


@dataclass
class TableOptions:
    align: Alignment = "left"
    border: str = BORDER_ASCII
    padding: int = 1
    charset: str = "utf-8"
    strip_ansi: bool = True

    def create_table(self) -> Table:
        return Table(
            align=self.align,
            border=self.border,
            padding=self.padding,
            charset=self.charset,
            color_strip_fn=strip_ansi if self.strip_ansi else None,
        )


def parse_border(value: str) -> str:
    """Map a user-facing border name to a border setting.

    ``ascii`` selects the ASCII style, ``none`` or an empty string disables
    borders, and a single character draws the whole border. Anything else
    raises :class:`ValueError`.
    """
    if value.lower() == "none":
        return ""
    if value.lower() == BORDER_ASCII:
        return BORDER_ASCII
    if len(value) > 1:
        raise ValueError(f"Border must be ascii, none or a single character, got {value!r}")
    return value


def load_options(environ: Mapping[str, str] | None = None) -> TableOptions:
    env = os.environ if environ is None else environ
    options = TableOptions()

    if ENV_ALIGN in env:
        options.align = coerce_alignment(env[ENV_ALIGN], options.align)
    if ENV_BORDER in env:
        try:
            options.border = parse_border(env[ENV_BORDER])
        except ValueError:
            logger.warning("Ignoring %s=%r", ENV_BORDER, env[ENV_BORDER])
    if ENV_PADDING in env:
        try:
            options.padding = max(0, int(env[ENV_PADDING]))
        except ValueError:
            pass  # keep the default
    if env.get(ENV_CHARSET):
        options.charset = env[ENV_CHARSET]

    return options
