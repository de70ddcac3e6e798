"""Conversion between raw pipe-table text and grids."""

from __future__ import annotations

import re

from .grid import Grid, Row

_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")


def _strip_outer_pipes(line: str) -> str:
    """Drop at most one leading and one trailing unescaped pipe."""

    if line.startswith("|"):
        line = line[1:]
    if line.endswith("|") and not line.endswith("\\|"):
        line = line[:-1]
    return line


def tokenize_line(line: str) -> Row:
    """Split one source line into untrimmed cells.

    Escaped pipes (`\\|`) stay inside their cell with the backslash kept. A line
    that is empty once its outer pipes are removed yields a row with no cells.
    """

    content = _strip_outer_pipes(line)
    if not content:
        return ()
    return tuple(_UNESCAPED_PIPE_RE.split(content))


def tokenize(text: str) -> Grid:
    """Split raw text into a grid, one row per newline-delimited line."""

    return tuple(tokenize_line(line) for line in text.split("\n"))


def serialize_row(row: Row) -> str:
    """Render one row with leading and trailing pipes."""

    return "|" + "|".join(row) + "|"


def serialize(grid: Grid) -> str:
    """Render a grid as newline-joined pipe rows without a trailing newline."""

    return "\n".join(serialize_row(row) for row in grid)
