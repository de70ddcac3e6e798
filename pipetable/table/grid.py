"""Grid datatypes and derived table predicates.

Responsibilities:
- Define the immutable row/grid representation exchanged between stages.
- Detect separator rows and header presence by positional convention.
- Compute per-column display widths from the grid's current state.

Key types:
- `Row`: ordered tuple of cell strings.
- `Grid`: ordered tuple of rows.
"""

from __future__ import annotations

import re
from typing import Sequence

Row = tuple[str, ...]
Grid = tuple[Row, ...]

_SEPARATOR_CELL_RE = re.compile(r" *:?-{3,}:? *")


def is_separator_row(row: Sequence[str]) -> bool:
    """Return whether every cell of `row` is a dash run with optional colons."""

    return all(_SEPARATOR_CELL_RE.fullmatch(cell) for cell in row)


def has_header(grid: Sequence[Sequence[str]]) -> bool:
    """Return whether the grid starts with a header row followed by a separator row."""

    return len(grid) >= 2 and is_separator_row(grid[1])


def column_widths(grid: Sequence[Sequence[str]]) -> list[int]:
    """Return the widest cell length per column, ignoring a separator row at index 1."""

    widths: list[int] = []
    for index, row in enumerate(grid):
        if index == 1 and is_separator_row(row):
            continue
        for column, cell in enumerate(row):
            if column >= len(widths):
                widths.append(len(cell))
            elif len(cell) > widths[column]:
                widths[column] = len(cell)
    return widths
