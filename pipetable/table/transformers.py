"""Composable grid transformation stages.

Responsibilities:
- Provide stateless stages that each map a grid to a new grid.
- Recompute derived header and width facts from the grid each stage receives.
"""

from __future__ import annotations

from typing import ClassVar, Protocol

from .grid import Grid, column_widths, has_header, is_separator_row


class TableTransformer(Protocol):
    """Protocol for grid transformation stages."""

    name: ClassVar[str]

    def transform(self, grid: Grid) -> Grid:
        """Return a transformed copy of `grid`."""


class TrimCellContent:
    """Strip surrounding whitespace from every cell."""

    name: ClassVar[str] = "trim_cells"

    def transform(self, grid: Grid) -> Grid:
        """Apply per-cell whitespace trimming."""

        return tuple(tuple(cell.strip() for cell in row) for row in grid)


class TrimEmptyRows:
    """Drop rows that carry no cells at all."""

    name: ClassVar[str] = "trim_empty_rows"

    def transform(self, grid: Grid) -> Grid:
        """Keep rows with at least one cell, even when every cell is blank."""

        return tuple(row for row in grid if len(row) > 0)


class AddMissingCells:
    """Right-pad short rows with empty cells up to the widest row."""

    name: ClassVar[str] = "add_missing_cells"

    def transform(self, grid: Grid) -> Grid:
        """Extend every row to the maximum cell count of the grid."""

        cells_count = max((len(row) for row in grid), default=0)
        return tuple(row + ("",) * (cells_count - len(row)) for row in grid)


class NormalizeColumnWidths:
    """Left-justify every cell to its column's widest content.

    When a header is present every column is at least three characters wide and
    the separator row is extended with dashes instead of spaces.
    """

    name: ClassVar[str] = "consistent_cells_width"

    def transform(self, grid: Grid) -> Grid:
        """Pad cells to per-column target widths."""

        minimum = 3 if has_header(grid) else 0
        widths = column_widths(grid)

        rows: list[tuple[str, ...]] = []
        for index, row in enumerate(grid):
            fill_char = "-" if index == 1 and is_separator_row(row) else " "
            rows.append(
                tuple(
                    cell.ljust(max(_width_at(widths, column), minimum), fill_char)
                    for column, cell in enumerate(row)
                )
            )
        return tuple(rows)


class AddPadding:
    """Surround cell content with single spaces.

    Empty cells become one space. A separator row at index 1 is redrawn as a
    dash run two characters wider than its column.
    """

    name: ClassVar[str] = "add_padding"

    def transform(self, grid: Grid) -> Grid:
        """Pad cells and widen the separator row."""

        widths = column_widths(grid)

        rows: list[tuple[str, ...]] = []
        for index, row in enumerate(grid):
            if index == 1 and is_separator_row(row):
                rows.append(
                    tuple(
                        "-" * max(_width_at(widths, column) + 2, 3)
                        for column in range(len(row))
                    )
                )
                continue
            rows.append(tuple(f" {cell} " if cell else " " for cell in row))
        return tuple(rows)


class RemoveHeader:
    """Drop the header and separator rows when the grid has a header."""

    name: ClassVar[str] = "remove_header"

    def transform(self, grid: Grid) -> Grid:
        """Return body rows only, or the grid unchanged without a header."""

        if has_header(grid):
            return grid[2:]
        return grid


def _width_at(widths: list[int], column: int) -> int:
    """Return the computed width of `column`, or zero when no row measured it."""

    if column < len(widths):
        return widths[column]
    return 0
