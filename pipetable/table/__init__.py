"""Pipe-table tokenizing and transformation components.

This package provides the grid representation, the text tokenizer and
serializer, and the stateless stages folded over a grid by the formatter.
"""

from .grid import Grid, Row, column_widths, has_header, is_separator_row
from .tokenizer import serialize, tokenize
from .transformers import (
    AddMissingCells,
    AddPadding,
    NormalizeColumnWidths,
    RemoveHeader,
    TableTransformer,
    TrimCellContent,
    TrimEmptyRows,
)

__all__ = [
    "Grid",
    "Row",
    "column_widths",
    "has_header",
    "is_separator_row",
    "tokenize",
    "serialize",
    "TableTransformer",
    "TrimCellContent",
    "TrimEmptyRows",
    "AddMissingCells",
    "NormalizeColumnWidths",
    "AddPadding",
    "RemoveHeader",
]
