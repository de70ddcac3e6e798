"""Top-level package for pipetable.

This package reformats pipe-delimited markdown tables. The main entry point is
`MarkdownTableFormatter`, configured with `FormatOptions`.
"""

from .config import FormatOptions
from .formatter import MarkdownTableFormatter

__all__ = ["FormatOptions", "MarkdownTableFormatter", "__version__"]

__version__ = "0.1.0"
