# src/hecto/core/__init__.py
"""Public facade for hecto.core: re-export main classes from CamelCase modules.

Keeps one-class-per-module file names (Row.py, Document.py, ...),
but provides flat imports for convenience and stability.
"""

# Re-export classes/symbols from CamelCase modules
from .Document import Document  # noqa: F401
from .FileType import FileType, infer_file_type  # noqa: F401
from .Highlighter import Highlighter, HighlightOptions, get_highlighter  # noqa: F401
from .Row import Row  # noqa: F401
from .Search import Position, SearchDirection  # noqa: F401
from .Styles import AnsiStyler, HighlightCategory, PlainStyler, Styler  # noqa: F401


__all__ = [
    "AnsiStyler",
    "Document",
    "FileType",
    "HighlightCategory",
    "HighlightOptions",
    "Highlighter",
    "PlainStyler",
    "Position",
    "Row",
    "SearchDirection",
    "Styler",
    "get_highlighter",
    "infer_file_type",
]
