# hecto/core/Search.py
"""Search Module
================
Positions, search directions and the grapheme-level substring locator.

All columns are measured in grapheme clusters, never in bytes or code points.
The row-level locator works on a sequence of clusters:

- Forward: the window is ``[from_col, length)`` and the leftmost match wins.
- Backward: the window is ``[0, from_col)`` and the rightmost match that
  starts strictly before ``from_col`` (and fits in the window) wins.

An empty query, or ``from_col`` past the end of the row, never matches.
The document-level walk over consecutive rows lives in
:meth:`hecto.core.Document.Document.find`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from hecto.utils.utils import split_graphemes


class SearchDirection(Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass
class Position:
    """A cursor-like location inside a document.

    Attributes:
        column (int): Grapheme-cluster offset within the row.
        row (int): Zero-based row (line) index.

    Negative coordinates are clamped to zero, never wrapped.
    """

    column: int = 0
    row: int = 0

    def __post_init__(self) -> None:
        self.column = max(0, self.column)
        self.row = max(0, self.row)


def find_in_graphemes(
    graphemes: Sequence[str],
    query: str,
    from_col: int,
    direction: SearchDirection = SearchDirection.FORWARD,
) -> Optional[int]:
    """Locates ``query`` inside a cluster sequence.

    Args:
        graphemes: The row content, one entry per grapheme cluster.
        query: Text to look for; segmented into clusters before comparison.
        from_col: Column where the search window starts (forward) or ends
            (backward, exclusive).
        direction: Which way to search.

    Returns:
        Optional[int]: Absolute column of the match, or None.
    """
    length = len(graphemes)
    if not query or from_col < 0 or from_col > length:
        return None

    needle = split_graphemes(query)
    width = len(needle)

    if direction is SearchDirection.FORWARD:
        candidates = range(from_col, length - width + 1)
    else:
        candidates = range(from_col - width, -1, -1)

    for col in candidates:
        if list(graphemes[col:col + width]) == needle:
            return col
    return None
