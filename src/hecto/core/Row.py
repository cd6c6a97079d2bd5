# hecto/core/Row.py
"""Row Module
============
One line of a document, stored as a sequence of grapheme clusters.

Every positional operation counts grapheme clusters, so a combining sequence
or an emoji with modifiers is one column. Mutations rebuild the text and
re-segment it; ``length`` is always a live recount and never drifts.

Out-of-range columns are never an error: ``insert`` appends, ``delete`` does
nothing, ``split`` past the end yields an empty suffix.
"""

from typing import Optional

from wcwidth import wcswidth

from hecto.core.Highlighter import HighlightOptions, get_highlighter
from hecto.core.Search import SearchDirection, find_in_graphemes
from hecto.core.Styles import AnsiStyler, HighlightCategory, Styler
from hecto.utils.utils import split_graphemes

_DEFAULT_STYLER = AnsiStyler()


## ==================== Row Class ====================
class Row:
    """Class Row
    ============
    A single line of text plus its cached highlighting.

    Attributes:
        is_highlighted (bool): Whether ``highlight_spans`` is valid for the
            current content. Cleared by every edit that reshapes the row.
    """

    def __init__(self, content: str = "") -> None:
        if "\n" in content:
            raise ValueError("row content cannot contain a line break")
        self._graphemes: list[str] = split_graphemes(content)
        self._highlight_spans: list[HighlightCategory] = []
        self.is_highlighted = False
        self._ends_in_block_comment = False
        self._has_match_overlay = False

    def __repr__(self) -> str:
        return f"Row({self.content!r})"

    def __len__(self) -> int:
        return len(self._graphemes)

    @property
    def length(self) -> int:
        """Number of grapheme clusters in the row."""
        return len(self._graphemes)

    @property
    def content(self) -> str:
        return "".join(self._graphemes)

    @property
    def graphemes(self) -> tuple[str, ...]:
        return tuple(self._graphemes)

    @property
    def highlight_spans(self) -> list[HighlightCategory]:
        """One category per cluster; meaningful only while ``is_highlighted``."""
        return list(self._highlight_spans)

    def as_bytes(self, encoding: str = "utf-8") -> bytes:
        return self.content.encode(encoding)

    def _set_content(self, text: str) -> None:
        self._graphemes = split_graphemes(text)
        self.is_highlighted = False

    # --- rendering ---
    def render(self, start: int, end: int, styler: Optional[Styler] = None) -> str:
        """Returns the clusters in ``[start, end)`` with style markers.

        ``end`` is clamped to the row length and ``start`` to ``end``. Tabs are
        rendered as a single space. A marker is emitted only when the category
        differs from the previous cluster's, and a reset marker is appended.

        Args:
            start: First column to render.
            end: Column after the last one to render.
            styler: Marker source; defaults to the xterm-256 `AnsiStyler`.
        """
        styler = styler or _DEFAULT_STYLER
        end = min(end, self.length)
        start = min(max(start, 0), end)

        parts: list[str] = []
        current = HighlightCategory.NONE
        for index in range(start, end):
            category = HighlightCategory.NONE
            if self.is_highlighted and index < len(self._highlight_spans):
                category = self._highlight_spans[index]
            if category != current:
                current = category
                parts.append(styler.style(category))
            cluster = self._graphemes[index]
            parts.append(" " if cluster == "\t" else cluster)
        parts.append(styler.reset())
        return "".join(parts)

    def display_width(self, start: int = 0, end: Optional[int] = None) -> int:
        """Terminal cell width of ``[start, end)`` as ``render`` would draw it."""
        end = self.length if end is None else min(end, self.length)
        start = min(max(start, 0), end)
        width = 0
        for cluster in self._graphemes[start:end]:
            if cluster == "\t":
                width += 1
                continue
            cells = wcswidth(cluster)
            # Non-printable clusters still occupy a cell on screen.
            width += cells if cells > 0 else 1
        return width

    # --- mutation ---
    def insert(self, col: int, symbol: str) -> None:
        """Inserts ``symbol`` before the cluster at ``col`` (appends past the end)."""
        if "\n" in symbol:
            raise ValueError("line breaks are row separators, split the row instead")
        if col >= self.length:
            self._set_content(self.content + symbol)
        else:
            col = max(col, 0)
            self._set_content(
                "".join(self._graphemes[:col]) + symbol + "".join(self._graphemes[col:])
            )

    def delete(self, col: int) -> None:
        """Removes the cluster at ``col``; no-op when ``col`` is out of range."""
        if col < 0 or col >= self.length:
            return
        self._set_content(
            "".join(self._graphemes[:col]) + "".join(self._graphemes[col + 1:])
        )

    def append(self, other: "Row") -> None:
        """Concatenates ``other``'s content onto this row."""
        self._set_content(self.content + other.content)

    def split(self, col: int) -> "Row":
        """Keeps clusters ``[0, col)`` and returns a new row with the rest.

        Both halves lose their highlight cache.
        """
        col = min(max(col, 0), self.length)
        suffix = Row("".join(self._graphemes[col:]))
        self._graphemes = self._graphemes[:col]
        self.is_highlighted = False
        return suffix

    # --- search ---
    def find(
        self,
        query: str,
        from_col: int,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[int]:
        """Column of ``query`` searching from ``from_col`` in ``direction``."""
        return find_in_graphemes(self._graphemes, query, from_col, direction)

    # --- highlighting ---
    def needs_highlight(self, word: Optional[str] = None) -> bool:
        """Whether a highlight pass has to rescan this row.

        A cached pass is reused only when no search word is pending, the cached
        pass carried no search matches and the row does not end inside an
        unterminated block comment.
        """
        return bool(
            not self.is_highlighted
            or word
            or self._has_match_overlay
            or self._ends_in_block_comment
        )

    def highlight(
        self,
        options: Optional[HighlightOptions],
        word: Optional[str] = None,
        carry_block_comment: bool = False,
    ) -> bool:
        """Classifies every cluster and returns the block-comment carry-out.

        Args:
            options: Highlighting rules of the document's file type.
            word: Active search term to overlay as MATCH, if any.
            carry_block_comment: True when the previous row ended inside an
                unterminated block comment.

        Returns:
            bool: True when this row ends inside an unterminated block comment.
        """
        if not self.needs_highlight(word):
            return False

        highlighter = get_highlighter(options or HighlightOptions())
        spans, carry_out = highlighter.highlight(
            self._graphemes, word, carry_block_comment
        )
        self._highlight_spans = spans
        self._ends_in_block_comment = carry_out
        self._has_match_overlay = bool(word)
        self.is_highlighted = True
        return carry_out
