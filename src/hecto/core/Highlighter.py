# hecto/core/Highlighter.py
"""Highlighter Module
====================
Per-row syntax classification for the hecto text buffer.

Every grapheme cluster of a row receives exactly one `HighlightCategory`.
The scan walks the row left to right and, at each index, tries an ordered
list of checks; the first one that matches consumes one or more clusters:

1. Block comment opener ``/*`` (consumed through ``*/`` or to row end).
2. Character literal ``'x'`` or ``'\\x'``.
3. Line comment ``//`` (consumed to row end).
4. Primary keyword (whole token, boundary before and after).
5. Secondary keyword (same rule).
6. String literal ``"..."`` (ends at the next ``"``, no escapes).
7. Emphasis ``*...*``.
8. Number (digit preceded by a boundary; digits and ``.`` follow).

Clusters nothing claims are tagged ``NONE``. A match consumes its clusters,
so the inside of a string, comment or character literal is never examined
by a later check.

Whether a row starts inside an unterminated block comment is decided by the
caller (the document) and passed in as ``carry_block_comment``; the scan
returns the matching carry-out flag. An active search word is overlaid last
and turns every cluster of each non-overlapping occurrence into ``MATCH``.
"""

import functools
import string
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from hecto.core.Search import SearchDirection, find_in_graphemes
from hecto.core.Styles import HighlightCategory
from hecto.utils.utils import split_graphemes

BOUNDARY_CHARS = frozenset(string.punctuation + string.whitespace)

BLOCK_COMMENT_OPEN = ("/", "*")
BLOCK_COMMENT_CLOSE = ("*", "/")
LINE_COMMENT_OPEN = ("/", "/")
CHAR_QUOTE = "'"
STRING_QUOTE = '"'
ESCAPE = "\\"
EMPHASIS_MARK = "*"


def is_boundary(cluster: str) -> bool:
    """True for clusters starting with ASCII punctuation or whitespace."""
    return bool(cluster) and cluster[0] in BOUNDARY_CHARS


def _is_digit(cluster: str) -> bool:
    return len(cluster) == 1 and cluster in string.digits


@dataclass(frozen=True)
class HighlightOptions:
    """Which categories a file type highlights, plus its keyword lists.

    Keyword order only matters for first-match determinism.
    """

    numbers: bool = False
    strings: bool = False
    characters: bool = False
    comments: bool = False
    multiline_comments: bool = False
    emphasis: bool = False
    primary_keywords: tuple[str, ...] = ()
    secondary_keywords: tuple[str, ...] = ()

    @classmethod
    def from_config(cls, section: Optional[dict[str, Any]]) -> "HighlightOptions":
        """Builds options from a ``[file_types.<key>.highlighting]`` table."""
        section = section or {}
        return cls(
            numbers=bool(section.get("numbers", False)),
            strings=bool(section.get("strings", False)),
            characters=bool(section.get("characters", False)),
            comments=bool(section.get("comments", False)),
            multiline_comments=bool(section.get("multiline_comments", False)),
            emphasis=bool(section.get("emphasis", False)),
            primary_keywords=tuple(section.get("primary_keywords", ())),
            secondary_keywords=tuple(section.get("secondary_keywords", ())),
        )


class Highlighter:
    """Stateless scanner bound to one set of `HighlightOptions`.

    Attributes:
        options (HighlightOptions): The rule set in effect.
    """

    def __init__(self, options: HighlightOptions) -> None:
        self.options = options
        self._primary = self._segment_keywords(options.primary_keywords)
        self._secondary = self._segment_keywords(options.secondary_keywords)
        self._rules: list[tuple[Callable[[Sequence[str], int], int], HighlightCategory]] = [
            (self._match_character, HighlightCategory.CHARACTER),
            (self._match_line_comment, HighlightCategory.COMMENT),
            (self._match_primary_keyword, HighlightCategory.PRIMARY_KEYWORD),
            (self._match_secondary_keyword, HighlightCategory.SECONDARY_KEYWORD),
            (self._match_string, HighlightCategory.STRING),
            (self._match_emphasis, HighlightCategory.EMPHASIS),
            (self._match_number, HighlightCategory.NUMBER),
        ]

    @staticmethod
    def _segment_keywords(keywords: Sequence[str]) -> tuple[tuple[str, ...], ...]:
        return tuple(tuple(split_graphemes(word)) for word in keywords if word)

    # --- public API ---
    def highlight(
        self,
        graphemes: Sequence[str],
        word: Optional[str] = None,
        carry_block_comment: bool = False,
    ) -> tuple[list[HighlightCategory], bool]:
        """Classifies a row and overlays the active search word.

        Args:
            graphemes: Row content, one entry per grapheme cluster.
            word: Active search term; ignored when None or empty.
            carry_block_comment: Whether the row starts inside a block
                comment left open by a previous row.

        Returns:
            tuple[list[HighlightCategory], bool]: One category per cluster,
            and whether the row ends inside an unterminated block comment.
        """
        spans, carry_out = self.scan(graphemes, carry_block_comment)
        if word:
            self.overlay_matches(spans, graphemes, word)
        return spans, carry_out

    def scan(
        self, graphemes: Sequence[str], carry_block_comment: bool = False
    ) -> tuple[list[HighlightCategory], bool]:
        """Runs the categorical scan without the search overlay."""
        length = len(graphemes)
        spans: list[HighlightCategory] = []
        index = 0

        if carry_block_comment:
            end = self._find_block_comment_end(graphemes, 0)
            if end is None:
                return [HighlightCategory.BLOCK_COMMENT] * length, True
            spans.extend([HighlightCategory.BLOCK_COMMENT] * end)
            index = end

        while index < length:
            if self._opens_block_comment(graphemes, index):
                end = self._find_block_comment_end(graphemes, index + 2)
                if end is None:
                    spans.extend([HighlightCategory.BLOCK_COMMENT] * (length - index))
                    return spans, True
                spans.extend([HighlightCategory.BLOCK_COMMENT] * (end - index))
                index = end
                continue

            for rule, category in self._rules:
                consumed = rule(graphemes, index)
                if consumed:
                    spans.extend([category] * consumed)
                    index += consumed
                    break
            else:
                spans.append(HighlightCategory.NONE)
                index += 1

        return spans, False

    @staticmethod
    def overlay_matches(
        spans: list[HighlightCategory], graphemes: Sequence[str], word: str
    ) -> None:
        """Overwrites every non-overlapping occurrence of ``word`` with MATCH."""
        width = len(split_graphemes(word))
        start = 0
        while True:
            found = find_in_graphemes(graphemes, word, start, SearchDirection.FORWARD)
            if found is None:
                break
            for col in range(found, found + width):
                spans[col] = HighlightCategory.MATCH
            start = found + width

    # --- block comments ---
    def _opens_block_comment(self, graphemes: Sequence[str], index: int) -> bool:
        return (
            self.options.multiline_comments
            and tuple(graphemes[index:index + 2]) == BLOCK_COMMENT_OPEN
        )

    @staticmethod
    def _find_block_comment_end(graphemes: Sequence[str], start: int) -> Optional[int]:
        """Index just past the first ``*/`` at or after ``start``, or None."""
        for col in range(start, len(graphemes) - 1):
            if (graphemes[col], graphemes[col + 1]) == BLOCK_COMMENT_CLOSE:
                return col + 2
        return None

    # --- ordered rules; each returns the number of clusters consumed ---
    def _match_character(self, graphemes: Sequence[str], index: int) -> int:
        if not self.options.characters or graphemes[index] != CHAR_QUOTE:
            return 0
        if index + 1 >= len(graphemes):
            return 0
        end = index + 3 if graphemes[index + 1] == ESCAPE else index + 2
        if end < len(graphemes) and graphemes[end] == CHAR_QUOTE:
            return end - index + 1
        return 0

    def _match_line_comment(self, graphemes: Sequence[str], index: int) -> int:
        if self.options.comments and tuple(graphemes[index:index + 2]) == LINE_COMMENT_OPEN:
            return len(graphemes) - index
        return 0

    def _match_primary_keyword(self, graphemes: Sequence[str], index: int) -> int:
        return self._match_keyword(graphemes, index, self._primary)

    def _match_secondary_keyword(self, graphemes: Sequence[str], index: int) -> int:
        return self._match_keyword(graphemes, index, self._secondary)

    @staticmethod
    def _match_keyword(
        graphemes: Sequence[str], index: int, keywords: tuple[tuple[str, ...], ...]
    ) -> int:
        if index > 0 and not is_boundary(graphemes[index - 1]):
            return 0
        length = len(graphemes)
        for keyword in keywords:
            end = index + len(keyword)
            if tuple(graphemes[index:end]) != keyword:
                continue
            if end < length and not is_boundary(graphemes[end]):
                continue
            return len(keyword)
        return 0

    def _match_string(self, graphemes: Sequence[str], index: int) -> int:
        if not self.options.strings or graphemes[index] != STRING_QUOTE:
            return 0
        length = len(graphemes)
        col = index + 1
        while col < length:
            if graphemes[col] == STRING_QUOTE:
                return col + 1 - index
            col += 1
        return length - index

    def _match_emphasis(self, graphemes: Sequence[str], index: int) -> int:
        if not self.options.emphasis or graphemes[index] != EMPHASIS_MARK:
            return 0
        length = len(graphemes)
        col = index + 1
        while col < length and graphemes[col] != EMPHASIS_MARK:
            col += 1
        return min(col + 1, length) - index

    def _match_number(self, graphemes: Sequence[str], index: int) -> int:
        if not self.options.numbers or not _is_digit(graphemes[index]):
            return 0
        if index > 0 and not is_boundary(graphemes[index - 1]):
            return 0
        length = len(graphemes)
        col = index + 1
        while col < length and (graphemes[col] == "." or _is_digit(graphemes[col])):
            col += 1
        return col - index


@functools.lru_cache(maxsize=32)
def get_highlighter(options: HighlightOptions) -> Highlighter:
    """Returns a shared `Highlighter` for ``options`` (options are hashable)."""
    return Highlighter(options)
