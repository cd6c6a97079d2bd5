# hecto/core/Styles.py
"""Highlight categories and the styling collaborator.
=====================================================

`HighlightCategory` is the closed set of tags the highlighter assigns, one
per grapheme cluster. `Row.render` turns those tags into display text through
an injected `Styler`, so the buffer never hard-codes terminal output.
`AnsiStyler` is the default styler: it maps each category to an xterm-256
foreground escape built from the `[colors.highlight]` palette.
"""

from enum import Enum
from typing import Any, Optional, Protocol

from hecto.utils.utils import DEFAULT_CONFIG, hex_to_xterm


class HighlightCategory(Enum):
    """Tag attached to every grapheme cluster of a highlighted row."""

    NONE = "none"
    NUMBER = "number"
    MATCH = "match"
    STRING = "string"
    EMPHASIS = "emphasis"
    CHARACTER = "character"
    COMMENT = "comment"
    BLOCK_COMMENT = "block_comment"
    PRIMARY_KEYWORD = "primary_keyword"
    SECONDARY_KEYWORD = "secondary_keyword"


class Styler(Protocol):
    """Anything able to turn a category change into a display marker."""

    def style(self, category: HighlightCategory) -> str: ...

    def reset(self) -> str: ...


class AnsiStyler:
    """Emits xterm-256 foreground escapes for each highlight category.

    Attributes:
        palette (dict[HighlightCategory, int]): xterm color index per category.
    """

    RESET = "\x1b[39m"

    def __init__(self, config: Optional[dict[str, Any]] = None) -> None:
        """Builds the palette from ``config["colors"]["highlight"]``.

        Categories missing from the config fall back to the built-in palette.
        """
        colors = dict(DEFAULT_CONFIG["colors"]["highlight"])
        if config:
            colors.update(config.get("colors", {}).get("highlight", {}))
        self.palette: dict[HighlightCategory, int] = {
            category: hex_to_xterm(colors.get(category.value, "#ffffff"))
            for category in HighlightCategory
        }

    def style(self, category: HighlightCategory) -> str:
        return f"\x1b[38;5;{self.palette[category]}m"

    def reset(self) -> str:
        return self.RESET


class PlainStyler:
    """Styler that emits no markers at all (plain text output)."""

    def style(self, category: HighlightCategory) -> str:
        return ""

    def reset(self) -> str:
        return ""
