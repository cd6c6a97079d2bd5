# tests/conftest.py
"""Pytest configuration with shared fixtures for the hecto buffer tests.

Provides ready-made highlighting options, documents and on-disk files so the
individual test modules stay focused on behaviour.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from hecto.core.Document import Document
from hecto.core.Highlighter import HighlightOptions
from hecto.core.Styles import HighlightCategory


# --- Highlighting options ---
@pytest.fixture
def c_like_options() -> HighlightOptions:
    """Every category enabled, with small disjoint keyword lists.

    Returns:
        HighlightOptions: Options resembling a C-family file type.
    """
    return HighlightOptions(
        numbers=True,
        strings=True,
        characters=True,
        comments=True,
        multiline_comments=True,
        emphasis=False,
        primary_keywords=("for", "if", "fn", "let"),
        secondary_keywords=("i32", "u8", "String"),
    )


@pytest.fixture
def markdown_options() -> HighlightOptions:
    """Only emphasis markers are highlighted."""
    return HighlightOptions(emphasis=True)


# --- Documents ---
@pytest.fixture
def make_document() -> Callable[..., Document]:
    """Factory building a `Document` from a list of lines.

    Returns:
        Callable[..., Document]: ``make_document(lines, file_name=None)``.
    """

    def _make(lines: list[str], file_name: str | None = None) -> Document:
        text = "".join(f"{line}\n" for line in lines)
        return Document.from_string(text, file_name=file_name)

    return _make


@pytest.fixture
def rust_file(tmp_path: Path) -> Path:
    """A small Rust source file on disk with a multi-line comment."""
    path = tmp_path / "main.rs"
    path.write_text(
        "/* entry\n   point */\nfn main() {\n    let x: i32 = 42;\n}\n",
        encoding="utf-8",
    )
    return path


# --- Helpers ---
@pytest.fixture
def categories() -> Callable[[str], list[HighlightCategory]]:
    """Expands a compact code string into a category list.

    Codes: ``.`` none, ``n`` number, ``m`` match, ``s`` string, ``e`` emphasis,
    ``c`` character, ``/`` comment, ``b`` block comment, ``p`` primary
    keyword, ``k`` secondary keyword.
    """
    codes = {
        ".": HighlightCategory.NONE,
        "n": HighlightCategory.NUMBER,
        "m": HighlightCategory.MATCH,
        "s": HighlightCategory.STRING,
        "e": HighlightCategory.EMPHASIS,
        "c": HighlightCategory.CHARACTER,
        "/": HighlightCategory.COMMENT,
        "b": HighlightCategory.BLOCK_COMMENT,
        "p": HighlightCategory.PRIMARY_KEYWORD,
        "k": HighlightCategory.SECONDARY_KEYWORD,
    }

    def _expand(pattern: str) -> list[HighlightCategory]:
        return [codes[code] for code in pattern]

    return _expand
