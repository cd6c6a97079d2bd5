# tests/test_core/test_document.py
"""Unit tests for `Document`.
============================

Covers the multi-row behaviour built on top of `Row`:

- Line splitting on load and the save/load round trip.
- Insert/delete at row boundaries, including out-of-range positions.
- The ``modified`` flag.
- Highlight invalidation after edits and block-comment propagation.
- Cross-row search in both directions (no wrap-around).
- Persistence through `FileBridge`, including error propagation.
"""

from pathlib import Path
from typing import Callable
from unittest import mock

import pytest

from hecto.core.Document import Document, split_lines
from hecto.core.Search import Position, SearchDirection
from hecto.core.Styles import HighlightCategory
from hecto.utils.utils import load_config

MakeDocument = Callable[..., Document]


def contents(document: Document) -> list[str]:
    return [row.content for row in document]


# --- Loading and serialisation ---
@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a\nb\n", ["a", "b"]),
        ("a\nb", ["a", "b"]),
        ("a\r\nb\r\n", ["a", "b"]),
        ("a\n\nb\n", ["a", "", "b"]),
        ("\n", [""]),
        ("", []),
    ],
)
def test_split_lines(text: str, expected: list[str]) -> None:
    assert split_lines(text) == expected


def test_from_string_round_trip() -> None:
    document = Document.from_string("fn main() {\n}\n")
    assert document.row_count() == 2
    assert document.to_string() == "fn main() {\n}\n"
    assert not document.is_modified


def test_unnamed_document_has_default_file_type() -> None:
    document = Document()
    assert document.is_empty()
    assert document.file_type_name == "No filetype"
    assert document.row(0) is None


def test_open_reads_file_and_detects_type(rust_file: Path) -> None:
    document = Document.open(str(rust_file))
    assert document.file_type_name == "Rust"
    assert len(document) == 5
    assert document.row(2).content == "fn main() {"
    assert not document.is_modified


def test_open_with_loaded_user_config(tmp_path: Path) -> None:
    """File types added in the user config reach the document."""
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        '[file_types.toy]\ndisplay_name = "Toy"\nextensions = ["toy"]\n'
        "[file_types.toy.highlighting]\nnumbers = true\n",
        encoding="utf-8",
    )
    source = tmp_path / "demo.toy"
    source.write_text("x = 42\n", encoding="utf-8")

    document = Document.open(str(source), config=load_config(config_path))
    document.highlight()

    assert document.file_type_name == "Toy"
    assert document.row(0).highlight_spans[-2:] == [HighlightCategory.NUMBER] * 2


def test_open_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        Document.open(str(tmp_path / "missing.txt"))


# --- Insert ---
def test_insert_into_empty_document_creates_row() -> None:
    document = Document()
    document.insert(Position(0, 0), "a")
    assert contents(document) == ["a"]
    assert document.is_modified


def test_insert_far_past_end_is_ignored(make_document: MakeDocument) -> None:
    document = make_document(["only"])
    document.insert(Position(0, 5), "x")
    assert contents(document) == ["only"]
    assert not document.is_modified


def test_insert_newline_splits_row(make_document: MakeDocument) -> None:
    document = make_document(["hello", "world"])
    document.insert(Position(3, 0), "\n")
    assert contents(document) == ["hel", "lo", "world"]


def test_insert_newline_at_row_end_adds_empty_row(make_document: MakeDocument) -> None:
    document = make_document(["ab"])
    document.insert(Position(2, 0), "\n")
    assert contents(document) == ["ab", ""]


def test_insert_newline_past_last_row_appends_empty_row(make_document: MakeDocument) -> None:
    document = make_document(["ab"])
    document.insert(Position(0, 1), "\n")
    assert contents(document) == ["ab", ""]


def test_insert_symbol_on_row_after_last(make_document: MakeDocument) -> None:
    document = make_document(["ab"])
    document.insert(Position(7, 1), "c")
    assert contents(document) == ["ab", "c"]


# --- Delete ---
def test_delete_at_row_end_merges_next_row(make_document: MakeDocument) -> None:
    document = make_document(["ab", "cd", "ef"])
    document.delete(Position(2, 0))
    assert contents(document) == ["abcd", "ef"]
    assert document.is_modified


def test_delete_inside_row(make_document: MakeDocument) -> None:
    document = make_document(["abc"])
    document.delete(Position(1, 0))
    assert contents(document) == ["ac"]


def test_delete_at_end_of_last_row_keeps_content(make_document: MakeDocument) -> None:
    document = make_document(["ab"])
    document.delete(Position(2, 0))
    assert contents(document) == ["ab"]


def test_delete_past_last_row_is_ignored(make_document: MakeDocument) -> None:
    document = make_document(["ab"])
    document.delete(Position(0, 1))
    assert contents(document) == ["ab"]
    assert not document.is_modified


def test_newline_then_delete_restores_document(make_document: MakeDocument) -> None:
    document = make_document(["hello", "world"])
    document.insert(Position(2, 0), "\n")
    document.delete(Position(2, 0))
    assert contents(document) == ["hello", "world"]


# --- Highlighting ---
def test_edit_invalidates_edited_and_following_rows(make_document: MakeDocument) -> None:
    document = make_document(["a", "b", "c"], file_name="x.rs")
    document.highlight()
    assert all(row.is_highlighted for row in document)

    document.insert(Position(0, 1), "x")
    assert [row.is_highlighted for row in document] == [True, False, False]


def test_highlight_stops_after_until(make_document: MakeDocument) -> None:
    document = make_document(["a", "b", "c"], file_name="x.rs")
    document.highlight(until=0)
    assert [row.is_highlighted for row in document] == [True, False, False]


def test_opening_comment_recolours_following_rows(make_document: MakeDocument) -> None:
    document = make_document(["a", "let b", "c"], file_name="x.rs")
    document.highlight()
    assert document.row(1).highlight_spans[0] == HighlightCategory.PRIMARY_KEYWORD

    document.insert(Position(0, 0), "/")
    document.insert(Position(1, 0), "*")
    document.highlight()
    for index in (1, 2):
        spans = document.row(index).highlight_spans
        assert set(spans) == {HighlightCategory.BLOCK_COMMENT}

    document.delete(Position(0, 0))
    document.highlight()
    assert document.row(1).highlight_spans[0] == HighlightCategory.PRIMARY_KEYWORD
    assert document.row(2).highlight_spans == [HighlightCategory.NONE]


def test_comment_carry_from_file(rust_file: Path) -> None:
    document = Document.open(str(rust_file))
    document.highlight()
    assert set(document.row(0).highlight_spans) == {HighlightCategory.BLOCK_COMMENT}
    assert set(document.row(1).highlight_spans) == {HighlightCategory.BLOCK_COMMENT}
    assert document.row(2).highlight_spans[:2] == [HighlightCategory.PRIMARY_KEYWORD] * 2


def test_highlight_overlays_search_word(make_document: MakeDocument) -> None:
    document = make_document(["foo bar", "baz foo"])
    document.highlight(word="foo")
    assert document.row(0).highlight_spans[:3] == [HighlightCategory.MATCH] * 3
    assert document.row(1).highlight_spans[4:] == [HighlightCategory.MATCH] * 3


# --- Search ---
@pytest.fixture
def searchable(make_document: MakeDocument) -> Document:
    return make_document(["foo bar", "baz foo", "qux"])


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        (Position(0, 0), Position(0, 0)),
        (Position(1, 0), Position(4, 1)),
        (Position(5, 1), None),
        (Position(0, 3), None),
    ],
)
def test_find_forward(searchable: Document, start: Position, expected) -> None:
    assert searchable.find("foo", start, SearchDirection.FORWARD) == expected


@pytest.mark.parametrize(
    ("start", "expected"),
    [
        (Position(7, 1), Position(4, 1)),
        (Position(4, 1), Position(0, 0)),
        (Position(0, 2), Position(4, 1)),
        (Position(0, 0), None),
    ],
)
def test_find_backward(searchable: Document, start: Position, expected) -> None:
    assert searchable.find("foo", start, SearchDirection.BACKWARD) == expected


def test_find_empty_query(searchable: Document) -> None:
    assert searchable.find("", Position(0, 0)) is None


# --- Saving ---
def test_save_writes_rows_and_updates_metadata(
    make_document: MakeDocument, tmp_path: Path
) -> None:
    document = make_document(["let a", "b"])
    document.insert(Position(0, 0), "x")
    document.highlight()
    target = tmp_path / "out.rs"

    assert document.save(str(target)) is True
    assert target.read_text(encoding="utf-8") == "xlet a\nb\n"
    assert document.file_name == str(target)
    assert document.file_type_name == "Rust"
    assert not document.is_modified
    # The new file type invalidates the previously highlighted rows.
    assert not any(row.is_highlighted for row in document)


def test_save_without_name_writes_nothing(make_document: MakeDocument) -> None:
    document = make_document(["a"])
    document.insert(Position(0, 0), "b")
    assert document.save() is False
    assert document.is_modified


def test_save_failure_propagates_and_keeps_modified(
    make_document: MakeDocument, tmp_path: Path
) -> None:
    document = make_document(["a"])
    document.insert(Position(0, 0), "b")
    with pytest.raises(OSError):
        document.save(str(tmp_path))
    assert document.is_modified
    assert document.file_name is None


@mock.patch(
    "hecto.integrations.FileBridge.chardet.detect",
    return_value={"encoding": "windows-1251", "confidence": 0.99},
)
def test_save_with_symbol_outside_file_encoding(mock_detect, tmp_path: Path) -> None:
    """Saving never destroys the file when the read encoding cannot hold an edit."""
    path = tmp_path / "notes.txt"
    path.write_bytes("строка один\nстрока два\n".encode("windows-1251"))
    document = Document.open(str(path))
    document.insert(Position(0, 0), "\U0001F600")

    assert document.save() is True
    assert not document.is_modified
    assert path.read_bytes().decode("utf-8") == "\U0001F600строка один\nстрока два\n"


def test_save_and_reopen_round_trip(rust_file: Path, tmp_path: Path) -> None:
    document = Document.open(str(rust_file))
    copy = tmp_path / "copy.rs"
    document.save(str(copy))
    assert copy.read_bytes() == rust_file.read_bytes()
    assert Document.open(str(copy)).to_string() == document.to_string()
