# hecto/core/Document.py
"""Document Module
=================
An ordered sequence of `Row` objects plus file metadata.

The document composes row mutation, highlight-cache invalidation and
multi-row search into the operations an editor loop needs:

- ``insert`` / ``delete`` at a `Position` (line breaks split rows, deleting
  at the end of a row merges the next one into it);
- ``find`` across consecutive rows, forward or backward, never wrapping;
- ``highlight`` up to the last visible row, threading the "inside a block
  comment" flag from row to row in order;
- ``open`` / ``save`` through an injected `FileBridge`.

Any edit invalidates the highlight cache of the edited row and of every row
after it, since opening or closing a block comment changes how all following
rows must be classified.

Typical wiring by an editor front end::

    config = load_config()          # hecto.utils.utils
    setup_logging(config)           # hecto.utils.logging_config
    document = Document.open(path, config=config)
"""

from typing import Any, Iterator, Optional

from hecto.core.FileType import FileType, infer_file_type
from hecto.core.Row import Row
from hecto.core.Search import Position, SearchDirection
from hecto.integrations.FileBridge import FileBridge
from hecto.utils.logging_config import logger

LINE_BREAK = "\n"


def split_lines(text: str) -> list[str]:
    """Splits ``text`` into row contents.

    A trailing terminator does not produce an extra empty row and a ``"\\r"``
    before each terminator is dropped.
    """
    lines = text.split(LINE_BREAK)
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


## ==================== Document Class ====================
class Document:
    """Class Document
    =================
    Owns the rows of one editing session.

    Attributes:
        file_name (Optional[str]): Path the document was read from or last
            saved to; None for an unnamed buffer.
        file_type (FileType): Display name and highlighting rules.
        modified (bool): Whether there are edits not yet saved.
        config (dict): Configuration used for file-type inference, normally
            the result of `hecto.utils.utils.load_config()`; None means the
            embedded `DEFAULT_CONFIG`.
        file_bridge (FileBridge): File-system collaborator.
    """

    def __init__(
        self,
        rows: Optional[list[Row]] = None,
        file_name: Optional[str] = None,
        file_type: Optional[FileType] = None,
        config: Optional[dict[str, Any]] = None,
        file_bridge: Optional[FileBridge] = None,
    ) -> None:
        self._rows: list[Row] = rows if rows is not None else []
        self.file_name = file_name
        self.config = config
        self.file_type = file_type or infer_file_type(file_name, config)
        self.file_bridge = file_bridge or FileBridge()
        self.modified = False

    # --- construction ---
    @classmethod
    def from_string(
        cls,
        text: str,
        file_name: Optional[str] = None,
        config: Optional[dict[str, Any]] = None,
        file_bridge: Optional[FileBridge] = None,
    ) -> "Document":
        """Builds a document from in-memory text, one row per line."""
        rows = [Row(line) for line in split_lines(text)]
        return cls(rows, file_name=file_name, config=config, file_bridge=file_bridge)

    @classmethod
    def open(
        cls,
        path: str,
        config: Optional[dict[str, Any]] = None,
        file_bridge: Optional[FileBridge] = None,
    ) -> "Document":
        """Reads ``path`` into a new, unmodified document.

        Raises:
            OSError: The file cannot be read.
            UnicodeDecodeError: The file is not valid text.
        """
        bridge = file_bridge or FileBridge()
        text = bridge.read_text(path)
        document = cls.from_string(text, file_name=path, config=config, file_bridge=bridge)
        logger.debug(
            f"Opened '{path}' as {document.file_type.name}: {len(document)} rows."
        )
        return document

    # --- queries ---
    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self._rows)

    def row_count(self) -> int:
        return len(self._rows)

    def row(self, index: int) -> Optional[Row]:
        """The row at ``index``, or None when out of range."""
        if 0 <= index < len(self._rows):
            return self._rows[index]
        return None

    def is_empty(self) -> bool:
        return not self._rows

    @property
    def is_modified(self) -> bool:
        return self.modified

    @property
    def file_type_name(self) -> str:
        return self.file_type.name

    def to_string(self) -> str:
        """Rows joined as they would be saved (each followed by a line break)."""
        return "".join(row.content + LINE_BREAK for row in self._rows)

    # --- editing ---
    def _invalidate_from(self, start: int) -> None:
        for row in self._rows[start:]:
            row.is_highlighted = False

    def _insert_newline(self, at: Position) -> None:
        if at.row == len(self._rows):
            self._rows.append(Row())
            return
        suffix = self._rows[at.row].split(at.column)
        self._rows.insert(at.row + 1, suffix)

    def insert(self, at: Position, symbol: str) -> None:
        """Inserts ``symbol`` at ``at``.

        A line break splits the addressed row and puts the suffix on a new
        row right after it. Inserting on the row just past the end first
        appends a fresh row. Rows further out are ignored.
        """
        if at.row > len(self._rows):
            return
        if symbol == LINE_BREAK:
            self._insert_newline(at)
        elif at.row == len(self._rows):
            row = Row()
            row.insert(0, symbol)
            self._rows.append(row)
        else:
            self._rows[at.row].insert(at.column, symbol)
        self.modified = True
        self._invalidate_from(at.row)

    def delete(self, at: Position) -> None:
        """Deletes the symbol at ``at``.

        At the very end of a row that has a successor, the next row is merged
        into this one instead. Rows past the end are ignored.
        """
        if at.row >= len(self._rows):
            return
        current = self._rows[at.row]
        if at.column == current.length and at.row + 1 < len(self._rows):
            current.append(self._rows.pop(at.row + 1))
        else:
            current.delete(at.column)
        self.modified = True
        self._invalidate_from(at.row)

    # --- persistence ---
    def save(self, destination: Optional[str] = None) -> bool:
        """Writes every row, each followed by one line terminator.

        Args:
            destination: Target path; defaults to ``file_name``.

        Returns:
            bool: True when written, False when there is nowhere to write.

        Raises:
            OSError: The bridge failed; ``modified`` stays set.
        """
        target = destination or self.file_name
        if not target:
            logger.warning("Save requested for an unnamed document; nothing written.")
            return False

        self.file_bridge.write_text(target, (row.content for row in self._rows))

        self.file_name = target
        self.modified = False
        file_type = infer_file_type(target, self.config)
        if file_type != self.file_type:
            self.file_type = file_type
            self._invalidate_from(0)
        logger.debug(f"Saved {len(self._rows)} rows to '{target}' as {file_type.name}.")
        return True

    # --- search ---
    def find(
        self,
        query: str,
        at: Position,
        direction: SearchDirection = SearchDirection.FORWARD,
    ) -> Optional[Position]:
        """Finds ``query`` starting at ``at``, visiting each row at most once.

        Forward searches the rest of the current row, then each following row
        from column 0. Backward searches the current row before ``at.column``,
        then each previous row over its full length. Never wraps.
        """
        if at.row >= len(self._rows):
            return None

        column = at.column
        if direction is SearchDirection.FORWARD:
            row_indexes = range(at.row, len(self._rows))
        else:
            row_indexes = range(at.row, -1, -1)

        for index in row_indexes:
            found = self._rows[index].find(query, column, direction)
            if found is not None:
                logger.debug(f"Found '{query}' at row {index}, column {found}.")
                return Position(column=found, row=index)
            if direction is SearchDirection.FORWARD:
                column = 0
            elif index > 0:
                column = self._rows[index - 1].length
        return None

    # --- highlighting ---
    def highlight(self, word: Optional[str] = None, until: Optional[int] = None) -> None:
        """Highlights rows ``[0, until]`` in order, threading comment state.

        Args:
            word: Active search term overlaid as MATCH, if any.
            until: Last row that needs valid highlighting (e.g. the last
                visible line). Rows after it are left untouched. None means
                the whole document.
        """
        limit = len(self._rows) if until is None else min(until + 1, len(self._rows))
        in_block_comment = False
        for row in self._rows[:limit]:
            in_block_comment = row.highlight(self.file_type.options, word, in_block_comment)
