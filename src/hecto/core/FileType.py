# hecto/core/FileType.py
"""FileType Module
=================
Maps a file path to a `FileType` descriptor: a display name plus the
`HighlightOptions` that drive the highlighter.

Detection follows a strict priority:

1. Configuration: the file name or its extension appears in the
   ``extensions`` list of a ``[file_types.<key>]`` entry.
2. Pygments: ``get_lexer_for_filename`` recognises the file. When one of the
   lexer's aliases is a configured file type, that entry is used; otherwise
   the lexer name is reported with every highlight category disabled.
3. Fallback: ``FileType.default()`` ("No filetype", nothing highlighted).
"""

import os
from dataclasses import dataclass, field
from typing import Any, Optional

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

from hecto.core.Highlighter import HighlightOptions
from hecto.utils.logging_config import logger
from hecto.utils.utils import DEFAULT_CONFIG

DEFAULT_FILE_TYPE_NAME = "No filetype"


@dataclass(frozen=True)
class FileType:
    """Display name and highlighting rules for one kind of file."""

    name: str = DEFAULT_FILE_TYPE_NAME
    options: HighlightOptions = field(default_factory=HighlightOptions)

    @classmethod
    def default(cls) -> "FileType":
        return cls()

    @classmethod
    def from_config(cls, key: str, entry: dict[str, Any]) -> "FileType":
        return cls(
            name=entry.get("display_name", key),
            options=HighlightOptions.from_config(entry.get("highlighting")),
        )


def _match_configured(
    base_name: str, extension: str, file_types: dict[str, Any]
) -> Optional[FileType]:
    # Pass 1: exact file name ("Makefile"), pass 2: extension ("rs").
    for candidate in (base_name, extension):
        if not candidate:
            continue
        for key, entry in file_types.items():
            names = [str(name).lower() for name in entry.get("extensions", [])]
            if candidate in names:
                return FileType.from_config(key, entry)
    return None


def infer_file_type(
    path: Optional[str], config: Optional[dict[str, Any]] = None
) -> FileType:
    """Returns the `FileType` for ``path``.

    Args:
        path: File name or path; None for an unnamed buffer.
        config: Application configuration as returned by
            `hecto.utils.utils.load_config()` (its `[file_types]` table is
            consulted); defaults to `DEFAULT_CONFIG`.

    Returns:
        FileType: Never None; unknown files get ``FileType.default()``.
    """
    if not path:
        return FileType.default()

    file_types: dict[str, Any] = (config or DEFAULT_CONFIG).get("file_types", {})
    base_name = os.path.basename(path).lower()
    _, extension = os.path.splitext(base_name)

    file_type = _match_configured(base_name, extension.lstrip("."), file_types)
    if file_type:
        logger.debug(f"File type '{file_type.name}' for '{path}' from configuration.")
        return file_type

    try:
        lexer = get_lexer_for_filename(path)
    except ClassNotFound:
        logger.debug(f"No file type known for '{path}'.")
        return FileType.default()

    for alias in lexer.aliases:
        if alias in file_types:
            logger.debug(f"File type '{alias}' for '{path}' via Pygments lexer '{lexer.name}'.")
            return FileType.from_config(alias, file_types[alias])

    logger.debug(f"Pygments recognised '{path}' as '{lexer.name}'; no highlighting rules.")
    return FileType(name=lexer.name)
