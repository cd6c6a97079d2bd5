# hecto/utils/utils.py
"""
hecto.utils.utils
=================

Core utility functions for the hecto text buffer.

Key functionalities include:
- Embedded Default Configuration: `DEFAULT_CONFIG` describes logging, the
  highlight color palette and every built-in file type (extensions and
  highlighting rules). It is always sufficient to run.
- Configuration Loading: `load_config` deep-merges an optional user TOML file
  (`~/.config/hecto/config.toml`) over the embedded defaults.
- Helper Utilities: dictionary deep-merge, hex to xterm-256 color conversion
  and grapheme-cluster segmentation (via the `regex` module).
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import regex
import toml

from hecto.utils.logging_config import logger

# --- Constants ---
WHITE_FG_IDX = 255
GRAPHEME_PATTERN = regex.compile(r"\X")
USER_CONFIG_PATH = Path.home() / ".config" / "hecto" / "config.toml"

RUST_PRIMARY_KEYWORDS = [
    "as", "break", "const", "continue", "crate", "else", "enum", "extern",
    "false", "fn", "for", "if", "impl", "in", "let", "loop", "match", "mod",
    "move", "mut", "pub", "ref", "return", "self", "Self", "static", "struct",
    "super", "trait", "true", "type", "unsafe", "use", "where", "while",
    "dyn", "abstract", "become", "box", "do", "final", "macro", "override",
    "priv", "typeof", "unsized", "virtual", "yield", "async", "await", "try",
]
RUST_SECONDARY_KEYWORDS = [
    "bool", "char", "i8", "i16", "i32", "i64", "isize", "u8", "u16", "u32",
    "u64", "usize", "f32", "f64", "str", "String", "Vec", "Option", "Result",
    "Some", "None", "Ok", "Err", "Box",
]
C_PRIMARY_KEYWORDS = [
    "auto", "break", "case", "const", "continue", "default", "do", "else",
    "enum", "extern", "for", "goto", "if", "inline", "register", "restrict",
    "return", "sizeof", "static", "struct", "switch", "typedef", "union",
    "volatile", "while", "NULL",
]
C_SECONDARY_KEYWORDS = [
    "char", "double", "float", "int", "long", "short", "signed", "unsigned",
    "void", "size_t", "bool",
]

# This dictionary is the ultimate fallback, ensuring the library can ALWAYS run.
DEFAULT_CONFIG: Dict[str, Any] = {
    "logging": {
        "file": "hecto.log", "file_level": "DEBUG", "console_level": "WARNING",
        "log_to_console": True, "separate_error_log": False,
    },
    "colors": {
        "highlight": {
            "none": "#ffffff", "number": "#c0e87f", "match": "#268bd2",
            "string": "#d33682", "emphasis": "#e87f91", "character": "#6c71c4",
            "comment": "#859900", "block_comment": "#859900",
            "primary_keyword": "#f71d99", "secondary_keyword": "#2aa198",
        },
    },
    "file_types": {
        "rust": {
            "display_name": "Rust",
            "extensions": ["rs"],
            "highlighting": {
                "numbers": True, "strings": True, "characters": True,
                "comments": True, "multiline_comments": True,
                "primary_keywords": RUST_PRIMARY_KEYWORDS,
                "secondary_keywords": RUST_SECONDARY_KEYWORDS,
            },
        },
        "c": {
            "display_name": "C",
            "extensions": ["c", "h"],
            "highlighting": {
                "numbers": True, "strings": True, "characters": True,
                "comments": True, "multiline_comments": True,
                "primary_keywords": C_PRIMARY_KEYWORDS,
                "secondary_keywords": C_SECONDARY_KEYWORDS,
            },
        },
        "cpp": {
            "display_name": "C++",
            "extensions": ["cpp", "cxx", "cc", "hpp", "hxx", "hh"],
            "highlighting": {
                "numbers": True, "strings": True, "characters": True,
                "comments": True, "multiline_comments": True,
                "primary_keywords": C_PRIMARY_KEYWORDS + [
                    "class", "namespace", "template", "typename", "public",
                    "private", "protected", "virtual", "new", "delete", "this",
                    "try", "catch", "throw", "using", "nullptr", "true", "false",
                ],
                "secondary_keywords": C_SECONDARY_KEYWORDS + ["auto", "std", "string"],
            },
        },
        "javascript": {
            "display_name": "JavaScript",
            "extensions": ["js", "mjs", "cjs", "jsx"],
            "highlighting": {
                "numbers": True, "strings": True, "characters": False,
                "comments": True, "multiline_comments": True,
                "primary_keywords": [
                    "break", "case", "catch", "class", "const", "continue",
                    "debugger", "default", "delete", "do", "else", "export",
                    "extends", "finally", "for", "function", "if", "import",
                    "in", "instanceof", "let", "new", "return", "super",
                    "switch", "this", "throw", "try", "typeof", "var", "void",
                    "while", "with", "yield", "async", "await", "of",
                ],
                "secondary_keywords": [
                    "true", "false", "null", "undefined", "NaN", "Infinity",
                ],
            },
        },
        "go": {
            "display_name": "Go",
            "extensions": ["go"],
            "highlighting": {
                "numbers": True, "strings": True, "characters": True,
                "comments": True, "multiline_comments": True,
                "primary_keywords": [
                    "break", "case", "chan", "const", "continue", "default",
                    "defer", "else", "fallthrough", "for", "func", "go", "goto",
                    "if", "import", "interface", "map", "package", "range",
                    "return", "select", "struct", "switch", "type", "var",
                ],
                "secondary_keywords": [
                    "bool", "byte", "error", "float32", "float64", "int",
                    "int8", "int16", "int32", "int64", "rune", "string",
                    "uint", "uint8", "uint16", "uint32", "uint64", "nil",
                    "true", "false",
                ],
            },
        },
        "java": {
            "display_name": "Java",
            "extensions": ["java"],
            "highlighting": {
                "numbers": True, "strings": True, "characters": True,
                "comments": True, "multiline_comments": True,
                "primary_keywords": [
                    "abstract", "break", "case", "catch", "class", "continue",
                    "default", "do", "else", "extends", "final", "finally",
                    "for", "if", "implements", "import", "instanceof",
                    "interface", "new", "package", "private", "protected",
                    "public", "return", "static", "super", "switch",
                    "synchronized", "this", "throw", "throws", "try", "while",
                ],
                "secondary_keywords": [
                    "boolean", "byte", "char", "double", "float", "int", "long",
                    "short", "void", "String", "null", "true", "false",
                ],
            },
        },
        "markdown": {
            "display_name": "Markdown",
            "extensions": ["md", "markdown", "mdown", "mkd"],
            "highlighting": {"emphasis": True},
        },
    },
}


# --- Helper Functions ---

def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Loads the embedded defaults and merges a user TOML file over them.

    Args:
        path: Location of the user config. Defaults to
            `~/.config/hecto/config.toml`. A missing file is not an error.

    Returns:
        The merged configuration dictionary. Parse errors are logged and the
        defaults are returned unchanged.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    user_config_path = Path(path) if path is not None else USER_CONFIG_PATH
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except Exception as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def hex_to_xterm(hex_color: str) -> int:
    """
    Converts a hexadecimal color string to the nearest xterm-256 color index.
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        return WHITE_FG_IDX
    try:
        r, g, b = (int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    except ValueError:
        return WHITE_FG_IDX

    if r == g == b:
        if r < 8:
            return 16
        if r > 248:
            return 231
        return round(((r - 8) / 247) * 24) + 232

    return int(
        16
        + (36 * round(r / 255 * 5))
        + (6 * round(g / 255 * 5))
        + round(b / 255 * 5)
    )


def split_graphemes(text: str) -> list[str]:
    """
    Splits `text` into extended grapheme clusters (what a user sees as one symbol).

    >>> split_graphemes("e\u0301x")
    ['é', 'x']
    """
    return GRAPHEME_PATTERN.findall(text)
