# hecto/utils/logging_config.py
"""hecto.utils.logging_config
============================

Logging configuration for the hecto text buffer and highlighting engine.

The module defines the global ``logger`` used by every core component and a
single setup function, :func:`setup_logging`, which attaches handlers to the
root logger based on the ``[logging]`` section of the application config.

Features:
    - Rotating file logging for general events (``hecto.log`` by default).
    - Optional console logging to stderr with a configurable level.
    - Optional separate ``error.log`` for ERROR and CRITICAL events.
    - Automatic creation of the log directory, with fallback to the system
      temp directory when it cannot be created.
    - Safe reconfiguration: existing root handlers are cleared first.
    - Never raises; problems are reported on stderr.

Usage:
    >>> from hecto.utils import logging_config
    >>> logging_config.setup_logging({"logging": {"file_level": "INFO"}})
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# Created at import time, unconfigured until ``setup_logging()`` runs.
logger = logging.getLogger("hecto")

FILE_FORMAT = (
    "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"
)
CONSOLE_FORMAT = "%(levelname)-8s - %(name)-12s - %(message)s"


def _resolve_log_path(log_filename: str) -> str:
    """Makes sure the directory of ``log_filename`` exists.

    Falls back to ``<tmp>/hecto.log`` when the directory cannot be created.
    """
    log_dir = os.path.dirname(log_filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e_mkdir:
            print(
                f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr
            )
            log_filename = os.path.join(tempfile.gettempdir(), "hecto.log")
            print(f"Logging to temporary file: '{log_filename}'", file=sys.stderr)
    return log_filename


def _rotating_handler(
    filename: str, level: int, max_bytes: int, backup_count: int
) -> Optional[logging.Handler]:
    try:
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    except Exception as e_fh:
        print(
            f"Error setting up file logger for '{filename}': {e_fh}. File logging may be impaired.",
            file=sys.stderr,
        )
        return None
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    handler.setLevel(level)
    return handler


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to three independent handlers are attached to the root logger:

    1. File handler: rotating log file (``file``, default ``hecto.log``)
       capturing everything from ``file_level`` (default DEBUG) upward.
    2. Console handler: optional stderr output at ``console_level``
       (default WARNING).
    3. Error-file handler: optional rotating ``error.log`` that stores only
       ERROR and CRITICAL events.

    Existing handlers on the root logger are cleared, so calling this twice
    (e.g. in unit tests) does not duplicate records.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` sub-section is consulted; recognised keys are
            ``file``, ``file_level``, ``console_level``, ``log_to_console``
            and ``separate_error_log``.

    Example:
        >>> setup_logging({"logging": {"log_to_console": False}})
    """
    if config is None:
        config = {}
    logging_config = config.get("logging", {})

    log_file_level_str = str(logging_config.get("file_level", "DEBUG")).upper()
    log_file_level = getattr(logging, log_file_level_str, logging.DEBUG)
    log_filename = _resolve_log_path(logging_config.get("file", "hecto.log"))

    file_handler = _rotating_handler(
        log_filename, log_file_level, max_bytes=2 * 1024 * 1024, backup_count=5
    )

    # Console Handler
    console_handler = None
    if logging_config.get("log_to_console", True):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        console_handler.setLevel(getattr(logging, console_level_str, logging.WARNING))

    # Optional Separate Error Log File
    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        error_file_handler = _rotating_handler(
            _resolve_log_path("error.log"),
            logging.ERROR,
            max_bytes=1 * 1024 * 1024,
            backup_count=3,
        )

    root_logger = logging.getLogger()
    root_logger.handlers = []  # avoid duplicates on reconfiguration

    for handler in (file_handler, console_handler, error_file_handler):
        if handler:
            root_logger.addHandler(handler)

    root_logger.setLevel(log_file_level)

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info(
            "File logging to '%s' at level: %s.",
            log_filename,
            logging.getLevelName(file_handler.level),
        )
    if console_handler:
        logging.info(
            "Console logging to stderr at level: %s.",
            logging.getLevelName(console_handler.level),
        )
    if error_file_handler:
        logging.info("Error logging to 'error.log' at level: ERROR.")
