"""Logging setup.

The terminal is the editor's screen, so log records never go to stdout or
stderr. By default they are discarded; ``--debug`` sends them to a file in
the user's log directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import platformdirs

from .constants import EditorConstants

PACKAGE_LOGGER = "refitui"


def get_log_path() -> Path:
    """Return the debug log file location for this platform."""
    log_dir = Path(platformdirs.user_log_dir(EditorConstants.PROGRAM_NAME, appauthor=False))
    return log_dir / EditorConstants.LOG_FILE_NAME


def configure_logging(debug: bool = False, log_path: Optional[Path] = None) -> Optional[Path]:
    """Attach handlers to the package logger.

    Returns:
        The log file path when file logging was enabled, otherwise None.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
        # Keeps logging's last-resort stderr handler off the screen
        logger.addHandler(logging.NullHandler())
    if not debug:
        return None

    path = log_path or get_log_path()
    # OSError propagates; the caller reports it before the screen is taken over
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(EditorConstants.LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.debug("Logging to %s", path)
    return path
