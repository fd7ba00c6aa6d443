"""Application log for pomotrack.

Everything under the ``pomotrack`` logger namespace goes to one rotating file
in the platform log directory. Core modules only call
``logging.getLogger(__name__)``; nothing is written until a command sets the
file handler up through ``get_logger()``.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

APP_LOGGER_NAME = "pomotrack"
LOG_FILE_NAME = "pomotrack.log"
LOG_LEVEL_ENV = "POMOTRACK_LOG_LEVEL"

_MAX_BYTES = 2 * 1024 * 1024  # 2 MB
_BACKUP_COUNT = 3

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Where the session and command log is written."""
    return Path(user_log_dir(APP_LOGGER_NAME)) / LOG_FILE_NAME


def _level_from_env() -> int:
    name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger() -> logging.Logger:
    """Return the ``pomotrack`` logger, attaching the file handler once."""
    global _logger
    if _logger is not None:
        return _logger

    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(_level_from_env())
    if not logger.handlers:
        logger.addHandler(handler)
    # Keep session chatter out of the terminal
    logger.propagate = False

    _logger = logger
    return _logger
