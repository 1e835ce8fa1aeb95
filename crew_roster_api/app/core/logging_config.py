"""
Logging for the roster API.

Records from every ``crew_roster_api`` module flow through the
package logger, which ``setup_logging`` equips with a console handler
and, optionally, a size-rotated log file.  The handlers it installs
are tagged so that a second call (every ``create_app`` runs it)
swaps them for fresh ones instead of stacking duplicates.  Records
still propagate to the root logger, where pytest's ``caplog`` and any
host application handlers can see them.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "crew_roster_api"

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

_HANDLER_TAG = "crew-roster"


def resolve_level(name: Optional[str]) -> int:
    """Turn ``"debug"``/``"INFO"``/... into a level number, defaulting to INFO."""
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure the package logger and return it.

    Parameters
    ----------
    level : str
        Level name, case insensitive.  Unknown names mean ``INFO``.
    logfile : Optional[str]
        Log file path.  Missing parent directories are created and the
        file rolls over at ``LOG_FILE_MAX_BYTES``.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in [h for h in logger.handlers if h.get_name() == _HANDLER_TAG]:
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(resolve_level(level))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        path = Path(logfile).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8")
        )
    for handler in handlers:
        handler.set_name(_HANDLER_TAG)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
