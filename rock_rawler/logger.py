"""Logging setup for RockRawler.

Everything goes through one named logger, ``RockRawler``, and its children
(``RockRawler.crawler``, ``RockRawler.fetcher``, ...). Console output is written
to *stderr* because stdout carries the crawl results, one URL per line.
A rotating logfile can be added with ``log_file``.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Union

LOGGER_NAME: Final[str] = "RockRawler"

_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LEVEL: Final[str] = "WARNING"
_LOGFILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
_LOGFILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _build_handlers(log_file: str | Path | None, fmt: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file), maxBytes=_LOGFILE_MAX_BYTES, backupCount=_LOGFILE_BACKUPS, encoding="utf-8"
            )
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: _LevelT = _LEVEL,
    log_file: str | Path | None = None,
    log_format: str = _FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Set the level and handlers of the ``RockRawler`` logger.

    With ``replace_handlers=False`` the new handlers are added next to the
    existing ones instead of replacing them.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        for old in list(lg.handlers):
            lg.removeHandler(old)
            old.close()
    for handler in _build_handlers(log_file, log_format):
        lg.addHandler(handler)
    lg.propagate = False
    return lg


def init_logging(level: _LevelT = _LEVEL, log_file: str | Path | None = None) -> logging.Logger:
    return configure(level=level, log_file=log_file)


def get_logger(name: str | None = None) -> logging.Logger:
    """``RockRawler`` itself, or ``RockRawler.<name>`` when *name* is given."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "get_logger", "LOGGER_NAME"]
