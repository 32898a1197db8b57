"""Centralized logging configuration for the Echo lecture recorder."""

from __future__ import annotations

import logging
from logging import Logger
from pathlib import Path
from typing import Iterable, List, Optional, Union


DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE_NAME = "echo_recorder.log"


def resolve_log_level(value: Union[str, int, None], default: int = logging.INFO) -> int:
    """Translate a level name such as ``"debug"`` into a :mod:`logging` constant."""

    if value is None:
        return default
    if isinstance(value, int):
        return value
    candidate = logging.getLevelName(value.strip().upper())
    if isinstance(candidate, int):
        return candidate
    return default


def configure_logging(level: int = logging.INFO, *, handlers: Iterable[logging.Handler] | None = None) -> Logger:
    """Configure the root logger with the recorder's default format."""

    logger = logging.getLogger()
    logger.setLevel(level)

    if handlers is None:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        logger.addHandler(stream_handler)
    else:
        for handler in handlers:
            logger.addHandler(handler)

    return logger


def get_log_file_path(storage_root: Path) -> Path:
    """Return the default path for the application log file."""

    return storage_root / LOG_FILE_NAME


def prepare_logging(
    storage_root: Optional[Path],
    *,
    level: int = logging.INFO,
    console: bool = True,
) -> Logger:
    """Attach a file handler inside *storage_root* and, optionally, a stream handler.

    The file handler is skipped when *storage_root* is ``None`` or the log file
    cannot be opened, so that a read-only documents folder never prevents the
    CLI from listing recordings.
    """

    formatter = logging.Formatter(DEFAULT_LOG_FORMAT)
    handlers: List[logging.Handler] = []
    if storage_root is not None:
        log_file = get_log_file_path(storage_root)
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as error:
            logging.getLogger(__name__).warning(
                "Could not open log file '%s': %s", log_file, error
            )
        else:
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
    if console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        handlers.append(stream_handler)
    return configure_logging(level, handlers=handlers)


__all__ = [
    "DEFAULT_LOG_FORMAT",
    "LOG_FILE_NAME",
    "configure_logging",
    "get_log_file_path",
    "prepare_logging",
    "resolve_log_level",
]
