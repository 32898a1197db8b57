"""Resolution of the on-disk locations used to store recordings."""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import AppConfig
from .events import file_operation


LOGGER = logging.getLogger(__name__)


class StorageIOError(RuntimeError):
    """Raised when the storage medium rejects a read, write or create.

    The message is the description of the underlying ``OSError``.
    """


def _documents_root(config: AppConfig) -> Path:
    if config.documents_dir is not None:
        return config.documents_dir
    try:
        return Path.home() / "Documents"
    except (RuntimeError, KeyError):
        LOGGER.warning("Home directory could not be determined; storing recordings under '.'")
        return Path(".")


def get_documents_path(config: AppConfig) -> Path:
    """Return ``<documents>/<app_dir>/<classes_dir>`` without touching the disk.

    The location is recomputed on every call so that changes to the
    environment are picked up immediately.
    """

    return _documents_root(config) / config.app_dir / config.classes_dir


def _ensure_directory(path: Path, *, label: str) -> str:
    with file_operation("ensure_directory", label=label, path=path) as event:
        event["created"] = not path.is_dir()
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise StorageIOError(str(error)) from error
    return str(path.absolute())


def get_base_path(config: AppConfig) -> str:
    """Return the absolute storage root, creating it when missing."""

    return _ensure_directory(get_documents_path(config), label="storage root")


def ensure_course_dir(course_name: str, config: AppConfig) -> str:
    """Return the absolute directory for *course_name*, creating it when missing.

    *course_name* is joined verbatim; callers are trusted not to pass
    separators or ``..`` segments.
    """

    return _ensure_directory(get_documents_path(config) / course_name, label="course")


__all__ = [
    "StorageIOError",
    "ensure_course_dir",
    "get_base_path",
    "get_documents_path",
]
