"""Helpers translating between recording filenames and lecture metadata."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date as date_type
from pathlib import Path
from typing import Optional

__all__ = [
    "LectureInfo",
    "build_lecture_filename",
    "clean_title",
    "format_date",
    "has_media_extension",
    "is_valid_text",
    "parse_lecture_entry",
    "split_lecture_stem",
]


LOGGER = logging.getLogger(__name__)

_DISALLOWED_TITLE_CHARS = re.compile(r"[^a-zA-Z0-9_\-\s]")
_WHITESPACE = re.compile(r"\s+")
_PATH_SEPARATORS = ("/", "\\")


@dataclass(frozen=True)
class LectureInfo:
    """A lecture derived from a ``<date>_<title>.<ext>`` recording on disk."""

    filename: str
    date: str
    title: str
    path: str

    def to_dict(self) -> dict:
        return {
            "filename": self.filename,
            "date": self.date,
            "title": self.title,
            "path": self.path,
        }


def is_valid_text(value: str) -> bool:
    """Return ``False`` for names holding bytes that are not valid UTF-8."""

    # Undecodable bytes surface as lone surrogates from os.fsdecode().
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def has_media_extension(path: Path, extension: str) -> bool:
    """Return ``True`` when *path* ends in ``.extension`` (case-sensitive)."""

    return path.suffix == f".{extension.lstrip('.')}"


def split_lecture_stem(stem: str, separator: str = "_") -> tuple[str, str]:
    """Split *stem* on the first *separator* into ``(date, title)``."""

    date, _, title = stem.partition(separator)
    return date, title


def parse_lecture_entry(
    path: Path,
    *,
    separator: str = "_",
) -> Optional[LectureInfo]:
    """Build a :class:`LectureInfo` for the recording at *path*.

    The caller has already checked that *path* is a regular file with the
    recognised media extension. ``None`` is returned when the name is not
    valid text so that a single odd entry never aborts a directory scan.
    """

    stem = path.stem
    if not stem or not is_valid_text(path.name):
        LOGGER.debug("Skipping undecodable recording name: %r", path.name)
        return None

    date, title = split_lecture_stem(stem, separator)
    return LectureInfo(
        filename=stem,
        date=date,
        title=title,
        path=str(path.absolute()),
    )


def clean_title(title: str) -> str:
    """Return *title* reduced to characters that are safe in a filename."""

    cleaned = _DISALLOWED_TITLE_CHARS.sub("", title)
    return _WHITESPACE.sub("_", cleaned.strip())


def format_date(value: date_type) -> str:
    """Return the ``YYYY-MM-DD`` token used as the date part of a recording."""

    return value.strftime("%Y-%m-%d")


def build_lecture_filename(
    date: str,
    title: str = "",
    *,
    separator: str = "_",
    extension: str = "",
) -> str:
    """Return ``<date><separator><title>`` with an optional ``.extension``.

    *date* must be non-empty and free of the separator and of path
    separators; :class:`ValueError` is raised otherwise.

    >>> build_lecture_filename("2024-01-15", "Intro to Systems!", extension="webm")
    '2024-01-15_Intro_to_Systems.webm'
    """

    if not date or separator in date or any(sep in date for sep in _PATH_SEPARATORS):
        raise ValueError(f"Invalid recording date {date!r}")
    cleaned = clean_title(title)
    stem = f"{date}{separator}{cleaned}" if cleaned else date
    suffix = ""
    if extension:
        suffix = extension if extension.startswith(".") else f".{extension}"
    return stem + suffix
