"""Filesystem services backing the lecture index."""

from .calendar import build_date_index, dates_with_lectures, lectures_for_date
from .naming import LectureInfo, build_lecture_filename, parse_lecture_entry
from .paths import StorageIOError, ensure_course_dir, get_base_path, get_documents_path
from .storage import LectureIndex

__all__ = [
    "LectureIndex",
    "LectureInfo",
    "StorageIOError",
    "build_date_index",
    "build_lecture_filename",
    "dates_with_lectures",
    "ensure_course_dir",
    "get_base_path",
    "get_documents_path",
    "lectures_for_date",
    "parse_lecture_entry",
]
