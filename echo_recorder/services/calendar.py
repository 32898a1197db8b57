"""Cross-course views of recorded lectures keyed by their date token."""

from __future__ import annotations

import dataclasses
import logging
from typing import Dict, List

from .naming import LectureInfo
from .storage import LectureIndex


LOGGER = logging.getLogger(__name__)


def _prefixed(course_name: str, lecture: LectureInfo) -> LectureInfo:
    return dataclasses.replace(lecture, title=f"{course_name} - {lecture.title}")


def lectures_for_date(index: LectureIndex, date: str) -> List[LectureInfo]:
    """Return every lecture recorded on *date* across all courses.

    Titles are prefixed with ``"<course> - "`` and the result is ordered by
    filename, descending.
    """

    matches: List[LectureInfo] = []
    for course_name, lectures in index.iter_course_lectures():
        for lecture in lectures:
            if lecture.date == date:
                matches.append(_prefixed(course_name, lecture))

    matches.sort(key=lambda lecture: lecture.filename, reverse=True)
    LOGGER.debug("Found %s lecture(s) on %s", len(matches), date)
    return matches


def dates_with_lectures(index: LectureIndex) -> List[str]:
    """Return the distinct lecture dates in the order they were first seen."""

    dates: List[str] = []
    for _course_name, lectures in index.iter_course_lectures():
        for lecture in lectures:
            if lecture.date not in dates:
                dates.append(lecture.date)
    return dates


def build_date_index(index: LectureIndex) -> Dict[str, List[LectureInfo]]:
    """Group every lecture by date with course-prefixed titles.

    Each group is ordered like :func:`lectures_for_date`.
    """

    grouped: Dict[str, List[LectureInfo]] = {}
    for course_name, lectures in index.iter_course_lectures():
        for lecture in lectures:
            grouped.setdefault(lecture.date, []).append(_prefixed(course_name, lecture))
    for entries in grouped.values():
        entries.sort(key=lambda lecture: lecture.filename, reverse=True)
    return grouped


__all__ = ["build_date_index", "dates_with_lectures", "lectures_for_date"]
