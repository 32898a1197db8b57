"""Shared helpers for building overview snapshots of recorded lectures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..services.naming import LectureInfo
from ..services.storage import LectureIndex


@dataclass
class CourseOverview:
    name: str
    lectures: List[LectureInfo]


@dataclass
class OverviewSnapshot:
    root: str
    courses: List[CourseOverview]
    course_count: int
    lecture_count: int
    dates: List[str]

    @property
    def latest_date(self) -> str:
        return max(self.dates, default="")


def collect_overview(index: LectureIndex) -> OverviewSnapshot:
    """Aggregate the lecture index into a convenient snapshot for UIs.

    Courses are ordered by name so the output is stable between runs. Dates
    keep the order in which they were first seen while scanning.
    """

    courses: List[CourseOverview] = []
    dates: List[str] = []
    lecture_count = 0

    for course_name, lectures in index.iter_course_lectures():
        lecture_count += len(lectures)
        courses.append(CourseOverview(name=course_name, lectures=lectures))
        for lecture in lectures:
            if lecture.date not in dates:
                dates.append(lecture.date)

    courses.sort(key=lambda course: course.name.lower())

    return OverviewSnapshot(
        root=str(index.root),
        courses=courses,
        course_count=len(courses),
        lecture_count=lecture_count,
        dates=dates,
    )


__all__ = ["CourseOverview", "OverviewSnapshot", "collect_overview"]
