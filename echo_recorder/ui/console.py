"""Plain-text overview of recorded lectures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from ..services.naming import LectureInfo
from ..services.storage import LectureIndex
from .overview import CourseOverview, collect_overview


@dataclass
class ConsoleSection:
    title: str
    entries: Iterable[str]


class ConsoleUI:
    """Minimal console UI that lists courses and their lectures."""

    def __init__(
        self,
        index: LectureIndex,
        *,
        write: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._index = index
        self._write = write or print

    def run(self) -> None:
        """Render the current course/lecture hierarchy to stdout."""

        snapshot = collect_overview(self._index)
        self._write("Echo – Lecture Overview")
        self._write("=" * 40)
        self._write(f"Storage: {snapshot.root}")
        self._write("")
        if not snapshot.courses:
            self._write("No courses recorded yet.")
            return

        for section in self._build_sections(snapshot.courses):
            self._write(section.title)
            self._write("-" * len(section.title))
            has_entries = False
            for entry in section.entries:
                has_entries = True
                self._write(entry)
            if not has_entries:
                self._write("(empty)")
            self._write("")

        self._write(
            f"{snapshot.course_count} course(s), {snapshot.lecture_count} lecture(s), "
            f"{len(snapshot.dates)} recording day(s)"
        )

    def _build_sections(self, courses: Iterable[CourseOverview]) -> Iterable[ConsoleSection]:
        for course in courses:
            yield ConsoleSection(
                title=f"Course: {course.name}",
                entries=(self._format_lecture(lecture) for lecture in course.lectures),
            )

    @staticmethod
    def _format_lecture(lecture: LectureInfo) -> str:
        title = lecture.title or "(untitled)"
        return f"  {lecture.date}  {title}"


__all__ = ["ConsoleUI"]
