"""Directory-backed index of courses and their recorded lectures."""

from __future__ import annotations

import contextlib
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..config import AppConfig
from . import paths as paths_module
from .naming import LectureInfo, has_media_extension, is_valid_text, parse_lecture_entry
from .paths import StorageIOError


LOGGER = logging.getLogger(__name__)


class LectureIndex:
    """Read-only view over ``<documents>/echo/Classes``.

    Every course is a directory below the storage root and every lecture a
    media file inside it. Nothing is cached: each call rescans the disk.
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        event_emitter: Optional[Callable[..., None]] = None,
    ) -> None:
        self._config = config
        self._event_emitter: Optional[Callable[..., None]] = event_emitter

    @property
    def config(self) -> AppConfig:
        return self._config

    def configure_event_emitter(self, emitter: Optional[Callable[..., None]]) -> None:
        """Register the callable notified after each directory scan."""

        self._event_emitter = emitter

    @contextlib.contextmanager
    def _track_scan(self, action: str, **payload: Any) -> Iterator[Dict[str, Any]]:
        """Report the duration and outcome of a directory scan to the emitter."""

        if self._event_emitter is None:
            yield payload
            return

        start = time.perf_counter()
        event_payload: Dict[str, Any] = dict(payload)
        try:
            yield event_payload
        except Exception as exc:
            event_payload.setdefault("status", "error")
            event_payload.setdefault("error", f"{exc.__class__.__name__}: {exc}")
            raise
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            event_payload.setdefault("status", "ok")
            filtered = {
                key: value for key, value in event_payload.items() if value is not None
            }
            self._event_emitter(
                "FILE_OP",
                action,
                payload=filtered,
                duration_ms=duration_ms,
            )

    @staticmethod
    def _read_directory(directory: Path) -> List[Path]:
        try:
            return list(directory.iterdir())
        except OSError as error:
            LOGGER.error("Could not read directory '%s': %s", directory, error)
            raise StorageIOError(str(error)) from error

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------
    @property
    def root(self) -> Path:
        return paths_module.get_documents_path(self._config)

    def get_base_path(self) -> str:
        return paths_module.get_base_path(self._config)

    def ensure_course_dir(self, course_name: str) -> str:
        LOGGER.debug("Ensuring course directory for '%s'", course_name)
        return paths_module.ensure_course_dir(course_name, self._config)

    def course_path(self, course_name: str) -> Path:
        return self.root / course_name

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------
    def list_courses(self) -> List[str]:
        """Return the course directory names in filesystem enumeration order."""

        root = self.root
        with self._track_scan("list_courses", path=root) as event:
            if not root.exists():
                LOGGER.debug("Storage root %s does not exist yet", root)
                event["count"] = 0
                return []

            courses: List[str] = []
            for entry in self._read_directory(root):
                if not entry.is_dir():
                    continue
                if not is_valid_text(entry.name):
                    LOGGER.debug("Skipping undecodable course directory: %r", entry.name)
                    continue
                courses.append(entry.name)
            event["count"] = len(courses)
            return courses

    def list_lectures(self, course_name: str) -> List[LectureInfo]:
        """Return the lectures of *course_name*, newest date first.

        Lectures sharing a date keep the order in which the filesystem
        enumerated them.
        """

        course_dir = self.course_path(course_name)
        with self._track_scan("list_lectures", course=course_name, path=course_dir) as event:
            if not course_dir.exists():
                LOGGER.debug("Course directory %s does not exist", course_dir)
                event["count"] = 0
                return []

            lectures: List[LectureInfo] = []
            for entry in self._read_directory(course_dir):
                if not entry.is_file():
                    continue
                if not has_media_extension(entry, self._config.media_extension):
                    continue
                lecture = parse_lecture_entry(entry, separator=self._config.separator)
                if lecture is None:
                    continue
                lectures.append(lecture)

            lectures.sort(key=lambda lecture: lecture.date, reverse=True)
            event["count"] = len(lectures)
            LOGGER.debug("Found %s lecture(s) for course '%s'", len(lectures), course_name)
            return lectures

    def iter_course_lectures(self) -> Iterator[tuple[str, List[LectureInfo]]]:
        """Yield ``(course_name, lectures)`` for every course under the root."""

        for course_name in self.list_courses():
            yield course_name, self.list_lectures(course_name)


__all__ = ["LectureIndex", "LectureInfo", "StorageIOError"]
