"""Raw file access and the JSON metadata sidecars stored next to recordings."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config import AppConfig
from .events import file_operation
from .paths import StorageIOError, get_documents_path


LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


def write_file(path: PathLike, contents: bytes) -> None:
    """Write *contents* to *path*, replacing any existing file."""

    target = Path(path)
    with file_operation("write_file", path=target, bytes=len(contents)):
        try:
            target.write_bytes(contents)
        except OSError as error:
            raise StorageIOError(str(error)) from error


def read_file(path: PathLike) -> str:
    """Return the UTF-8 text stored at *path*."""

    target = Path(path)
    try:
        return target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise StorageIOError(str(error)) from error


def remove_file(path: PathLike) -> None:
    """Delete *path*; a missing file is not an error."""

    target = Path(path)
    if not target.exists():
        return
    with file_operation("remove_file", path=target):
        try:
            target.unlink()
        except OSError as error:
            raise StorageIOError(str(error)) from error


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


class LectureMetadata(BaseModel):
    """Details about a recording that cannot be derived from its filename.

    Sidecars use the recorder front-end's camelCase keys (``courseName``,
    ``audioPath``, ``aiNotes`` ...). Python code may use either spelling, and
    keys this model does not know are kept and written back unchanged.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    course_id: str = Field("", alias="courseId")
    course_name: str = Field(..., alias="courseName")
    date: str
    title: str = ""
    audio_path: str = Field(..., alias="audioPath")
    duration: float = 0.0
    transcript: Optional[str] = None
    ai_notes: Optional[str] = Field(None, alias="aiNotes")
    flashcards: Optional[List[Dict[str, Any]]] = None
    quiz_questions: Optional[List[Dict[str, Any]]] = Field(None, alias="quizQuestions")
    created_at: str = Field(default_factory=_now, alias="createdAt")

    def to_payload(self) -> Dict[str, Any]:
        """Return the sidecar representation, omitting unset optional fields."""

        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


class MetadataStore:
    """Load and store :class:`LectureMetadata` beside the matching recording."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config

    def sidecar_path(self, audio_path: PathLike, course_name: str) -> Path:
        stem = Path(audio_path).name
        if stem.endswith(self._config.media_suffix):
            stem = stem[: -len(self._config.media_suffix)]
        root = get_documents_path(self._config)
        return root / course_name / f"{stem}{self._config.metadata_suffix}"

    def save(self, metadata: LectureMetadata) -> Path:
        path = self.sidecar_path(metadata.audio_path, metadata.course_name)
        write_file(path, metadata.to_json().encode("utf-8"))
        LOGGER.debug("Saved lecture metadata to %s", path)
        return path

    def load(self, audio_path: PathLike, course_name: str) -> Optional[LectureMetadata]:
        """Return the stored metadata, or ``None`` when absent or unreadable."""

        path = self.sidecar_path(audio_path, course_name)
        if not path.exists():
            return None
        try:
            return LectureMetadata.model_validate_json(read_file(path))
        except (StorageIOError, ValidationError) as error:
            LOGGER.warning("Ignoring unreadable lecture metadata at %s: %s", path, error)
            return None

    def delete_lecture_files(self, audio_path: PathLike, course_name: str) -> None:
        """Remove the sidecar and the recording itself."""

        sidecar = self.sidecar_path(audio_path, course_name)
        recording = sidecar.with_name(sidecar.stem + self._config.media_suffix)
        for target in (sidecar, recording):
            remove_file(target)
        LOGGER.info("Deleted lecture files for %s in course '%s'", sidecar.stem, course_name)


__all__ = [
    "LectureMetadata",
    "MetadataStore",
    "read_file",
    "remove_file",
    "write_file",
]
