"""FastAPI bridge exposing the lecture index to the recorder front-end."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

from fastapi import FastAPI, File, Form, HTTPException, Query, Response, UploadFile
from fastapi import status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ..config import AppConfig
from ..services.calendar import dates_with_lectures, lectures_for_date
from ..services.events import emit_event
from ..services.files import LectureMetadata, MetadataStore, write_file
from ..services.naming import LectureInfo, build_lecture_filename
from ..services.storage import LectureIndex, StorageIOError
from ..ui.overview import collect_overview


LOGGER = logging.getLogger(__name__)
EVENT_LOGGER = logging.getLogger("echo_recorder.web.events")


def _log_event(message: str, **context: Any) -> None:
    emit_event("APP_EVENT", message, payload=context, logger=EVENT_LOGGER)


def _storage_failure(error: StorageIOError) -> HTTPException:
    LOGGER.error("Storage operation failed: %s", error)
    return HTTPException(status_code=500, detail=str(error))


def _serialize_lectures(lectures: List[LectureInfo]) -> List[Dict[str, str]]:
    return [lecture.to_dict() for lecture in lectures]


def _index_event_emitter(kind: str, message: str, **kwargs: Any) -> None:
    emit_event(kind, message, logger=EVENT_LOGGER, **kwargs)


class CourseCreatePayload(BaseModel):
    name: str = Field(..., min_length=1)


def create_app(
    index: LectureIndex,
    *,
    config: AppConfig,
) -> FastAPI:
    """Return a configured FastAPI application serving *index*."""

    app = FastAPI(
        title="Echo Lecture Recorder",
        description="Browse recorded lectures by course and date",
    )
    index.configure_event_emitter(_index_event_emitter)
    metadata_store = MetadataStore(config)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/base-path")
    async def get_base_path() -> Dict[str, Any]:
        try:
            path = index.get_base_path()
        except StorageIOError as error:
            raise _storage_failure(error) from error
        return {"path": path}

    @app.get("/api/courses")
    async def list_courses() -> Dict[str, Any]:
        _log_event("Listing courses")
        try:
            courses = index.list_courses()
        except StorageIOError as error:
            raise _storage_failure(error) from error
        return {"courses": courses}

    @app.post("/api/courses", status_code=status.HTTP_201_CREATED)
    async def ensure_course(payload: CourseCreatePayload) -> Dict[str, Any]:
        name = payload.name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Course name is required")

        _log_event("Ensuring course directory", name=name)
        try:
            path = index.ensure_course_dir(name)
        except StorageIOError as error:
            raise _storage_failure(error) from error
        return {"course": name, "path": path}

    @app.get("/api/courses/{course_name}/lectures")
    async def list_lectures(course_name: str) -> Dict[str, Any]:
        _log_event("Listing lectures", course=course_name)
        try:
            lectures = index.list_lectures(course_name)
        except StorageIOError as error:
            raise _storage_failure(error) from error
        return {"course": course_name, "lectures": _serialize_lectures(lectures)}

    @app.post("/api/courses/{course_name}/lectures", status_code=status.HTTP_201_CREATED)
    async def upload_recording(
        course_name: str,
        date: str = Form(...),
        title: str = Form(""),
        file: UploadFile = File(...),
    ) -> Dict[str, Any]:
        date = date.strip()
        if not date:
            raise HTTPException(status_code=400, detail="Recording date is required")
        try:
            filename = build_lecture_filename(
                date,
                title,
                separator=config.separator,
                extension=config.media_extension,
            )
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        _log_event("Storing recording", course=course_name, filename=filename)
        contents = await file.read()
        try:
            course_dir = index.ensure_course_dir(course_name)
            target = Path(course_dir) / filename
            write_file(target, contents)
        except StorageIOError as error:
            raise _storage_failure(error) from error
        return {"course": course_name, "path": str(target), "bytes": len(contents)}

    @app.get("/api/dates")
    async def list_dates() -> Dict[str, Any]:
        try:
            dates = dates_with_lectures(index)
        except StorageIOError as error:
            raise _storage_failure(error) from error
        return {"dates": dates}

    @app.get("/api/dates/{date}/lectures")
    async def list_lectures_for_date(date: str) -> Dict[str, Any]:
        _log_event("Listing lectures for date", date=date)
        try:
            lectures = lectures_for_date(index, date)
        except StorageIOError as error:
            raise _storage_failure(error) from error
        return {"date": date, "lectures": _serialize_lectures(lectures)}

    @app.get("/api/overview")
    async def overview() -> Dict[str, Any]:
        try:
            snapshot = collect_overview(index)
        except StorageIOError as error:
            raise _storage_failure(error) from error
        return {
            "root": snapshot.root,
            "courses": [
                {
                    "name": course.name,
                    "lecture_count": len(course.lectures),
                    "lectures": _serialize_lectures(course.lectures),
                }
                for course in snapshot.courses
            ],
            "stats": {
                "course_count": snapshot.course_count,
                "lecture_count": snapshot.lecture_count,
                "date_count": len(snapshot.dates),
            },
        }

    @app.get("/api/lectures/metadata")
    async def get_metadata(
        course: str = Query(..., min_length=1),
        audio_path: str = Query(..., min_length=1),
    ) -> Dict[str, Any]:
        metadata = metadata_store.load(audio_path, course)
        if metadata is None:
            raise HTTPException(status_code=404, detail="Lecture metadata not found")
        return {"metadata": metadata.to_payload()}

    @app.put("/api/lectures/metadata")
    async def save_metadata(metadata: LectureMetadata) -> Dict[str, Any]:
        try:
            path = metadata_store.save(metadata)
        except StorageIOError as error:
            raise _storage_failure(error) from error
        _log_event("Saved lecture metadata", path=path)
        return {"path": str(path), "metadata": metadata.to_payload()}

    @app.delete(
        "/api/lectures",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
    )
    async def delete_lecture(
        course: str = Query(..., min_length=1),
        audio_path: str = Query(..., min_length=1),
    ) -> Response:
        _log_event("Deleting lecture", course=course, audio_path=audio_path)
        try:
            metadata_store.delete_lecture_files(audio_path, course)
        except StorageIOError as error:
            raise _storage_failure(error) from error
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


__all__ = ["create_app"]
