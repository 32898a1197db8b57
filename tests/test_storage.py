from __future__ import annotations

from pathlib import Path
from typing import Any, List

import pytest

from echo_recorder.config import AppConfig
from echo_recorder.services.storage import LectureIndex, StorageIOError


def test_listings_are_empty_when_root_is_missing(temp_config: AppConfig, storage_root: Path) -> None:
    index = LectureIndex(temp_config)

    assert index.list_courses() == []
    assert index.list_lectures("CS101") == []
    assert not storage_root.exists()


def test_list_courses_returns_directories_only(
    temp_config: AppConfig, storage_root: Path
) -> None:
    (storage_root / "CS101").mkdir(parents=True)
    (storage_root / "MATH200").mkdir()
    (storage_root / "echo_recorder.log").write_text("log", encoding="utf-8")

    courses = LectureIndex(temp_config).list_courses()

    assert sorted(courses) == ["CS101", "MATH200"]


def test_list_lectures_is_empty_for_missing_course(
    temp_config: AppConfig, make_recording
) -> None:
    make_recording("CS101", "20240115_Intro.webm")

    assert LectureIndex(temp_config).list_lectures("BIO100") == []


def test_list_lectures_filters_to_media_files(
    temp_config: AppConfig, make_recording, storage_root: Path
) -> None:
    make_recording("CS101", "20240115_Intro.webm")
    make_recording("CS101", "20240115_Intro.json", b"{}")
    make_recording("CS101", "20240116_Shouting.WEBM")
    make_recording("CS101", "notes.txt", b"text")
    (storage_root / "CS101" / "20240117_folder.webm").mkdir()

    lectures = LectureIndex(temp_config).list_lectures("CS101")

    assert [lecture.filename for lecture in lectures] == ["20240115_Intro"]
    assert all(Path(lecture.path).is_file() for lecture in lectures)
    assert all(lecture.path.endswith(".webm") for lecture in lectures)


def test_list_lectures_sorts_by_date_descending(temp_config: AppConfig, make_recording) -> None:
    for name in (
        "20240110_Second.webm",
        "20240301_Last.webm",
        "20240101_First.webm",
        "20240215.webm",
    ):
        make_recording("CS101", name)

    lectures = LectureIndex(temp_config).list_lectures("CS101")

    dates = [lecture.date for lecture in lectures]
    assert dates == ["20240301", "20240215", "20240110", "20240101"]
    assert all(a.date >= b.date for a, b in zip(lectures, lectures[1:]))


def test_list_lectures_raises_when_course_is_not_a_directory(
    temp_config: AppConfig, storage_root: Path
) -> None:
    storage_root.mkdir(parents=True)
    (storage_root / "CS101").write_text("not a directory", encoding="utf-8")

    with pytest.raises(StorageIOError):
        LectureIndex(temp_config).list_lectures("CS101")


def test_undecodable_names_on_disk_are_skipped(
    temp_config: AppConfig, make_recording, storage_root: Path
) -> None:
    make_recording("CS101", "20240115_Intro.webm")
    try:
        (storage_root / "CS101" / "20240116_\udcff.webm").write_bytes(b"webm")
        (storage_root / "bad\udcff").mkdir()
    except (OSError, UnicodeEncodeError):
        pytest.skip("filesystem does not accept non-UTF-8 names")

    index = LectureIndex(temp_config)

    assert index.list_courses() == ["CS101"]
    assert [lecture.filename for lecture in index.list_lectures("CS101")] == ["20240115_Intro"]


def test_scans_are_reported_to_event_emitter(temp_config: AppConfig, make_recording) -> None:
    make_recording("CS101", "20240115_Intro.webm")
    events: List[tuple[str, str, Any]] = []

    def _emitter(event_type: str, message: str, **kwargs: Any) -> None:
        events.append((event_type, message, kwargs["payload"]))

    index = LectureIndex(temp_config, event_emitter=_emitter)
    index.list_lectures("CS101")

    assert events
    event_type, message, payload = events[-1]
    assert event_type == "FILE_OP"
    assert message == "list_lectures"
    assert payload["count"] == 1
    assert payload["status"] == "ok"


def test_iter_course_lectures_pairs_courses_with_lectures(
    temp_config: AppConfig, make_recording
) -> None:
    make_recording("CS101", "20240115_Intro.webm")
    make_recording("MATH200", "20240116_Limits.webm")

    pairs = dict(LectureIndex(temp_config).iter_course_lectures())

    assert set(pairs) == {"CS101", "MATH200"}
    assert [lecture.title for lecture in pairs["MATH200"]] == ["Limits"]


def test_index_paths_delegate_to_resolver(temp_config: AppConfig, storage_root: Path) -> None:
    index = LectureIndex(temp_config)

    assert index.root == storage_root
    assert Path(index.ensure_course_dir("CS101")) == (storage_root / "CS101").absolute()
    assert Path(index.get_base_path()) == storage_root.absolute()
    assert index.list_courses() == ["CS101"]
