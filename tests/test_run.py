"""Tests for the run.py command line entrypoint."""

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest
from typer.testing import CliRunner

import run
from echo_recorder.config import DOCUMENTS_DIR_ENV


runner = CliRunner()


@pytest.fixture()
def documents(tmp_path: Path, monkeypatch) -> Path:
    documents_dir = tmp_path / "Documents"
    monkeypatch.setenv(DOCUMENTS_DIR_ENV, str(documents_dir))
    monkeypatch.setattr(run, "_prepare_logging", lambda storage_root: None)
    return documents_dir / "echo" / "Classes"


def _record(root: Path, course: str, name: str) -> Path:
    course_dir = root / course
    course_dir.mkdir(parents=True, exist_ok=True)
    target = course_dir / name
    target.write_bytes(b"webm")
    return target


def test_courses_reports_empty_storage_without_creating_it(documents: Path) -> None:
    result = runner.invoke(run.cli, ["courses"])

    assert result.exit_code == 0
    assert "No courses recorded yet." in result.output
    assert not documents.exists()


def test_base_path_and_ensure_course(documents: Path) -> None:
    result = runner.invoke(run.cli, ["base-path"])
    assert result.exit_code == 0
    assert Path(result.output.strip()) == documents.absolute()

    first = runner.invoke(run.cli, ["ensure-course", "CS101"])
    second = runner.invoke(run.cli, ["ensure-course", "CS101"])
    assert first.exit_code == 0
    assert second.exit_code == 0
    assert first.output == second.output
    assert (documents / "CS101").is_dir()


def test_lectures_json_output(documents: Path) -> None:
    _record(documents, "CS101", "20240115_Intro to Systems.webm")
    _record(documents, "CS101", "20240201_Memory.webm")

    result = runner.invoke(run.cli, ["lectures", "CS101", "--json"])

    assert result.exit_code == 0
    lectures = json.loads(result.output)
    assert [lecture["date"] for lecture in lectures] == ["20240201", "20240115"]
    assert lectures[1]["title"] == "Intro to Systems"


def test_on_date_and_dates_commands(documents: Path) -> None:
    _record(documents, "CS101", "20240115_Intro.webm")
    _record(documents, "MATH200", "20240115_Limits.webm")

    on_date = runner.invoke(run.cli, ["on-date", "20240115"])
    assert on_date.exit_code == 0
    assert "CS101 - Intro" in on_date.output
    assert "MATH200 - Limits" in on_date.output

    dates = runner.invoke(run.cli, ["dates", "--json"])
    assert dates.exit_code == 0
    assert json.loads(dates.output) == ["20240115"]


def test_on_date_without_matches(documents: Path) -> None:
    result = runner.invoke(run.cli, ["on-date", "19990101"])

    assert result.exit_code == 0
    assert "No lectures recorded on 19990101." in result.output


def test_storage_error_exits_with_failure(documents: Path) -> None:
    documents.mkdir(parents=True)
    (documents / "CS101").write_text("not a directory", encoding="utf-8")

    result = runner.invoke(run.cli, ["lectures", "CS101"])

    assert result.exit_code == 1


def test_overview_console_style(documents: Path) -> None:
    _record(documents, "CS101", "20240115_Intro.webm")

    result = runner.invoke(run.cli, ["overview", "--style", "console"])

    assert result.exit_code == 0
    assert "Course: CS101" in result.output
    assert "20240115  Intro" in result.output


def test_serve_wires_uvicorn(documents: Path, monkeypatch) -> None:
    captured = {}

    dummy_app = SimpleNamespace(state=SimpleNamespace())
    monkeypatch.setattr(run, "create_app", lambda index, config: dummy_app)

    class DummyConfig:
        def __init__(self, app, **kwargs):
            captured["app"] = app
            captured["config_kwargs"] = kwargs

    class DummyServer:
        def __init__(self, config):
            captured["server_instance"] = self

        def run(self):
            captured["server_run"] = True

    monkeypatch.setattr(run.uvicorn, "Config", DummyConfig)
    monkeypatch.setattr(run.uvicorn, "Server", DummyServer)

    run.serve(host="0.0.0.0", port=9000)

    assert captured["app"] is dummy_app
    assert captured["config_kwargs"]["port"] == 9000
    assert captured["server_run"] is True
    assert dummy_app.state.server is captured["server_instance"]
    assert documents.is_dir()
