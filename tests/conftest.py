from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from echo_recorder.config import DOCUMENTS_DIR_ENV, AppConfig
from echo_recorder.services.paths import get_documents_path


@pytest.fixture()
def temp_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AppConfig:
    monkeypatch.delenv(DOCUMENTS_DIR_ENV, raising=False)
    monkeypatch.chdir(tmp_path)

    return AppConfig.from_mapping(
        {"documents_dir": str(tmp_path / "Documents")},
        environ={},
    )


@pytest.fixture()
def storage_root(temp_config: AppConfig) -> Path:
    return get_documents_path(temp_config)


@pytest.fixture()
def make_recording(storage_root: Path) -> Callable[..., Path]:
    def _make(course: str, name: str, contents: bytes = b"webm") -> Path:
        course_dir = storage_root / course
        course_dir.mkdir(parents=True, exist_ok=True)
        target = course_dir / name
        target.write_bytes(contents)
        return target

    return _make
