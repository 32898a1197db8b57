from pathlib import Path

import pytest

from echo_recorder.config import DOCUMENTS_DIR_ENV, AppConfig, ConfigError, load_config


def test_from_mapping_applies_defaults() -> None:
    config = AppConfig.from_mapping({}, environ={})

    assert config.app_dir == "echo"
    assert config.classes_dir == "Classes"
    assert config.media_extension == "webm"
    assert config.media_suffix == ".webm"
    assert config.separator == "_"
    assert config.documents_dir is None


def test_media_extension_is_stored_without_leading_dot() -> None:
    config = AppConfig.from_mapping({"media_extension": ".ogg"}, environ={})

    assert config.media_extension == "ogg"
    assert config.media_suffix == ".ogg"


@pytest.mark.parametrize("separator", ["", "__", "-_"])
def test_separator_must_be_single_character(separator: str) -> None:
    with pytest.raises(ConfigError):
        AppConfig.from_mapping({"separator": separator}, environ={})


def test_empty_media_extension_is_rejected() -> None:
    with pytest.raises(ConfigError):
        AppConfig.from_mapping({"media_extension": ""}, environ={})


def test_environment_override_wins_over_file(tmp_path: Path) -> None:
    config = AppConfig.from_mapping(
        {"documents_dir": str(tmp_path / "from-file")},
        environ={DOCUMENTS_DIR_ENV: str(tmp_path / "from-env")},
    )

    assert config.documents_dir == tmp_path / "from-env"


def test_load_config_reads_json_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv(DOCUMENTS_DIR_ENV, raising=False)
    config_file = tmp_path / "custom.json"
    config_file.write_text(
        '{"app_dir": "echo-dev", "media_extension": "ogg", "documents_dir": "%s"}'
        % (tmp_path / "docs").as_posix(),
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.app_dir == "echo-dev"
    assert config.media_extension == "ogg"
    assert config.classes_dir == "Classes"
    assert config.documents_dir == tmp_path / "docs"


def test_load_config_uses_bundled_defaults(monkeypatch) -> None:
    monkeypatch.delenv(DOCUMENTS_DIR_ENV, raising=False)

    config = load_config()

    assert config.app_dir == "echo"
    assert config.media_extension == "webm"


def test_load_config_rejects_invalid_json(tmp_path: Path) -> None:
    config_file = tmp_path / "broken.json"
    config_file.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(config_file)
