"""Configuration loading utilities for the Echo lecture recorder."""

from __future__ import annotations

import contextlib
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


LOGGER = logging.getLogger(__name__)


DOCUMENTS_DIR_ENV = "ECHO_DOCUMENTS_DIR"

DEFAULT_CONFIG: Dict[str, Any] = {
    "app_dir": "echo",
    "classes_dir": "Classes",
    "media_extension": "webm",
    "separator": "_",
    "metadata_extension": "json",
    "documents_dir": None,
}

_PERMISSION_SENTINEL = ".echo_write_check"


class ConfigError(ValueError):
    """Raised when the configuration file contains unusable values."""


def _ensure_writable_directory(path: Path) -> bool:
    """Return ``True`` if *path* can be created and written to."""

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        return False

    test_file = path / _PERMISSION_SENTINEL
    try:
        with test_file.open("w", encoding="utf-8") as handle:
            handle.write("ok")
    except OSError:
        return False
    finally:
        with contextlib.suppress(OSError):
            test_file.unlink()

    return True


def _normalize_extension(value: Any) -> str:
    extension = str(value or "").strip().lstrip(".")
    if not extension:
        raise ConfigError("media_extension must not be empty")
    return extension


@dataclass(frozen=True)
class AppConfig:
    """Naming conventions and locations used to index recordings on disk.

    ``documents_dir`` only records an explicit override. The platform
    documents folder itself is resolved on every lookup by
    :func:`echo_recorder.services.paths.get_documents_path`.
    """

    app_dir: str = "echo"
    classes_dir: str = "Classes"
    media_extension: str = "webm"
    separator: str = "_"
    metadata_extension: str = "json"
    documents_dir: Optional[Path] = None

    @property
    def media_suffix(self) -> str:
        return f".{self.media_extension}"

    @property
    def metadata_suffix(self) -> str:
        return f".{self.metadata_extension}"

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "AppConfig":
        merged: Dict[str, Any] = {**DEFAULT_CONFIG, **dict(mapping)}
        environ = os.environ if environ is None else environ

        separator = str(merged["separator"])
        if len(separator) != 1:
            raise ConfigError(
                f"separator must be a single character (got {separator!r})"
            )

        documents_dir: Optional[Path] = None
        override = (environ.get(DOCUMENTS_DIR_ENV) or "").strip()
        if override:
            LOGGER.debug("Using documents directory from %s: %s", DOCUMENTS_DIR_ENV, override)
            documents_dir = Path(override).expanduser()
        elif merged.get("documents_dir"):
            documents_dir = Path(str(merged["documents_dir"])).expanduser()

        return cls(
            app_dir=str(merged["app_dir"]),
            classes_dir=str(merged["classes_dir"]),
            media_extension=_normalize_extension(merged["media_extension"]),
            separator=separator,
            metadata_extension=_normalize_extension(merged["metadata_extension"]),
            documents_dir=documents_dir,
        )


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load the application configuration from ``config/default.json`` by default.

    When no explicit path is given and the bundled file is missing, the
    built-in :data:`DEFAULT_CONFIG` is used instead.
    """

    if config_path is None:
        base_path = Path(__file__).resolve().parent.parent
        config_path = base_path / "config" / "default.json"
        if not config_path.exists():
            LOGGER.debug("No configuration file at %s; using defaults", config_path)
            return AppConfig.from_mapping({})

    with config_path.open("r", encoding="utf-8") as config_file:
        try:
            raw_config = json.load(config_file)
        except json.JSONDecodeError as error:
            raise ConfigError(f"Invalid configuration file '{config_path}': {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Configuration file '{config_path}' must contain a JSON object")

    return AppConfig.from_mapping(raw_config)


__all__ = ["AppConfig", "ConfigError", "DEFAULT_CONFIG", "DOCUMENTS_DIR_ENV", "load_config"]
