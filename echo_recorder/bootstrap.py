"""Bootstrap logic that prepares the recordings directory."""

from __future__ import annotations

import logging
from pathlib import Path

from . import config as config_module
from .config import AppConfig, load_config
from .services.paths import get_documents_path

LOGGER = logging.getLogger(__name__)


class BootstrapError(RuntimeError):
    """Raised when initialization cannot be completed."""


class Bootstrapper:
    """High level object orchestrating initialization steps."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config

    @property
    def config(self) -> AppConfig:
        return self._config

    def initialize(self) -> Path:
        """Create the storage root and verify that recordings can be written to it."""

        LOGGER.debug("Starting bootstrap sequence")
        storage_root = get_documents_path(self._config)
        if not config_module._ensure_writable_directory(storage_root):
            raise BootstrapError(
                f"Unable to prepare storage directory '{storage_root}'. It is not writable. "
                f"Set {config_module.DOCUMENTS_DIR_ENV} or adjust permissions."
            )
        LOGGER.debug("Ensured storage directory exists: %s", storage_root)
        LOGGER.info("Bootstrap completed successfully")
        return storage_root


def initialize_app(config_path: Path | None = None) -> AppConfig:
    """Convenience helper that loads configuration and runs initialization."""

    config = load_config(config_path=config_path)
    Bootstrapper(config).initialize()
    return config


__all__ = ["BootstrapError", "Bootstrapper", "initialize_app"]
