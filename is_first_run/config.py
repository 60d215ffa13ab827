"""Centralized configuration management for the first run tracker."""

from __future__ import annotations

import logging
from functools import cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from is_first_run.shared.path import get_user_data_dir

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "is-first-run"


class TrackerConfig(BaseSettings):
    """Where tracker state lives and how the current build is determined."""

    # Storage locations
    app_name: str = DEFAULT_APP_NAME
    data_dir: Path | None = None
    database_name: str = "is_first_run.db"

    # Legacy preferences fallback
    legacy_enabled: bool = True
    legacy_preferences_name: str = "shared_preferences.json"
    legacy_key_prefix: str = "flutter."

    # Build number resolution
    distribution: str | None = None
    build_number: int | None = Field(None, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="IS_FIRST_RUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("database_name", "legacy_preferences_name")
    @classmethod
    def _plain_file_name(cls, value: str) -> str:
        if not value or Path(value).name != value:
            raise ValueError(f"must be a plain file name, got {value!r}")
        return value

    @property
    def storage_dir(self) -> Path:
        """Directory holding the database and the legacy preferences file."""
        if self.data_dir is not None:
            return self.data_dir
        return get_user_data_dir(self.app_name)

    @property
    def database_path(self) -> Path:
        return self.storage_dir / self.database_name

    @property
    def legacy_preferences_path(self) -> Path:
        return self.storage_dir / self.legacy_preferences_name


@cache
def get_config() -> TrackerConfig:
    """Get the default configuration, read once from the environment."""
    config = TrackerConfig()
    logger.debug("Loaded tracker configuration: storage_dir=%s", config.storage_dir)
    return config
