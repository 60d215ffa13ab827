"""Tracker construction from configuration."""

from __future__ import annotations

import logging

from is_first_run.config import TrackerConfig, get_config
from is_first_run.errors import ConfigurationError
from is_first_run.storage.base import KeyValueSource
from is_first_run.storage.legacy import LegacyPreferencesStore
from is_first_run.storage.sqlite import SQLiteStore
from is_first_run.tracker import FirstRunTracker
from is_first_run.version import (
    BuildVersionProvider,
    MetadataBuildProvider,
    StaticBuildProvider,
)

logger = logging.getLogger(__name__)


def build_provider_from_config(config: TrackerConfig) -> BuildVersionProvider:
    """Pick the build number source: explicit number, then distribution metadata."""
    if config.distribution:
        return MetadataBuildProvider(config.distribution, override=config.build_number)
    if config.build_number is not None:
        return StaticBuildProvider(config.build_number)

    logger.warning(
        "Neither a build number nor a distribution is configured; "
        "since-queries will see build 0"
    )
    return StaticBuildProvider(0)


def create_tracker(
    config: TrackerConfig | None = None,
    build_provider: BuildVersionProvider | None = None,
) -> FirstRunTracker:
    """Create a tracker over the configured SQLite store and legacy preferences.

    Call this once at application startup and share the result.
    """
    config = config or get_config()

    database_path = config.database_path
    if database_path.is_dir():
        raise ConfigurationError(f"Database path is a directory: {database_path}")

    store = SQLiteStore(database_path)
    logger.debug("Using tracker database at %s", database_path)

    fallbacks: list[KeyValueSource] = []
    if config.legacy_enabled:
        fallbacks.append(
            LegacyPreferencesStore(
                config.legacy_preferences_path,
                key_prefix=config.legacy_key_prefix,
            )
        )

    return FirstRunTracker(
        store,
        build_provider or build_provider_from_config(config),
        fallbacks=fallbacks,
    )
