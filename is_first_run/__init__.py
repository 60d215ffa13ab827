"""Detect the first run of an application, overall or since a given build."""

from is_first_run.config import TrackerConfig, get_config
from is_first_run.errors import (
    BuildNumberParseError,
    ConfigurationError,
    FirstRunError,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from is_first_run.startup import create_tracker
from is_first_run.storage import (
    KeyValueSource,
    KeyValueStore,
    LegacyPreferencesStore,
    Lookup,
    MemoryStore,
    ReadChain,
    SQLiteStore,
)
from is_first_run.tracker import FirstRunTracker
from is_first_run.version import (
    BuildVersionProvider,
    MetadataBuildProvider,
    StaticBuildProvider,
    parse_build_number,
)

__all__ = [
    "BuildNumberParseError",
    "BuildVersionProvider",
    "ConfigurationError",
    "FirstRunError",
    "FirstRunTracker",
    "KeyValueSource",
    "KeyValueStore",
    "LegacyPreferencesStore",
    "Lookup",
    "MemoryStore",
    "MetadataBuildProvider",
    "ReadChain",
    "SQLiteStore",
    "StaticBuildProvider",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "TrackerConfig",
    "create_tracker",
    "get_config",
    "parse_build_number",
]
