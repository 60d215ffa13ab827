"""Pytest configuration for the test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from is_first_run.storage.legacy import LegacyPreferencesStore
from is_first_run.storage.sqlite import SQLiteStore
from is_first_run.tracker import FirstRunTracker
from is_first_run.version import StaticBuildProvider


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a not-yet-created tracker database."""
    return tmp_path / "data" / "is_first_run.db"


@pytest.fixture
def sqlite_store(db_path: Path):
    """Return a SQLiteStore over a fresh database."""
    store = SQLiteStore(db_path)
    yield store
    store.dispose()


@pytest.fixture
def legacy_path(tmp_path: Path) -> Path:
    return tmp_path / "shared_preferences.json"


@pytest.fixture
def write_legacy(legacy_path: Path) -> Callable[[dict], LegacyPreferencesStore]:
    """Write legacy preferences and return a store reading them."""

    def _write(data: dict) -> LegacyPreferencesStore:
        legacy_path.write_text(json.dumps(data))
        return LegacyPreferencesStore(legacy_path)

    return _write


@pytest.fixture
def make_tracker(sqlite_store: SQLiteStore) -> Callable[..., FirstRunTracker]:
    """Build trackers sharing one store; each new tracker stands for a new process."""

    def _make(build: int = 10, fallbacks=()) -> FirstRunTracker:
        return FirstRunTracker(sqlite_store, StaticBuildProvider(build), fallbacks=fallbacks)

    return _make
