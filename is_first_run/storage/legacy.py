"""
Read-only access to the legacy JSON preferences file.

Installations that predate the SQLite store kept their flags in a flat JSON
object, keyed with the ``flutter.`` prefix of the old preferences backend.
Nothing is ever written back to this file.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from is_first_run.errors import StorageReadError
from is_first_run.storage.base import Lookup

logger = logging.getLogger(__name__)

LEGACY_KEY_PREFIX = "flutter."


class LegacyPreferencesStore:
    """Handles reading the legacy preferences file."""

    name = "legacy-preferences"

    def __init__(
        self: LegacyPreferencesStore,
        path: Path,
        key_prefix: str = LEGACY_KEY_PREFIX,
    ) -> None:
        self.path = path
        self.key_prefix = key_prefix
        self._data: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        """Loads the JSON preferences, raising ``StorageReadError`` if unusable."""
        if self._data is not None:
            return self._data
        if not self.path.exists():
            return {}

        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # ValueError covers bad JSON as well as bytes that are not UTF-8
            raise StorageReadError("*", f"cannot read {self.path}: {e}", backend=self.name) from e
        if not isinstance(data, dict):
            raise StorageReadError(
                "*", f"{self.path} does not hold a JSON object", backend=self.name
            )

        self._data = data
        return data

    def _candidate_keys(self, key: str) -> list[str]:
        if self.key_prefix:
            return [f"{self.key_prefix}{key}", key]
        return [key]

    def _get(self, key: str) -> Lookup:
        try:
            data = self._load()
        except StorageReadError as e:
            logger.debug("Legacy preferences unavailable: %s", e)
            return Lookup.failure(StorageReadError(key, e.message, backend=self.name))

        for candidate in self._candidate_keys(key):
            if candidate in data:
                value = data[candidate]
                if value is None:
                    return Lookup.failure(
                        StorageReadError(key, "stored value is null", backend=self.name)
                    )
                return Lookup.hit(key, value)
        return Lookup.miss(key)

    async def get(self, key: str) -> Lookup:
        return await asyncio.to_thread(self._get, key)

    def reload(self) -> None:
        """Forget the cached file contents so the next read hits the disk."""
        self._data = None
