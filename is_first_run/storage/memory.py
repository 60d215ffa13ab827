"""In-process key-value store for tests and hosts without a data directory."""

from __future__ import annotations

from is_first_run.storage.base import Lookup, StoredValue


class MemoryStore:
    """Dictionary-backed store; contents live as long as the instance."""

    name = "memory"

    def __init__(self: MemoryStore, initial: dict[str, StoredValue] | None = None) -> None:
        self.data: dict[str, StoredValue] = dict(initial or {})

    async def get(self, key: str) -> Lookup:
        if key not in self.data:
            return Lookup.miss(key)
        return Lookup.hit(key, self.data[key])

    async def put(self, key: str, value: StoredValue) -> None:
        self.data[key] = value
