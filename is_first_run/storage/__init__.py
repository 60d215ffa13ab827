"""Key-value storage backends for tracker state."""

from is_first_run.storage.base import KeyValueSource, KeyValueStore, Lookup, StoredValue
from is_first_run.storage.chain import ReadChain
from is_first_run.storage.legacy import LegacyPreferencesStore
from is_first_run.storage.memory import MemoryStore
from is_first_run.storage.sqlite import SQLiteStore

__all__ = [
    "KeyValueSource",
    "KeyValueStore",
    "LegacyPreferencesStore",
    "Lookup",
    "MemoryStore",
    "ReadChain",
    "SQLiteStore",
    "StoredValue",
]
