"""Key-value storage contracts and the read result type."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeVar, runtime_checkable

from is_first_run.errors import StorageReadError

StoredValue = bool | int | str

T = TypeVar("T", bool, int, str)


@dataclass(frozen=True)
class Lookup:
    """Outcome of reading a single key: found, missing, or failed."""

    key: str
    value: StoredValue | None = None
    found: bool = False
    error: StorageReadError | None = None

    @classmethod
    def hit(cls, key: str, value: StoredValue) -> Lookup:
        return cls(key=key, value=value, found=True)

    @classmethod
    def miss(cls, key: str) -> Lookup:
        return cls(key=key)

    @classmethod
    def failure(cls, error: StorageReadError) -> Lookup:
        return cls(key=error.key, error=error)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def expect(self, kind: type[T]) -> Lookup:
        """Turn a found value of the wrong type into a failed lookup.

        ``bool`` is a subclass of ``int``, so a boolean never satisfies ``int``.
        """
        if not self.found:
            return self
        value = self.value
        matches = isinstance(value, kind) and not (
            kind is not bool and isinstance(value, bool)
        )
        if matches:
            return self
        return Lookup.failure(
            StorageReadError(
                self.key,
                f"expected {kind.__name__}, found {type(value).__name__}",
            )
        )

    def value_or(self, default: T) -> T:
        """Return the found value, or ``default`` when missing or failed."""
        if self.found and not self.failed:
            return self.value  # type: ignore[return-value]
        return default


@runtime_checkable
class KeyValueSource(Protocol):
    """Anything that can answer reads for a key."""

    name: str

    async def get(self, key: str) -> Lookup:
        """Read ``key``; never raises for backend or decoding problems."""
        ...


@runtime_checkable
class KeyValueStore(KeyValueSource, Protocol):
    """A source that also accepts writes."""

    async def put(self, key: str, value: StoredValue) -> None:
        """Persist ``value`` under ``key``, raising ``StorageWriteError`` on failure."""
        ...
