"""Ordered read sources with a single write target."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from is_first_run.storage.base import T, KeyValueSource, KeyValueStore, Lookup, StoredValue

logger = logging.getLogger(__name__)


class ReadChain:
    """Reads from the primary store, then each fallback in order.

    Writes always target the primary store; fallbacks are never written to.
    A failed read (backend error, corrupt payload or wrong type) counts as
    absent, so the next source gets its turn.
    """

    def __init__(
        self: ReadChain,
        primary: KeyValueStore,
        fallbacks: Sequence[KeyValueSource] = (),
    ) -> None:
        self.primary = primary
        self.fallbacks = tuple(fallbacks)

    @property
    def sources(self) -> tuple[KeyValueSource, ...]:
        return (self.primary, *self.fallbacks)

    async def read(self, key: str, kind: type[T]) -> Lookup:
        """Return the first usable value for ``key``, else the last miss or failure."""
        result = Lookup.miss(key)
        for source in self.sources:
            lookup = (await source.get(key)).expect(kind)
            if lookup.found and not lookup.failed:
                if source is not self.primary:
                    logger.debug("Read %s from fallback source %s", key, source.name)
                return lookup
            if lookup.failed:
                logger.debug("Ignoring unreadable %s in %s: %s", key, source.name, lookup.error)
            result = lookup
        return result

    async def write(self, key: str, value: StoredValue) -> None:
        await self.primary.put(key, value)
