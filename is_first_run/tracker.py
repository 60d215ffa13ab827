"""First run detection over a persistent key-value store."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from is_first_run.storage.base import KeyValueSource, KeyValueStore
from is_first_run.storage.chain import ReadChain
from is_first_run.version import BuildVersionProvider

logger = logging.getLogger(__name__)

FIRST_RUN_KEY = "is_first_run"
FIRST_CALL_KEY = "is_first_call"
VERSION_KEY = "version"

# Build number recorded when no since-query has run yet
NO_BUILD = 0


def _check_build(build: int) -> None:
    if isinstance(build, bool) or not isinstance(build, int):
        raise TypeError(f"build must be an int, got {type(build).__name__}")


class FirstRunTracker:
    """Answers whether the app is running for the first time, overall or since a build.

    Every query marks its flag as consumed in the primary store. The ``*_run``
    queries are memoized on the instance, so they keep answering the same way
    for as long as this tracker lives; the ``*_call`` queries re-read the store
    every time and answer ``True`` only once.

    Construct one tracker per process and share it.
    """

    def __init__(
        self: FirstRunTracker,
        store: KeyValueStore,
        build_provider: BuildVersionProvider,
        fallbacks: Sequence[KeyValueSource] = (),
    ) -> None:
        """Initialize the tracker.

        Args:
            store: Primary store; all writes go here.
            build_provider: Supplies the build number of the running app.
            fallbacks: Older stores consulted, in order, when ``store`` lacks a key.
        """
        self.chain = ReadChain(store, fallbacks)
        self.build_provider = build_provider
        self._is_first_run: bool | None = None
        self._previous_build: int | None = None
        self._current_build: int | None = None

    async def _current(self) -> int:
        if self._current_build is None:
            self._current_build = await self.build_provider.current_build_number()
            logger.debug("Current build is %s", self._current_build)
        return self._current_build

    async def _read_bool(self, key: str) -> bool:
        return (await self.chain.read(key, bool)).value_or(True)

    async def _read_build(self) -> int:
        return (await self.chain.read(VERSION_KEY, int)).value_or(NO_BUILD)

    async def is_first_call(self) -> bool:
        """Return True only for the first call since installing the app (or a reset).

        Unlike :meth:`is_first_run`, the answer is not remembered: the next call
        returns False, even within the same process.
        """
        first_call = await self._read_bool(FIRST_CALL_KEY)
        await self.chain.write(FIRST_CALL_KEY, False)
        return first_call

    async def is_first_call_since(self, build: int) -> bool:
        """Return True for the first since-query after the app reached ``build``."""
        _check_build(build)
        current = await self._current()
        # Holds the previous build only if no since-query ran on this build yet
        last_build = await self._read_build()
        await self.chain.write(VERSION_KEY, current)
        return current >= build and last_build < build

    async def is_first_run(self) -> bool:
        """Return True for the whole process in which the app first asked.

        The first answer is kept for the lifetime of this tracker, so later
        calls in the same process agree with it. A new process gets False.
        """
        if self._is_first_run is not None:
            return self._is_first_run

        is_first_run = await self._read_bool(FIRST_RUN_KEY)
        await self.chain.write(FIRST_RUN_KEY, False)
        if self._is_first_run is None:
            self._is_first_run = is_first_run
        if is_first_run:
            logger.info("First run detected")
        return self._is_first_run

    async def is_first_run_since(self, build: int) -> bool:
        """Return True for the whole process in which the app first ran at or above ``build``."""
        _check_build(build)
        current = await self._current()
        # Read once: later since-queries overwrite the stored version
        if self._previous_build is None:
            self._previous_build = await self._read_build()
            await self.chain.write(VERSION_KEY, current)
        return current >= build and self._previous_build < build

    async def reset(self) -> None:
        """Restore the stored flags to their first-run state.

        The next :meth:`is_first_call` returns True. Answers already memoized
        by :meth:`is_first_run` and :meth:`is_first_run_since` are kept until
        the process restarts or :meth:`clear_cache` is called.
        """
        await asyncio.gather(
            self.chain.write(FIRST_RUN_KEY, True),
            self.chain.write(FIRST_CALL_KEY, True),
            self.chain.write(VERSION_KEY, NO_BUILD),
        )
        logger.info("First run state reset")

    def clear_cache(self) -> None:
        """Forget memoized answers so the next queries consult the store again."""
        self._is_first_run = None
        self._previous_build = None
        self._current_build = None
