"""
Build number providers.

The tracker compares integer build numbers. A version string either is the
build number (``"27"``) or carries it after a ``+`` (``"1.4.0+27"``).
"""

from __future__ import annotations

import asyncio
import logging
import re
from importlib import metadata
from typing import Protocol, runtime_checkable

from is_first_run.errors import BuildNumberParseError

logger = logging.getLogger(__name__)

_BUILD_RE = re.compile(r"\d+")


def parse_build_number(text: str) -> int:
    """Extract the integer build number from a version string."""
    candidate = text.strip()
    if "+" in candidate:
        candidate = candidate.split("+", 1)[1]
    if not _BUILD_RE.fullmatch(candidate):
        raise BuildNumberParseError(text)
    return int(candidate)


@runtime_checkable
class BuildVersionProvider(Protocol):
    async def current_build_number(self) -> int: ...


class StaticBuildProvider:
    """Returns a build number known up front."""

    def __init__(self: StaticBuildProvider, build: int) -> None:
        self.build = build

    async def current_build_number(self) -> int:
        return self.build


class MetadataBuildProvider:
    """Reads the build number from an installed distribution's version."""

    def __init__(
        self: MetadataBuildProvider,
        distribution: str,
        override: int | None = None,
    ) -> None:
        self.distribution = distribution
        self.override = override

    async def current_build_number(self) -> int:
        if self.override is not None:
            return self.override

        try:
            version = await asyncio.to_thread(metadata.version, self.distribution)
        except metadata.PackageNotFoundError:
            logger.warning(
                "Distribution %r is not installed, using build 0", self.distribution
            )
            return 0

        try:
            return parse_build_number(version)
        except BuildNumberParseError as e:
            logger.warning("%s, using build 0", e)
            return 0
