"""Exception classes for first run detection."""

from __future__ import annotations


class FirstRunError(Exception):
    """Base exception for all first run tracker errors."""


class ConfigurationError(FirstRunError):
    """Raised when configuration is invalid or missing."""


class StorageError(FirstRunError):
    """Base exception for key-value storage errors."""

    def __init__(
        self: StorageError,
        key: str,
        message: str,
        backend: str | None = None,
    ) -> None:
        self.key = key
        self.message = message
        self.backend = backend
        prefix = f"{backend}: " if backend else ""
        super().__init__(f"{prefix}{message} (key '{key}')")


class StorageReadError(StorageError):
    """Raised when a stored value cannot be read or has an unexpected type."""


class StorageWriteError(StorageError):
    """Raised when a value cannot be persisted."""


class BuildNumberParseError(FirstRunError):
    """Raised when a version string carries no usable build number."""

    def __init__(self: BuildNumberParseError, text: str) -> None:
        self.text = text
        super().__init__(f"No build number in version string: {text!r}")
