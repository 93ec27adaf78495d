"""Exceptions raised by object store clients."""

from __future__ import annotations


class StorageError(Exception):
    """Base class for object store failures."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ObjectNotFoundError(StorageError):
    """Raised when the requested object does not exist."""


class ObjectExistsError(StorageError):
    """Raised when a non-overwriting upload targets an existing object."""
