"""Object store collaborator interface."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, Sequence


@dataclass(slots=True)
class StoredObject:
    """Listing entry relative to the listed prefix.

    ``created_at`` is ``None`` for folder placeholders, which carry no
    timestamp in bucket listings.
    """

    name: str
    created_at: datetime | None
    content_type: str | None = None
    size_bytes: int | None = None


@dataclass(slots=True)
class DownloadedObject:
    data: bytes
    content_type: str | None = None


class ObjectStore(Protocol):
    """Minimal bucket API consumed by media services.

    Implementations raise :class:`~.storage_errors.StorageError` on failure.
    """

    async def upload(
        self,
        path: str,
        data: bytes,
        *,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        """Store ``data`` under ``path`` and return the stored path."""

    async def download(self, path: str) -> DownloadedObject:
        ...

    async def remove(self, paths: Sequence[str]) -> list[str]:
        """Delete ``paths`` and return those actually removed."""

    async def list(
        self,
        prefix: str,
        *,
        limit: int = 100,
        offset: int = 0,
        sort_by: str = "created_at",
        descending: bool = False,
    ) -> list[StoredObject]:
        ...

    def get_public_url(self, path: str) -> str:
        ...
