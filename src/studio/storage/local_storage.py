"""Filesystem-backed object store for local development."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence
from urllib.parse import quote

from .storage_client import DownloadedObject, StoredObject
from .storage_errors import ObjectExistsError, ObjectNotFoundError, StorageError


@dataclass(slots=True)
class LocalStorage:
    """Mirror the bucket API on top of ``root / bucket``.

    Object timestamps come from file modification time.
    """

    root: Path
    bucket: str
    public_base_url: str = "/media"

    @property
    def bucket_dir(self) -> Path:
        return self.root / self.bucket

    def resolve(self, path: str) -> Path:
        base = self.bucket_dir.resolve()
        target = (base / path.lstrip("/")).resolve()
        if target != base and base not in target.parents:
            raise StorageError(f"path escapes bucket: {path}", status_code=400)
        return target

    async def upload(
        self,
        path: str,
        data: bytes,
        *,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        target = self.resolve(path)
        if target.exists() and not upsert:
            raise ObjectExistsError(f"upload of {path} failed: The resource already exists", status_code=409)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"upload of {path} failed: {exc}") from exc
        return path

    async def download(self, path: str) -> DownloadedObject:
        target = self.resolve(path)
        if not target.is_file():
            raise ObjectNotFoundError(f"download of {path} failed: Object not found", status_code=404)
        try:
            data = target.read_bytes()
        except OSError as exc:
            raise StorageError(f"download of {path} failed: {exc}") from exc
        content_type, _ = mimetypes.guess_type(target.name)
        return DownloadedObject(data=data, content_type=content_type)

    async def remove(self, paths: Sequence[str]) -> list[str]:
        removed: list[str] = []
        for path in paths:
            target = self.resolve(path)
            if not target.is_file():
                continue
            try:
                target.unlink()
            except OSError as exc:
                raise StorageError(f"remove of {path} failed: {exc}") from exc
            removed.append(path)
        return removed

    async def list(
        self,
        prefix: str,
        *,
        limit: int = 100,
        offset: int = 0,
        sort_by: str = "created_at",
        descending: bool = False,
    ) -> list[StoredObject]:
        directory = self.resolve(prefix)
        if not directory.exists():
            return []
        if not directory.is_dir():
            raise StorageError(f"list of {prefix} failed: not a folder", status_code=400)

        entries: list[StoredObject] = []
        for child in directory.iterdir():
            if child.is_dir():
                entries.append(StoredObject(name=child.name, created_at=None))
                continue
            stat = child.stat()
            content_type, _ = mimetypes.guess_type(child.name)
            entries.append(
                StoredObject(
                    name=child.name,
                    created_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                    content_type=content_type,
                    size_bytes=stat.st_size,
                )
            )

        if sort_by == "name":
            entries.sort(key=lambda item: item.name, reverse=descending)
        else:
            floor = datetime.min.replace(tzinfo=timezone.utc)
            entries.sort(key=lambda item: (item.created_at or floor, item.name), reverse=descending)
        return entries[offset : offset + limit]

    def get_public_url(self, path: str) -> str:
        base = self.public_base_url.rstrip("/")
        return f"{base}/{quote(self.bucket, safe='')}/{quote(path.lstrip('/'), safe='/')}"
