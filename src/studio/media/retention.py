"""Age-based reclamation of staged editor images."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import structlog

from ..storage.storage_client import ObjectStore, StoredObject
from ..storage.storage_errors import StorageError
from .content_scanner import DEFAULT_TEMP_PREFIX
from .media_errors import SweepError
from .media_models import SweepFailure, SweepResult

logger = structlog.get_logger(__name__)

DEFAULT_RETENTION = timedelta(days=14)


def _default_clock() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class RetentionSweeper:
    """Delete temp blobs older than ``retention``.

    Whether a blob is still referenced by an unsaved draft is not checked: a
    draft older than the retention window loses its inline images.
    """

    store: ObjectStore
    temp_prefix: str = DEFAULT_TEMP_PREFIX
    retention: timedelta = DEFAULT_RETENTION
    page_size: int = 1000

    def cutoff(self, now: datetime) -> datetime:
        return now - self.retention

    async def list_temp_objects(self) -> list[StoredObject]:
        """Collect the whole temp listing before anything is deleted."""
        prefix = self.temp_prefix.strip("/")
        objects: list[StoredObject] = []
        limit = max(1, self.page_size)
        offset = 0
        while True:
            try:
                page = await self.store.list(
                    prefix,
                    limit=limit,
                    offset=offset,
                    sort_by="created_at",
                )
            except StorageError as exc:
                logger.error("media.sweep.list_failed", prefix=prefix, error=exc.message)
                raise SweepError(exc.message) from exc
            objects.extend(page)
            if len(page) < limit:
                return objects
            offset += len(page)

    def is_expired(self, item: StoredObject, cutoff: datetime) -> bool:
        if item.created_at is None:
            return False
        created_at = item.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return created_at < cutoff

    def _temp_path(self, name: str) -> str | None:
        prefix = self.temp_prefix.strip("/")
        if not name or "/" in name or name in {".", ".."}:
            return None
        return f"{prefix}/{name}"

    async def sweep(self, now: datetime | None = None, *, dry_run: bool = False) -> SweepResult:
        """Remove expired temp blobs; per-file delete failures do not stop the sweep."""
        current = now or _default_clock()
        if current.tzinfo is None:
            current = current.replace(tzinfo=timezone.utc)
        cutoff = self.cutoff(current)

        objects = await self.list_temp_objects()
        result = SweepResult(scanned=len(objects), dry_run=dry_run)

        for item in objects:
            if not self.is_expired(item, cutoff):
                continue
            path = self._temp_path(item.name)
            if path is None:
                continue
            result.candidates.append(item.name)
            if dry_run:
                continue
            try:
                await self.store.remove([path])
            except StorageError as exc:
                logger.warning("media.sweep.delete_failed", path=path, error=exc.message)
                result.errors.append(SweepFailure(file_name=item.name, error=exc.message))
                continue
            result.deleted_files.append(item.name)
            logger.info("media.sweep.deleted", path=path)

        logger.info(
            "media.sweep.completed",
            scanned=result.scanned,
            deleted=result.deleted_count,
            errors=len(result.errors),
            dry_run=dry_run,
        )
        return result
