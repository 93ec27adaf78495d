"""Temporary media storage for rich-text editor uploads."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

import structlog

from ..storage.storage_client import ObjectStore
from ..storage.storage_errors import StorageError
from .media_errors import UploadError, ValidationError
from .media_helpers import DEFAULT_CONTENT_TYPE, decode_data_url, sanitize_file_name
from .media_models import TempBlob

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class TempUploadHandler:
    """Stage inline images under the temp prefix until their article is saved."""

    store: ObjectStore
    temp_prefix: str = "temp"
    default_content_type: str = DEFAULT_CONTENT_TYPE
    max_upload_bytes: int | None = None

    def temp_path(self, file_name: str) -> str:
        return f"{self.temp_prefix.strip('/')}/{sanitize_file_name(file_name)}"

    async def upload(self, file: str | None, file_name: str | None) -> TempBlob:
        """Write the decoded payload to ``temp/<file_name>``.

        Existing objects are never overwritten; callers pick unique names.
        """
        if not file or not file_name:
            raise ValidationError("File and fileName are required")

        payload = decode_data_url(
            file,
            default_content_type=self.default_content_type,
            max_bytes=self.max_upload_bytes,
        )
        path = self.temp_path(file_name)

        try:
            await self.store.upload(path, payload.data, content_type=payload.content_type, upsert=False)
        except StorageError as exc:
            logger.error("media.temp.upload_failed", path=path, error=exc.message)
            raise UploadError(exc.message) from exc

        blob = TempBlob(
            path=path,
            public_url=self.store.get_public_url(path),
            content_type=payload.content_type,
            created_at=datetime.now(timezone.utc),
        )
        logger.info(
            "media.temp.uploaded",
            path=path,
            size_bytes=len(payload.data),
            content_type=payload.content_type,
        )
        return blob
