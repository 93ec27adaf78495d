"""Direct image uploads with cleanup of the replaced file."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from ..storage.storage_client import ObjectStore
from ..storage.storage_errors import ObjectNotFoundError, StorageError
from .media_errors import UploadError, ValidationError
from .media_helpers import DEFAULT_CONTENT_TYPE, decode_data_url, sanitize_object_path
from .media_models import StoredImage

logger = structlog.get_logger(__name__)


@dataclass(slots=True)
class ImageUploadHandler:
    store: ObjectStore
    default_content_type: str = DEFAULT_CONTENT_TYPE
    max_upload_bytes: int | None = None

    async def upload(
        self,
        file: str | None,
        file_name: str | None,
        *,
        replaces: str | None = None,
    ) -> StoredImage:
        """Store an image at ``file_name``; drop ``replaces`` once the new file is in place."""
        if not file or not file_name:
            raise ValidationError("File and fileName are required")

        payload = decode_data_url(
            file,
            default_content_type=self.default_content_type,
            max_bytes=self.max_upload_bytes,
        )
        path = sanitize_object_path(file_name)
        try:
            await self.store.upload(path, payload.data, content_type=payload.content_type, upsert=False)
        except StorageError as exc:
            logger.error("media.upload.failed", path=path, error=exc.message)
            raise UploadError(exc.message) from exc

        if replaces:
            await self._remove_replaced(replaces, path)

        return StoredImage(path=path, public_url=self.store.get_public_url(path))

    async def _remove_replaced(self, old_path: str, new_path: str) -> None:
        try:
            previous = sanitize_object_path(old_path)
        except ValidationError:
            logger.warning("media.upload.invalid_replaced_path", path=old_path)
            return
        if previous == new_path:
            return
        try:
            await self.store.remove([previous])
        except ObjectNotFoundError:
            return
        except StorageError as exc:
            logger.warning("media.upload.replace_cleanup_failed", path=previous, error=exc.message)
            return
        logger.info("media.upload.replaced", old_path=previous, path=new_path)
