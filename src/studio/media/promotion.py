"""Promotion of staged editor images into entity-scoped storage."""

from __future__ import annotations

import re
from dataclasses import dataclass

import structlog

from ..storage.storage_client import ObjectStore
from ..storage.storage_errors import StorageError
from .content_scanner import DEFAULT_TEMP_PREFIX, scan_temp_references
from .media_errors import DownloadError, UploadError, ValidationError
from .media_helpers import DEFAULT_CONTENT_TYPE
from .media_models import ContentReference, MovedImage, PromotionFailure, PromotionResult

logger = structlog.get_logger(__name__)


# A variant must not be glued to surrounding URL characters. A trailing dot
# blocks a match only when more URL text follows it.
_URL_CHAR = r"[\w.~%/-]"
_URL_TAIL = r"[\w~%/-]|\.\w"


def _variant_pattern(variant: str) -> re.Pattern[str]:
    return re.compile(rf"(?<!{_URL_CHAR}){re.escape(variant)}(?!{_URL_TAIL})")


def replace_url_variants(content: str, reference: ContentReference, new_url: str) -> str:
    """Replace every textual form of ``reference`` with ``new_url``.

    Variants are escaped before matching, so URL characters are taken
    literally. A host-stripped variant never matches inside a longer URL.
    """
    updated = content
    for variant in reference.variants():
        if variant in updated:
            updated = _variant_pattern(variant).sub(lambda _match: new_url, updated)
    return updated


@dataclass(slots=True)
class PromotionEngine:
    """Move temp images referenced by saved content under ``<collection>/<entity_id>/``."""

    store: ObjectStore
    collection: str = "journals"
    temp_prefix: str = DEFAULT_TEMP_PREFIX
    default_content_type: str = DEFAULT_CONTENT_TYPE

    def permanent_path(self, entity_id: str, file_name: str) -> str:
        return f"{self.collection.strip('/')}/{entity_id}/{file_name}"

    async def promote(self, content: str | None, entity_id: str | int | None) -> PromotionResult:
        """Migrate referenced temp images and rewrite ``content``.

        Per-image failures are collected in ``PromotionResult.errors`` and
        leave that image's URL untouched.
        """
        entity = str(entity_id).strip() if entity_id is not None else ""
        if not content or not entity:
            raise ValidationError("Content and journalId are required")
        if "/" in entity or entity in {".", ".."}:
            raise ValidationError("journalId is not a valid identifier")

        references = scan_temp_references(content, self.temp_prefix)
        result = PromotionResult(updated_content=content)
        if not references:
            return result

        # Several URL spellings may point at one temp blob; each blob is tried once.
        promoted_urls: dict[str, str] = {}
        failed_paths: set[str] = set()
        for reference in references:
            if reference.temp_path in failed_paths:
                continue
            known_url = promoted_urls.get(reference.temp_path)
            if known_url is not None:
                result.updated_content = replace_url_variants(result.updated_content, reference, known_url)
                continue
            try:
                moved = await self._move(reference, entity)
            except (DownloadError, UploadError) as exc:
                logger.error(
                    "media.promotion.failed",
                    path=reference.temp_path,
                    entity_id=entity,
                    error=str(exc),
                )
                failed_paths.add(reference.temp_path)
                result.errors.append(PromotionFailure(source_path=reference.temp_path, error=str(exc)))
                continue

            result.updated_content = replace_url_variants(result.updated_content, reference, moved.public_url)
            promoted_urls[reference.temp_path] = moved.public_url
            await self._discard_temp(reference.temp_path)
            result.moved_images.append(moved)
            logger.info(
                "media.promotion.moved",
                source=moved.source_path,
                destination=moved.destination_path,
                entity_id=entity,
            )
        return result

    async def _move(self, reference: ContentReference, entity_id: str) -> MovedImage:
        try:
            blob = await self.store.download(reference.temp_path)
        except StorageError as exc:
            raise DownloadError(exc.message) from exc

        destination = self.permanent_path(entity_id, reference.file_name)
        try:
            await self.store.upload(
                destination,
                blob.data,
                content_type=blob.content_type or self.default_content_type,
                upsert=True,
            )
        except StorageError as exc:
            raise UploadError(exc.message) from exc

        return MovedImage(
            source_path=reference.temp_path,
            destination_path=destination,
            public_url=self.store.get_public_url(destination),
        )

    async def _discard_temp(self, temp_path: str) -> None:
        try:
            await self.store.remove([temp_path])
        except StorageError as exc:
            # Left for the retention sweeper.
            logger.warning("media.promotion.cleanup_failed", path=temp_path, error=exc.message)
