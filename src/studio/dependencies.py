"""Dependency wiring helpers."""

from __future__ import annotations

from datetime import timedelta

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from .config import AppConfig
from .media.image_upload import ImageUploadHandler
from .media.media_api import router as media_router
from .media.promotion import PromotionEngine
from .media.retention import RetentionSweeper
from .media.temp_upload import TempUploadHandler
from .storage.storage_client import ObjectStore


def build_services(config: AppConfig, store: ObjectStore) -> dict[str, object]:
    """Create the media services sharing one store instance."""
    policy = config.media
    return {
        "temp_uploads": TempUploadHandler(
            store=store,
            temp_prefix=policy.temp_prefix,
            default_content_type=policy.default_content_type,
            max_upload_bytes=policy.max_upload_bytes,
        ),
        "promotion": PromotionEngine(
            store=store,
            collection=policy.permanent_collection,
            temp_prefix=policy.temp_prefix,
            default_content_type=policy.default_content_type,
        ),
        "sweeper": RetentionSweeper(
            store=store,
            temp_prefix=policy.temp_prefix,
            retention=timedelta(days=policy.temp_retention_days),
            page_size=policy.sweep_page_size,
        ),
        "image_uploads": ImageUploadHandler(
            store=store,
            default_content_type=policy.default_content_type,
            max_upload_bytes=policy.max_upload_bytes,
        ),
    }


def include_routers(app: FastAPI, config: AppConfig, store: ObjectStore) -> None:
    """Mount module routers and attach services."""
    app.state.config = config
    app.state.store = store
    for name, service in build_services(config, store).items():
        setattr(app.state, name, service)

    app.include_router(media_router)

    media_root = config.storage.media_root
    mount_path = config.storage.public_base_url.rstrip("/")
    if config.storage.backend == "local" and mount_path.startswith("/") and media_root.exists():
        app.mount(
            mount_path,
            StaticFiles(directory=media_root),
            name="media-static",
        )
