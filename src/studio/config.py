"""Application configuration builder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

SUPPORTED_BACKENDS = ("local", "supabase")


@dataclass(slots=True)
class StorageSettings:
    backend: str
    bucket: str
    media_root: Path
    public_base_url: str
    supabase_url: str | None
    supabase_service_key: str | None
    timeout_seconds: float


@dataclass(slots=True)
class MediaPolicy:
    temp_prefix: str
    permanent_collection: str
    temp_retention_days: int
    sweep_page_size: int
    max_upload_bytes: int
    default_content_type: str = "image/jpeg"


@dataclass(slots=True)
class AppConfig:
    storage: StorageSettings
    media: MediaPolicy
    sweep_token: str | None = None
    cors_origins: tuple[str, ...] = ("*",)


def _ensure_media_root(settings: StorageSettings) -> None:
    if settings.backend == "local":
        (settings.media_root / settings.bucket).mkdir(parents=True, exist_ok=True)


def load_config() -> AppConfig:
    """Load configuration from environment (local filesystem storage by default)."""
    backend = os.getenv("STORAGE_BACKEND", "local").strip().lower()
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(f"Unsupported STORAGE_BACKEND: {backend}")

    storage = StorageSettings(
        backend=backend,
        bucket=os.getenv("STORAGE_BUCKET", "uploads"),
        media_root=Path(os.getenv("MEDIA_ROOT", "media")),
        public_base_url=os.getenv("PUBLIC_MEDIA_BASE_URL", "/media"),
        supabase_url=os.getenv("SUPABASE_URL") or os.getenv("NEXT_PUBLIC_SUPABASE_URL"),
        supabase_service_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY"),
        timeout_seconds=float(os.getenv("STORAGE_TIMEOUT_SECONDS", 15)),
    )
    _ensure_media_root(storage)

    media = MediaPolicy(
        temp_prefix=os.getenv("TEMP_PREFIX", "temp").strip("/"),
        permanent_collection=os.getenv("PERMANENT_COLLECTION", "journals").strip("/"),
        temp_retention_days=int(os.getenv("TEMP_RETENTION_DAYS", 14)),
        sweep_page_size=int(os.getenv("SWEEP_PAGE_SIZE", 1000)),
        max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", 10 * 1024 * 1024)),
    )

    cors = os.getenv("CORS_ORIGINS", "*")
    return AppConfig(
        storage=storage,
        media=media,
        sweep_token=os.getenv("SWEEP_TOKEN") or None,
        cors_origins=tuple(origin.strip() for origin in cors.split(",") if origin.strip()),
    )
