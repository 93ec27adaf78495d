"""Factory producing the object store configured for the process."""

from __future__ import annotations

from ..config import StorageSettings
from .local_storage import LocalStorage
from .storage_client import ObjectStore
from .supabase_storage import SupabaseStorage


def create_storage(settings: StorageSettings) -> ObjectStore:
    """Instantiate the configured store.

    Called once by ``create_app`` (or the cleanup script); the result lives for
    the whole process and is handed to services explicitly.
    """
    backend = settings.backend.lower()
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise RuntimeError("Missing Supabase environment variables")
        return SupabaseStorage(
            base_url=settings.supabase_url,
            service_key=settings.supabase_service_key,
            bucket=settings.bucket,
            timeout_seconds=settings.timeout_seconds,
        )
    if backend == "local":
        return LocalStorage(
            root=settings.media_root,
            bucket=settings.bucket,
            public_base_url=settings.public_base_url,
        )
    raise ValueError(f"Unknown storage backend: {settings.backend}")
