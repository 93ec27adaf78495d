from __future__ import annotations

from pathlib import Path

import pytest

from src.studio.config import StorageSettings
from src.studio.storage.local_storage import LocalStorage
from src.studio.storage.storage_factory import create_storage
from src.studio.storage.supabase_storage import SupabaseStorage


def _settings(tmp_path: Path, **overrides) -> StorageSettings:
    values = dict(
        backend="local",
        bucket="uploads",
        media_root=tmp_path,
        public_base_url="/media",
        supabase_url=None,
        supabase_service_key=None,
        timeout_seconds=3.0,
    )
    values.update(overrides)
    return StorageSettings(**values)


def test_create_local_storage(tmp_path: Path) -> None:
    storage = create_storage(_settings(tmp_path))

    assert isinstance(storage, LocalStorage)
    assert storage.bucket_dir == tmp_path / "uploads"


def test_create_supabase_storage(tmp_path: Path) -> None:
    storage = create_storage(
        _settings(
            tmp_path,
            backend="supabase",
            supabase_url="https://project.supabase.co",
            supabase_service_key="key",
        )
    )

    assert isinstance(storage, SupabaseStorage)
    assert storage.timeout_seconds == 3.0
    assert storage.bucket == "uploads"


def test_supabase_requires_credentials(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError, match="Missing Supabase environment variables"):
        create_storage(_settings(tmp_path, backend="supabase", supabase_url="https://x"))


def test_unknown_backend(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        create_storage(_settings(tmp_path, backend="s3"))
