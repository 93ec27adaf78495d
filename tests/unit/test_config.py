from __future__ import annotations

from pathlib import Path

import pytest

from src.studio.config import load_config

ENV_KEYS = (
    "STORAGE_BACKEND",
    "STORAGE_BUCKET",
    "MEDIA_ROOT",
    "SUPABASE_URL",
    "NEXT_PUBLIC_SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "TEMP_RETENTION_DAYS",
    "SWEEP_TOKEN",
    "CORS_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_load_config_defaults(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MEDIA_ROOT", str(tmp_path / "media"))

    config = load_config()

    assert config.storage.backend == "local"
    assert config.storage.bucket == "uploads"
    assert config.media.temp_prefix == "temp"
    assert config.media.permanent_collection == "journals"
    assert config.media.temp_retention_days == 14
    assert config.media.sweep_page_size == 1000
    assert config.media.max_upload_bytes == 10 * 1024 * 1024
    assert config.sweep_token is None
    assert config.cors_origins == ("*",)
    assert (tmp_path / "media" / "uploads").is_dir()


def test_load_config_supabase_reads_public_url_fallback(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MEDIA_ROOT", str(tmp_path))
    monkeypatch.setenv("STORAGE_BACKEND", "Supabase")
    monkeypatch.setenv("NEXT_PUBLIC_SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "key")
    monkeypatch.setenv("TEMP_RETENTION_DAYS", "7")
    monkeypatch.setenv("CORS_ORIGINS", "https://studio.example, https://admin.studio.example")

    config = load_config()

    assert config.storage.backend == "supabase"
    assert config.storage.supabase_url == "https://project.supabase.co"
    assert config.media.temp_retention_days == 7
    assert config.cors_origins == ("https://studio.example", "https://admin.studio.example")
    assert not (tmp_path / "uploads").exists()


def test_load_config_rejects_unknown_backend(monkeypatch) -> None:
    monkeypatch.setenv("STORAGE_BACKEND", "ftp")

    with pytest.raises(ValueError, match="Unsupported STORAGE_BACKEND"):
        load_config()
