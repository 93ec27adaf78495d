from __future__ import annotations

import os
import time
from pathlib import Path

import pytest

from src.studio.storage.local_storage import LocalStorage
from src.studio.storage.storage_errors import ObjectExistsError, ObjectNotFoundError, StorageError


def build_storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(root=tmp_path, bucket="uploads", public_base_url="http://localhost:8000/media/")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_upload_download_and_public_url(tmp_path: Path) -> None:
    storage = build_storage(tmp_path)

    await storage.upload("temp/x.jpg", b"bytes", content_type="image/jpeg")
    blob = await storage.download("temp/x.jpg")

    assert (tmp_path / "uploads" / "temp" / "x.jpg").read_bytes() == b"bytes"
    assert blob.data == b"bytes"
    assert blob.content_type == "image/jpeg"
    assert storage.get_public_url("temp/x.jpg") == "http://localhost:8000/media/uploads/temp/x.jpg"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_upload_respects_upsert_flag(tmp_path: Path) -> None:
    storage = build_storage(tmp_path)
    await storage.upload("temp/x.jpg", b"one", content_type="image/jpeg")

    with pytest.raises(ObjectExistsError):
        await storage.upload("temp/x.jpg", b"two", content_type="image/jpeg")
    await storage.upload("temp/x.jpg", b"three", content_type="image/jpeg", upsert=True)

    assert (await storage.download("temp/x.jpg")).data == b"three"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_download_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(ObjectNotFoundError):
        await build_storage(tmp_path).download("temp/none.jpg")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_paths_cannot_escape_bucket(tmp_path: Path) -> None:
    storage = build_storage(tmp_path)

    with pytest.raises(StorageError):
        await storage.upload("../outside.jpg", b"x", content_type="image/jpeg")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_list_reports_files_sorted_by_age(tmp_path: Path) -> None:
    storage = build_storage(tmp_path)
    await storage.upload("temp/new.jpg", b"n", content_type="image/jpeg")
    await storage.upload("temp/old.png", b"o", content_type="image/png")
    await storage.upload("temp/sub/inner.jpg", b"i", content_type="image/jpeg")
    week_ago = time.time() - 7 * 24 * 3600
    os.utime(tmp_path / "uploads" / "temp" / "old.png", (week_ago, week_ago))

    entries = await storage.list("temp")
    files = [entry for entry in entries if entry.created_at is not None]

    assert [entry.name for entry in files] == ["old.png", "new.jpg"]
    assert files[0].content_type == "image/png"
    assert files[0].size_bytes == 1
    assert [entry.name for entry in entries if entry.created_at is None] == ["sub"]
    assert len(await storage.list("temp", limit=1, offset=1)) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_list_missing_prefix_is_empty(tmp_path: Path) -> None:
    assert await build_storage(tmp_path).list("temp") == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_remove_returns_removed_paths(tmp_path: Path) -> None:
    storage = build_storage(tmp_path)
    await storage.upload("temp/x.jpg", b"x", content_type="image/jpeg")

    removed = await storage.remove(["temp/x.jpg", "temp/missing.jpg"])

    assert removed == ["temp/x.jpg"]
    assert not (tmp_path / "uploads" / "temp" / "x.jpg").exists()
