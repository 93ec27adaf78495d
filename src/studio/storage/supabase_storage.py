"""Supabase Storage REST client."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Sequence
from urllib.parse import quote

import httpx

from .storage_client import DownloadedObject, StoredObject
from .storage_errors import ObjectExistsError, ObjectNotFoundError, StorageError

CACHE_CONTROL_SECONDS = 3600


@dataclass(slots=True)
class SupabaseStorage:
    """Talk to a single Supabase Storage bucket over HTTP.

    A fresh ``httpx.AsyncClient`` is opened per call; ``transport`` exists so
    tests can plug in ``httpx.MockTransport``.
    """

    base_url: str
    service_key: str
    bucket: str
    timeout_seconds: float = 15.0
    transport: httpx.AsyncBaseTransport | None = None

    @property
    def storage_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/storage/v1"

    def _client(self) -> httpx.AsyncClient:
        headers = {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
        }
        return httpx.AsyncClient(
            base_url=self.storage_url,
            headers=headers,
            timeout=self.timeout_seconds,
            transport=self.transport,
        )

    def _object_url(self, path: str) -> str:
        return f"/object/{quote(self.bucket, safe='')}/{quote(path.lstrip('/'), safe='/')}"

    async def upload(
        self,
        path: str,
        data: bytes,
        *,
        content_type: str,
        upsert: bool = False,
    ) -> str:
        headers = {
            "Content-Type": content_type,
            "cache-control": f"max-age={CACHE_CONTROL_SECONDS}",
            "x-upsert": "true" if upsert else "false",
        }
        async with self._client() as client:
            try:
                response = await client.post(self._object_url(path), content=data, headers=headers)
            except httpx.HTTPError as exc:
                raise StorageError(f"upload of {path} failed: {exc}") from exc
        if response.status_code >= 400:
            raise _error_from_response(response, f"upload of {path} failed")
        body = _json_or_empty(response)
        return str(body.get("Key") or path)

    async def download(self, path: str) -> DownloadedObject:
        async with self._client() as client:
            try:
                response = await client.get(self._object_url(path))
            except httpx.HTTPError as exc:
                raise StorageError(f"download of {path} failed: {exc}") from exc
        if response.status_code >= 400:
            raise _error_from_response(response, f"download of {path} failed")
        return DownloadedObject(
            data=response.content,
            content_type=response.headers.get("Content-Type"),
        )

    async def remove(self, paths: Sequence[str]) -> list[str]:
        if not paths:
            return []
        async with self._client() as client:
            try:
                response = await client.request(
                    "DELETE",
                    f"/object/{quote(self.bucket, safe='')}",
                    json={"prefixes": list(paths)},
                )
            except httpx.HTTPError as exc:
                raise StorageError(f"remove failed: {exc}") from exc
        if response.status_code >= 400:
            raise _error_from_response(response, "remove failed")
        body = _json_list(response)
        if body is None:
            # Accepted with a non-JSON body.
            return list(paths)
        return [str(item.get("name")) for item in body if isinstance(item, dict) and item.get("name")]

    async def list(
        self,
        prefix: str,
        *,
        limit: int = 100,
        offset: int = 0,
        sort_by: str = "created_at",
        descending: bool = False,
    ) -> list[StoredObject]:
        payload = {
            "prefix": prefix.strip("/"),
            "limit": limit,
            "offset": offset,
            "sortBy": {"column": sort_by, "order": "desc" if descending else "asc"},
        }
        async with self._client() as client:
            try:
                response = await client.post(
                    f"/object/list/{quote(self.bucket, safe='')}", json=payload
                )
            except httpx.HTTPError as exc:
                raise StorageError(f"list of {prefix} failed: {exc}") from exc
        if response.status_code >= 400:
            raise _error_from_response(response, f"list of {prefix} failed")
        body = _json_list(response)
        if body is None:
            raise StorageError(
                f"list of {prefix} failed: unreadable response body",
                status_code=response.status_code,
            )
        objects: list[StoredObject] = []
        for item in body:
            try:
                objects.append(_stored_object(item))
            except (AttributeError, TypeError, ValueError) as exc:
                raise StorageError(f"list of {prefix} failed: malformed entry {item!r}") from exc
        return objects

    def get_public_url(self, path: str) -> str:
        return (
            f"{self.storage_url}/object/public/"
            f"{quote(self.bucket, safe='')}/{quote(path.lstrip('/'), safe='/')}"
        )


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _json_list(response: httpx.Response) -> list[Any] | None:
    """Decode a JSON array body; ``None`` when the body is not JSON."""
    if not response.content:
        return []
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, list) else []


def _error_from_response(response: httpx.Response, context: str) -> StorageError:
    body = _json_or_empty(response)
    message = body.get("message") or body.get("error") or response.text or "unknown error"
    # Storage API reports missing objects as 400 with a 404 statusCode in the body.
    reported = str(body.get("statusCode") or response.status_code)
    detail = f"{context}: {message}"
    if reported == "404" or response.status_code == 404:
        return ObjectNotFoundError(detail, status_code=404)
    if reported == "409" or response.status_code == 409:
        return ObjectExistsError(detail, status_code=409)
    return StorageError(detail, status_code=response.status_code)


def _parse_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _stored_object(item: dict[str, Any]) -> StoredObject:
    metadata = item.get("metadata") or {}
    size = metadata.get("size")
    return StoredObject(
        name=str(item.get("name", "")),
        created_at=_parse_timestamp(item.get("created_at")),
        content_type=metadata.get("mimetype"),
        size_bytes=int(size) if size is not None else None,
    )
