"""Helpers for decoding editor payloads and naming stored files."""

from __future__ import annotations

import base64
import binascii
import random
import time
from dataclasses import dataclass
from pathlib import PurePosixPath

from .media_errors import ValidationError

DEFAULT_CONTENT_TYPE = "image/jpeg"


@dataclass(slots=True)
class DecodedPayload:
    data: bytes
    content_type: str


def decode_data_url(
    value: str,
    *,
    default_content_type: str = DEFAULT_CONTENT_TYPE,
    max_bytes: int | None = None,
) -> DecodedPayload:
    """Decode a ``data:<mime>;base64,<payload>`` string (or bare base64).

    Raises:
        ValidationError: If the payload is not valid base64, decodes to
            nothing, or exceeds ``max_bytes``.
    """

    content_type = default_content_type
    payload = value.strip()
    if payload.startswith("data:"):
        header, sep, payload = payload.partition(",")
        if not sep:
            raise ValidationError("file is not a valid data URL")
        mime = header[len("data:") :].split(";", 1)[0].strip()
        if mime:
            content_type = mime

    try:
        decoded = base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("file is not valid base64") from exc

    if not decoded:
        raise ValidationError("file payload is empty")
    if max_bytes is not None and len(decoded) > max_bytes:
        raise ValidationError(f"file exceeds {max_bytes} bytes")
    return DecodedPayload(data=decoded, content_type=content_type)


def sanitize_file_name(file_name: str) -> str:
    """Reduce ``file_name`` to a single safe path segment."""
    name = PurePosixPath(file_name.replace("\\", "/").strip()).name
    if not name or name in {".", ".."}:
        raise ValidationError("fileName is not a valid file name")
    return name


def sanitize_object_path(path: str) -> str:
    """Normalise a bucket-relative path, rejecting traversal segments."""
    parts = [part for part in path.replace("\\", "/").split("/") if part]
    if not parts or any(part in {".", ".."} for part in parts):
        raise ValidationError("fileName is not a valid path")
    return "/".join(parts)


def generate_unique_filename(original_name: str) -> str:
    """Return ``<epoch-ms>-<random>.<ext>`` keeping the original extension."""
    suffix = PurePosixPath(original_name).suffix.lstrip(".") or "bin"
    stamp = int(time.time() * 1000)
    return f"{stamp}-{random.randint(0, 10**9)}.{suffix}"


__all__ = [
    "DecodedPayload",
    "decode_data_url",
    "generate_unique_filename",
    "sanitize_file_name",
    "sanitize_object_path",
]
