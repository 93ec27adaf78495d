"""Locate temp image references inside rich-text content."""

from __future__ import annotations

import re

from .media_models import ContentReference

DEFAULT_TEMP_PREFIX = "temp"


def _img_src_pattern(temp_prefix: str) -> re.Pattern[str]:
    marker = re.escape(temp_prefix.strip("/"))
    return re.compile(
        rf"""<img[^>]+src=["']([^"']*/{marker}/[^"']+)["'][^>]*>""",
        re.IGNORECASE,
    )


def _file_name_after_marker(url: str, temp_prefix: str) -> str | None:
    path = re.split(r"[?#]", url, maxsplit=1)[0]
    parts = path.split("/")
    try:
        index = parts.index(temp_prefix)
    except ValueError:
        return None
    file_name = "/".join(parts[index + 1 :])
    return file_name or None


def scan_temp_references(
    content: str, temp_prefix: str = DEFAULT_TEMP_PREFIX
) -> list[ContentReference]:
    """Return temp image references in order of first appearance.

    The temp segment may sit anywhere in the URL, after a host and any number
    of bucket/path segments. Duplicate URLs are reported once.
    """
    if not content:
        return []
    prefix = temp_prefix.strip("/")
    references: list[ContentReference] = []
    seen: set[str] = set()
    for match in _img_src_pattern(prefix).finditer(content):
        full_url = match.group(1)
        if full_url in seen:
            continue
        file_name = _file_name_after_marker(full_url, prefix)
        if file_name is None:
            continue
        seen.add(full_url)
        references.append(
            ContentReference(
                full_url=full_url,
                temp_path=f"{prefix}/{file_name}",
                file_name=file_name,
            )
        )
    return references
