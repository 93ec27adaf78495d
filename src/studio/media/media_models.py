"""Media data models."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime

_SCHEME_HOST = re.compile(r"^https?://[^/]+", re.IGNORECASE)


@dataclass(slots=True)
class TempBlob:
    path: str
    public_url: str
    content_type: str
    created_at: datetime


@dataclass(slots=True)
class StoredImage:
    path: str
    public_url: str


@dataclass(slots=True, frozen=True)
class ContentReference:
    """A temp image URL found inside rich-text content."""

    full_url: str
    temp_path: str
    file_name: str

    @property
    def query_stripped(self) -> str:
        return self.full_url.split("?", 1)[0]

    @property
    def host_stripped(self) -> str:
        return _SCHEME_HOST.sub("", self.full_url, count=1)

    def variants(self) -> list[str]:
        """Textual forms of the URL that may appear in stored content."""
        seen: list[str] = []
        for variant in (self.full_url, self.query_stripped, self.host_stripped):
            if variant and variant not in seen:
                seen.append(variant)
        return seen


@dataclass(slots=True)
class MovedImage:
    source_path: str
    destination_path: str
    public_url: str


@dataclass(slots=True)
class PromotionFailure:
    source_path: str
    error: str


@dataclass(slots=True)
class PromotionResult:
    updated_content: str
    moved_images: list[MovedImage] = field(default_factory=list)
    errors: list[PromotionFailure] = field(default_factory=list)

    @property
    def moved_count(self) -> int:
        return len(self.moved_images)


@dataclass(slots=True)
class SweepFailure:
    file_name: str
    error: str


@dataclass(slots=True)
class SweepResult:
    deleted_files: list[str] = field(default_factory=list)
    errors: list[SweepFailure] = field(default_factory=list)
    candidates: list[str] = field(default_factory=list)
    scanned: int = 0
    dry_run: bool = False

    @property
    def deleted_count(self) -> int:
        return len(self.deleted_files)

    @property
    def message(self) -> str:
        if self.dry_run:
            return f"Found {len(self.candidates)} old temp files"
        if self.scanned == 0:
            return "No temp files to clean up"
        return f"Deleted {self.deleted_count} old temp files"
