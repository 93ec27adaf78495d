"""Pydantic schemas for media staging endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TempUploadRequest(_CamelModel):
    file: str | None = None
    file_name: str | None = Field(default=None, alias="fileName")


class ImageUploadRequest(_CamelModel):
    file: str | None = None
    file_name: str | None = Field(default=None, alias="fileName")
    replaces: str | None = None


class UploadResponse(_CamelModel):
    success: bool = True
    path: str
    public_url: str = Field(alias="publicUrl")


class PromotionRequest(_CamelModel):
    content: str | None = None
    journal_id: str | int | None = Field(default=None, alias="journalId")


class MovedImageSchema(_CamelModel):
    from_path: str = Field(alias="from")
    to: str
    public_url: str = Field(alias="publicUrl")


class PathErrorSchema(BaseModel):
    path: str
    error: str


class PromotionResponse(_CamelModel):
    success: bool = True
    moved_count: int = Field(alias="movedCount")
    moved_images: list[MovedImageSchema] = Field(default_factory=list, alias="movedImages")
    errors: list[PathErrorSchema] = Field(default_factory=list)
    updated_content: str = Field(alias="updatedContent")
    message: str | None = None


class FileErrorSchema(BaseModel):
    file: str
    error: str


class SweepResponse(_CamelModel):
    success: bool = True
    deleted_count: int = Field(alias="deletedCount")
    deleted_files: list[str] = Field(default_factory=list, alias="deletedFiles")
    errors: list[FileErrorSchema] = Field(default_factory=list)
    message: str
    dry_run: bool = Field(default=False, alias="dryRun")
