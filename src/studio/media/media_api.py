"""HTTP routes for editor image staging, promotion and sweeping."""

from __future__ import annotations

import hmac
import logging

from fastapi import APIRouter, Depends, Header, Query, Request

from ..api.errors import bad_request_error, internal_error, unauthorized_error
from .image_upload import ImageUploadHandler
from .media_errors import SweepError, UploadError, ValidationError
from .media_schemas import (
    FileErrorSchema,
    ImageUploadRequest,
    MovedImageSchema,
    PathErrorSchema,
    PromotionRequest,
    PromotionResponse,
    SweepResponse,
    TempUploadRequest,
    UploadResponse,
)
from .promotion import PromotionEngine
from .retention import RetentionSweeper
from .temp_upload import TempUploadHandler

router = APIRouter(prefix="/api", tags=["media"])
logger = logging.getLogger(__name__)


def _get_temp_uploads(request: Request) -> TempUploadHandler:
    try:
        return request.app.state.temp_uploads  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive
        raise RuntimeError("TempUploadHandler is not configured") from exc


def _get_promotion(request: Request) -> PromotionEngine:
    try:
        return request.app.state.promotion  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive
        raise RuntimeError("PromotionEngine is not configured") from exc


def _get_sweeper(request: Request) -> RetentionSweeper:
    try:
        return request.app.state.sweeper  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive
        raise RuntimeError("RetentionSweeper is not configured") from exc


def _get_image_uploads(request: Request) -> ImageUploadHandler:
    try:
        return request.app.state.image_uploads  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover - defensive
        raise RuntimeError("ImageUploadHandler is not configured") from exc


def _require_sweep_token(
    request: Request,
    token: str | None = Query(default=None),
    header_token: str | None = Header(default=None, alias="x-sweep-token"),
) -> None:
    config = getattr(request.app.state, "config", None)
    expected = getattr(config, "sweep_token", None)
    if not expected:
        return
    provided = header_token or token or ""
    if not hmac.compare_digest(provided.encode(), expected.encode()):
        logger.warning("media.sweep.unauthorized")
        raise unauthorized_error("Unauthorized")


@router.post("/news/upload-temp-image", response_model=UploadResponse)
async def upload_temp_image(
    payload: TempUploadRequest,
    handler: TempUploadHandler = Depends(_get_temp_uploads),
) -> UploadResponse:
    """Stage an editor image under the temp prefix and return its public URL."""
    try:
        blob = await handler.upload(payload.file, payload.file_name)
    except ValidationError as exc:
        raise bad_request_error(str(exc)) from exc
    except UploadError as exc:
        raise internal_error(str(exc)) from exc
    return UploadResponse(path=blob.path, public_url=blob.public_url)


@router.post(
    "/news/move-temp-images",
    response_model=PromotionResponse,
    response_model_exclude_none=True,
)
async def move_temp_images(
    payload: PromotionRequest,
    engine: PromotionEngine = Depends(_get_promotion),
) -> PromotionResponse:
    """Promote temp images referenced by a saved article."""
    try:
        result = await engine.promote(payload.content, payload.journal_id)
    except ValidationError as exc:
        raise bad_request_error(str(exc)) from exc

    return PromotionResponse(
        moved_count=result.moved_count,
        moved_images=[
            MovedImageSchema(
                from_path=item.source_path,
                to=item.destination_path,
                public_url=item.public_url,
            )
            for item in result.moved_images
        ],
        errors=[PathErrorSchema(path=item.source_path, error=item.error) for item in result.errors],
        updated_content=result.updated_content,
        message=None if result.moved_images or result.errors else "No temp images to move",
    )


@router.api_route(
    "/news/cleanup-temp-images",
    methods=["GET", "POST"],
    response_model=SweepResponse,
    dependencies=[Depends(_require_sweep_token)],
)
async def cleanup_temp_images(
    dry_run: bool = Query(default=False, alias="dryRun"),
    sweeper: RetentionSweeper = Depends(_get_sweeper),
) -> SweepResponse:
    """Delete temp images older than the retention window."""
    try:
        result = await sweeper.sweep(dry_run=dry_run)
    except SweepError as exc:
        raise internal_error(str(exc)) from exc

    return SweepResponse(
        deleted_count=result.deleted_count,
        deleted_files=result.candidates if dry_run else result.deleted_files,
        errors=[FileErrorSchema(file=item.file_name, error=item.error) for item in result.errors],
        message=result.message,
        dry_run=dry_run,
    )


@router.post("/upload-image", response_model=UploadResponse)
async def upload_image(
    payload: ImageUploadRequest,
    handler: ImageUploadHandler = Depends(_get_image_uploads),
) -> UploadResponse:
    """Store an image directly, removing the file it replaces."""
    try:
        image = await handler.upload(payload.file, payload.file_name, replaces=payload.replaces)
    except ValidationError as exc:
        raise bad_request_error(str(exc)) from exc
    except UploadError as exc:
        raise internal_error(str(exc)) from exc
    return UploadResponse(path=image.path, public_url=image.public_url)
