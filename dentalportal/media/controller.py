"""Media controller."""

from __future__ import annotations

from fastapi import UploadFile

from dentalportal.config import Settings
from dentalportal.exceptions import BadRequestError, DomainError, to_http_exception
from dentalportal.integrations.storage import Uploader
from dentalportal.media import service
from dentalportal.media.schemas import (
    DeletedFileResponse,
    MediaFileResponse,
    UploadFromUrlRequest,
    parse_tags,
)
from shared.models.pagination import ApiResponse


async def upload_file(
    settings: Settings,
    uploader: Uploader,
    file: UploadFile,
    folder: str,
    tags: str | None,
) -> ApiResponse[MediaFileResponse]:
    try:
        data = await file.read()
        if len(data) > settings.max_upload_bytes:
            raise BadRequestError(f"{file.filename} exceeds the maximum upload size")
        uploaded = await service.upload_file(
            uploader, data, file.filename or "file", folder, parse_tags(tags), file.content_type,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="File uploaded successfully",
        data=MediaFileResponse.model_validate(uploaded.model_dump()),
    )


async def upload_from_url(
    settings: Settings, uploader: Uploader, body: UploadFromUrlRequest,
) -> ApiResponse[MediaFileResponse]:
    try:
        uploaded = await service.upload_from_url(
            uploader,
            str(body.url),
            body.folder,
            body.tags,
            settings.max_upload_bytes,
            name=body.name,
        )
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="File uploaded successfully",
        data=MediaFileResponse.model_validate(uploaded.model_dump()),
    )


async def delete_file(uploader: Uploader, file_id: str) -> ApiResponse[DeletedFileResponse]:
    try:
        await service.delete_file(uploader, file_id)
    except DomainError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        message="File deleted successfully",
        data=DeletedFileResponse(file_id=file_id.strip().lstrip("/")),
    )
