"""Media router. Every route is admin only."""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from dentalportal.config import Settings
from dentalportal.dependencies import get_settings, get_uploader, require_admin
from dentalportal.integrations.storage import Uploader
from dentalportal.media import controller
from dentalportal.media.schemas import (
    DEFAULT_FOLDER,
    DeletedFileResponse,
    MediaFileResponse,
    UploadFromUrlRequest,
)
from shared.models.pagination import ApiResponse

router = APIRouter(prefix="/media", tags=["media"], dependencies=[Depends(require_admin)])


@router.post(
    "/upload",
    response_model=ApiResponse[MediaFileResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Upload a file",
    description="`tags` may be a JSON array or a comma-separated list.",
)
async def upload_file(
    file: UploadFile = File(...),
    folder: str = Form(DEFAULT_FOLDER),
    tags: str | None = Form(None),
    settings: Settings = Depends(get_settings),
    uploader: Uploader = Depends(get_uploader),
) -> ApiResponse[MediaFileResponse]:
    return await controller.upload_file(settings, uploader, file, folder, tags)


@router.post(
    "/upload-from-url",
    response_model=ApiResponse[MediaFileResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Upload a file fetched from a URL",
)
async def upload_from_url(
    body: UploadFromUrlRequest,
    settings: Settings = Depends(get_settings),
    uploader: Uploader = Depends(get_uploader),
) -> ApiResponse[MediaFileResponse]:
    return await controller.upload_from_url(settings, uploader, body)


@router.delete(
    "/{file_id:path}",
    response_model=ApiResponse[DeletedFileResponse],
    summary="Delete a stored file",
    description="`file_id` is the object key returned by the upload routes.",
)
async def delete_file(
    file_id: str, uploader: Uploader = Depends(get_uploader),
) -> ApiResponse[DeletedFileResponse]:
    return await controller.delete_file(uploader, file_id)
