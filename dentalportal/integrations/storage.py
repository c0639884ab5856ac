"""Object storage uploads on S3 (aioboto3).

The rest of the service sees one narrow capability: hand over bytes, a file
name, a folder and optional tags; get back the public URL and the object key.
"""
from __future__ import annotations

import logging
import mimetypes
import re
import uuid
from datetime import datetime, timezone
from typing import Protocol
from urllib.parse import quote, urlencode

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel

from dentalportal.config import Settings
from dentalportal.exceptions import UploadFailedError

logger = logging.getLogger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class UploadedFile(BaseModel):
    file_id: str
    url: str
    name: str
    size: int
    content_type: str


class Uploader(Protocol):
    async def upload(
        self,
        data: bytes,
        name: str,
        folder: str,
        tags: list[str] | None = None,
        content_type: str | None = None,
    ) -> UploadedFile: ...

    async def delete(self, file_id: str) -> None: ...


def build_object_key(folder: str, name: str) -> str:
    """``<folder>/<YYYYmmdd_HHMMSS>_<8 hex>_<sanitised name>``."""
    folder = folder.strip("/") or "uploads"
    safe_name = _UNSAFE_NAME_CHARS.sub("-", name).strip("-.") or "file"
    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    return f"{folder}/{ts}_{uuid.uuid4().hex[:8]}_{safe_name}"


class S3Uploader:
    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def _session(self) -> aioboto3.Session:
        return aioboto3.Session(
            aws_access_key_id=self._settings.aws_access_key_id or None,
            aws_secret_access_key=self._settings.aws_secret_access_key or None,
            region_name=self._settings.aws_region,
        )

    def public_url(self, key: str) -> str:
        base = self._settings.media_public_base_url.rstrip("/")
        if not base:
            base = (
                f"https://{self._settings.s3_bucket}.s3."
                f"{self._settings.aws_region}.amazonaws.com"
            )
        return f"{base}/{quote(key)}"

    async def upload(
        self,
        data: bytes,
        name: str,
        folder: str,
        tags: list[str] | None = None,
        content_type: str | None = None,
    ) -> UploadedFile:
        if not folder:
            raise UploadFailedError("Folder is required")
        key = build_object_key(folder, name)
        content_type = content_type or mimetypes.guess_type(name)[0] or "application/octet-stream"
        extra: dict[str, str] = {"ContentType": content_type}
        if tags:
            extra["Tagging"] = urlencode({f"tag{i}": tag for i, tag in enumerate(tags)})

        logger.info("Uploading %s (%d bytes) to s3://%s/%s", name, len(data), self._settings.s3_bucket, key)
        try:
            async with self._session().client("s3") as s3:
                await s3.put_object(Bucket=self._settings.s3_bucket, Key=key, Body=data, **extra)
        except (BotoCoreError, ClientError) as exc:
            logger.error("Failed to upload file %s: %s", name, exc)
            raise UploadFailedError(f"Failed to upload file: {name}") from exc

        return UploadedFile(
            file_id=key,
            url=self.public_url(key),
            name=name,
            size=len(data),
            content_type=content_type,
        )

    async def delete(self, file_id: str) -> None:
        try:
            async with self._session().client("s3") as s3:
                await s3.delete_object(Bucket=self._settings.s3_bucket, Key=file_id)
        except (BotoCoreError, ClientError) as exc:
            logger.error("Failed to delete object %s: %s", file_id, exc)
            raise UploadFailedError(f"Failed to delete file: {file_id}") from exc
