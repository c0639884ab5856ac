"""Media service: proxy uploads to object storage.

Files either come in with the request or are fetched from a remote URL
first. The fetch streams the body and gives up as soon as it grows past
the configured upload limit.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from urllib.parse import unquote, urlparse

import httpx

from dentalportal.exceptions import BadRequestError
from dentalportal.integrations.storage import UploadedFile, Uploader

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class RemoteFile:
    data: bytes
    name: str
    content_type: str | None


def name_from_url(url: str) -> str:
    path = unquote(urlparse(url).path)
    return posixpath.basename(path.rstrip("/")) or "file"


async def fetch_remote(
    url: str,
    max_bytes: int,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> RemoteFile:
    chunks: list[bytes] = []
    size = 0
    try:
        async with httpx.AsyncClient(
            timeout=FETCH_TIMEOUT_SECONDS, follow_redirects=True, transport=transport,
        ) as client:
            async with client.stream("GET", url) as response:
                if response.status_code >= 400:
                    logger.warning("Fetching %s returned %s", url, response.status_code)
                    raise BadRequestError(f"Could not fetch file from URL (HTTP {response.status_code})")
                declared = response.headers.get("content-length")
                if declared and declared.isdigit() and int(declared) > max_bytes:
                    raise BadRequestError("Remote file exceeds the maximum upload size")
                async for chunk in response.aiter_bytes():
                    size += len(chunk)
                    if size > max_bytes:
                        raise BadRequestError("Remote file exceeds the maximum upload size")
                    chunks.append(chunk)
                content_type = response.headers.get("content-type")
    except httpx.HTTPError as exc:
        logger.error("Fetching %s failed: %s", url, exc)
        raise BadRequestError("Could not fetch file from URL") from exc

    if not size:
        raise BadRequestError("Remote file is empty")
    if content_type:
        content_type = content_type.split(";", 1)[0].strip() or None
    return RemoteFile(b"".join(chunks), name_from_url(url), content_type)


async def upload_file(
    uploader: Uploader,
    data: bytes,
    name: str,
    folder: str,
    tags: list[str],
    content_type: str | None = None,
) -> UploadedFile:
    if not data:
        raise BadRequestError("Uploaded file is empty")
    uploaded = await uploader.upload(data, name, folder, tags or None, content_type)
    logger.info("Stored %s as %s", name, uploaded.file_id)
    return uploaded


async def upload_from_url(
    uploader: Uploader,
    url: str,
    folder: str,
    tags: list[str],
    max_bytes: int,
    name: str | None = None,
) -> UploadedFile:
    remote = await fetch_remote(url, max_bytes)
    return await upload_file(
        uploader, remote.data, name or remote.name, folder, tags, remote.content_type,
    )


async def delete_file(uploader: Uploader, file_id: str) -> None:
    file_id = file_id.strip().lstrip("/")
    if not file_id:
        raise BadRequestError("File id is required")
    await uploader.delete(file_id)
    logger.info("Deleted %s", file_id)
