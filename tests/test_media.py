import httpx
import pytest

from dentalportal.exceptions import BadRequestError
from dentalportal.media.service import fetch_remote, name_from_url

MEDIA = "/api/v1/media"


async def test_upload_requires_admin(client, dentist_headers) -> None:
    response = await client.post(
        f"{MEDIA}/upload", files={"file": ("x.png", b"data", "image/png")}, headers=dentist_headers,
    )

    assert response.status_code == 403


async def test_upload_file(client, admin_headers, uploader) -> None:
    response = await client.post(
        f"{MEDIA}/upload",
        data={"folder": "blogs", "tags": '["cover", "hero"]'},
        files={"file": ("smile cover.png", b"\x89PNG bytes", "image/png")},
        headers=admin_headers,
    )

    assert response.status_code == 201, response.text
    data = response.json()["data"]
    assert data["file_id"].startswith("blogs/")
    assert data["file_id"].endswith("_smile-cover.png")
    assert data["size"] == len(b"\x89PNG bytes")
    assert data["url"] == f"https://cdn.test/{data['file_id']}"
    assert uploader.uploads[0].content_type == "image/png"


async def test_empty_upload_is_rejected(client, admin_headers) -> None:
    response = await client.post(
        f"{MEDIA}/upload", files={"file": ("empty.txt", b"", "text/plain")}, headers=admin_headers,
    )

    assert response.status_code == 400


async def test_delete_by_key(client, admin_headers, uploader) -> None:
    response = await client.delete(f"{MEDIA}/blogs/20260101_000000_abcd1234_cover.png", headers=admin_headers)

    assert response.status_code == 200
    assert uploader.deleted == ["blogs/20260101_000000_abcd1234_cover.png"]


def test_name_from_url() -> None:
    assert name_from_url("https://files.test/docs/My%20Guide.pdf?dl=1") == "My Guide.pdf"
    assert name_from_url("https://files.test/") == "file"


async def test_fetch_remote_reads_body_and_type() -> None:
    transport = httpx.MockTransport(
        lambda request: httpx.Response(
            200, content=b"%PDF-1.7", headers={"content-type": "application/pdf; charset=binary"},
        )
    )

    remote = await fetch_remote("https://files.test/guide.pdf", 1024, transport=transport)

    assert remote.data == b"%PDF-1.7"
    assert remote.name == "guide.pdf"
    assert remote.content_type == "application/pdf"


async def test_fetch_remote_enforces_size_limit() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"x" * 2048))

    with pytest.raises(BadRequestError, match="maximum upload size"):
        await fetch_remote("https://files.test/big.bin", 1024, transport=transport)


async def test_fetch_remote_reports_http_errors() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(404))

    with pytest.raises(BadRequestError, match="HTTP 404"):
        await fetch_remote("https://files.test/missing.pdf", 1024, transport=transport)


async def test_upload_from_url_rejects_bad_urls(client, admin_headers) -> None:
    response = await client.post(
        f"{MEDIA}/upload-from-url", json={"url": "not a url"}, headers=admin_headers,
    )

    assert response.status_code == 422
