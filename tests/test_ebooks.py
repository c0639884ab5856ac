EBOOKS = "/api/v1/ebooks"


async def _create(client, headers, **overrides) -> dict:
    body = {
        "title": "Orthodontic Biomechanics",
        "description": "Forces, moments and anchorage explained.",
        "author": "Dr. R. Menon",
        "pdf_url": "https://cdn.test/ebooks/biomechanics.pdf",
    }
    body.update(overrides)
    response = await client.post(EBOOKS, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_only_admins_add_ebooks(client, dentist_headers) -> None:
    response = await client.post(
        EBOOKS, json={"title": "x", "description": "y", "author": "z"}, headers=dentist_headers,
    )

    assert response.status_code == 403


async def test_download_counts_each_request(client, admin_headers) -> None:
    ebook = await _create(client, admin_headers, status="PUBLISHED")
    url = f"{EBOOKS}/{ebook['id']}/download"

    await client.get(url)
    response = await client.get(url)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["pdf_url"] == "https://cdn.test/ebooks/biomechanics.pdf"
    assert data["download_count"] == 2


async def test_draft_cannot_be_downloaded(client, admin_headers) -> None:
    ebook = await _create(client, admin_headers)

    response = await client.get(f"{EBOOKS}/{ebook['id']}/download")

    assert response.status_code == 400
    assert response.json()["message"] == "Ebook is not available for download"


async def test_download_can_be_disabled(client, admin_headers) -> None:
    ebook = await _create(client, admin_headers, status="PUBLISHED", is_downloadable=False)

    response = await client.get(f"{EBOOKS}/{ebook['id']}/download")

    assert response.status_code == 400
    assert response.json()["message"] == "This ebook is not downloadable"


async def test_download_requires_a_file(client, admin_headers) -> None:
    ebook = await _create(client, admin_headers, status="PUBLISHED", pdf_url=None)

    response = await client.get(f"{EBOOKS}/{ebook['id']}/download")

    assert response.status_code == 400


async def test_lifecycle_and_statistics(client, admin_headers) -> None:
    ebook = await _create(client, admin_headers)
    url = f"{EBOOKS}/{ebook['id']}"

    assert (await client.get(url)).status_code == 404
    await client.patch(f"{url}/publish", headers=admin_headers)
    assert (await client.get(url)).json()["data"]["view_count"] == 1
    await client.get(f"{url}/download")

    stats = await client.get(f"{EBOOKS}/statistics", headers=admin_headers)
    data = stats.json()["data"]
    assert data["published"] == 1
    assert data["total_views"] == 1
    assert data["total_downloads"] == 1

    await client.patch(f"{url}/unpublish", headers=admin_headers)
    assert (await client.get(url)).status_code == 404


async def test_listing_filters(client, admin_headers) -> None:
    await _create(client, admin_headers, title="Hindi Guide", language="Hindi", status="PUBLISHED")
    await _create(client, admin_headers, title="English Guide", status="PUBLISHED")

    response = await client.get(EBOOKS, params={"language": "Hindi"})

    assert [e["title"] for e in response.json()["data"]] == ["Hindi Guide"]
