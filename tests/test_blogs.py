BLOGS = "/api/v1/blogs"


async def _create(client, headers, **overrides) -> dict:
    body = {"title": "Caring for Clear Aligners", "content": "Rinse them twice a day."}
    body.update(overrides)
    response = await client.post(BLOGS, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_any_user_can_write_a_draft(client, dentist_headers) -> None:
    blog = await _create(client, dentist_headers)

    assert blog["status"] == "DRAFT"
    assert blog["published_at"] is None
    assert blog["slug"] == "caring-for-clear-aligners"
    assert blog["author_name"] == "Asha Rao"


async def test_creating_requires_login(client) -> None:
    response = await client.post(BLOGS, json={"title": "x", "content": "y"})

    assert response.status_code == 401


async def test_duplicate_titles_get_numbered_slugs(client, dentist_headers) -> None:
    first = await _create(client, dentist_headers)
    second = await _create(client, dentist_headers)

    assert first["slug"] == "caring-for-clear-aligners"
    assert second["slug"] == "caring-for-clear-aligners-1"


async def test_drafts_are_hidden_from_everyone_but_owner_and_admin(
    client, dentist_headers, other_headers, admin_headers,
) -> None:
    blog = await _create(client, dentist_headers)
    url = f"{BLOGS}/{blog['id']}"

    assert (await client.get(url)).status_code == 404
    assert (await client.get(url, headers=other_headers)).status_code == 404
    assert (await client.get(url, headers=dentist_headers)).status_code == 200
    assert (await client.get(url, headers=admin_headers)).status_code == 200

    listing = await client.get(BLOGS)
    assert listing.json()["data"] == []


async def test_published_views_are_counted(client, dentist_headers) -> None:
    blog = await _create(client, dentist_headers, status="PUBLISHED")
    assert blog["published_at"] is not None

    await client.get(f"{BLOGS}/{blog['id']}")
    response = await client.get(f"{BLOGS}/slug/{blog['slug']}")

    assert response.json()["data"]["view_count"] == 2


async def test_publish_and_unpublish(client, dentist_headers) -> None:
    blog = await _create(client, dentist_headers)
    url = f"{BLOGS}/{blog['id']}"

    published = await client.patch(
        f"{url}/publish",
        json={"published_at": "2026-03-01T10:00:00+05:30"},
        headers=dentist_headers,
    )
    assert published.status_code == 200
    assert published.json()["data"]["status"] == "PUBLISHED"
    assert published.json()["data"]["published_at"].startswith("2026-03-01T04:30:00")

    again = await client.patch(f"{url}/publish", headers=dentist_headers)
    assert again.status_code == 409
    assert again.json()["message"] == "Blog is already published"

    unpublished = await client.patch(f"{url}/unpublish", headers=dentist_headers)
    assert unpublished.json()["data"]["status"] == "DRAFT"
    assert unpublished.json()["data"]["published_at"] is None

    not_published = await client.patch(f"{url}/unpublish", headers=dentist_headers)
    assert not_published.status_code == 400


async def test_only_owner_or_admin_may_edit(client, dentist_headers, other_headers, admin_headers) -> None:
    blog = await _create(client, dentist_headers)
    url = f"{BLOGS}/{blog['id']}"

    forbidden = await client.put(url, json={"content": "hijacked"}, headers=other_headers)
    assert forbidden.status_code == 403

    renamed = await client.put(url, json={"title": "Aligner Hygiene"}, headers=admin_headers)
    assert renamed.status_code == 200
    assert renamed.json()["data"]["slug"] == "aligner-hygiene"

    deleted = await client.delete(url, headers=dentist_headers)
    assert deleted.status_code == 200
    assert (await client.get(url, headers=admin_headers)).status_code == 404


async def test_malformed_id_is_a_bad_request(client) -> None:
    response = await client.get(f"{BLOGS}/not-a-uuid")

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid blog ID format"


async def test_search_categories_and_statistics(client, dentist_headers, admin_headers) -> None:
    await _create(client, dentist_headers, title="Whitening at Home", category="cosmetic", status="PUBLISHED")
    await _create(client, dentist_headers, title="Whitening Myths", category="cosmetic")
    await _create(client, dentist_headers, title="Gum Disease", category="periodontics", status="PUBLISHED")

    found = await client.get(f"{BLOGS}/search", params={"q": "whitening"})
    assert [b["title"] for b in found.json()["data"]] == ["Whitening at Home"]

    categories = await client.get(f"{BLOGS}/categories")
    assert categories.json()["data"] == ["cosmetic", "periodontics"]

    listing = await client.get(f"{BLOGS}/admin", params={"status": "DRAFT"}, headers=admin_headers)
    assert listing.json()["pagination"]["total"] == 1

    stats = await client.get(f"{BLOGS}/statistics", headers=admin_headers)
    assert stats.json()["data"]["total"] == 3
    assert stats.json()["data"]["published"] == 2
    assert stats.json()["data"]["draft"] == 1

    denied = await client.get(f"{BLOGS}/statistics", headers=dentist_headers)
    assert denied.status_code == 403
