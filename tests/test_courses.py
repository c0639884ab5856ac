COURSES = "/api/v1/courses"

DESCRIPTION = "A practical introduction to clear aligner therapy for general dentists."
CONTENT = "Module 1 covers case selection. Module 2 covers staging and attachments."


def course_body(**overrides) -> dict:
    body = {"title": "Aligner Essentials", "description": DESCRIPTION, "content": CONTENT}
    body.update(overrides)
    return body


async def create_course(client, headers, **overrides) -> dict:
    response = await client.post(COURSES, json=course_body(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_only_admins_create_courses(client, dentist_headers) -> None:
    response = await client.post(COURSES, json=course_body(), headers=dentist_headers)

    assert response.status_code == 403


async def test_course_text_must_be_substantial(client, admin_headers) -> None:
    response = await client.post(COURSES, json=course_body(description="Too short"), headers=admin_headers)

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "description"


async def test_free_courses_cost_nothing(client, admin_headers) -> None:
    course = await create_course(client, admin_headers, is_free=True, price="999.00")

    assert course["price"] == "0.00"
    assert course["created_by_name"] == "Admin Rao"
    assert course["enrollment_count"] == 0


async def test_catalogue_lists_published_active_courses(client, admin_headers) -> None:
    await create_course(client, admin_headers, title="Draft Course")
    await create_course(client, admin_headers, title="Live Course", status="PUBLISHED")
    await create_course(client, admin_headers, title="Retired Course", status="PUBLISHED", is_active=False)

    response = await client.get(COURSES)

    assert [c["title"] for c in response.json()["data"]] == ["Live Course"]
    assert response.json()["pagination"]["total"] == 1


async def test_publish_lifecycle(client, admin_headers) -> None:
    course = await create_course(client, admin_headers)
    url = f"{COURSES}/{course['id']}"

    assert (await client.get(url)).status_code == 404

    published = await client.patch(f"{url}/publish", headers=admin_headers)
    assert published.json()["data"]["status"] == "PUBLISHED"

    viewed = await client.get(url)
    assert viewed.status_code == 200
    assert viewed.json()["data"]["view_count"] == 1

    conflict = await client.patch(f"{url}/publish", headers=admin_headers)
    assert conflict.status_code == 409


async def test_update_recomputes_slug_and_price(client, admin_headers) -> None:
    course = await create_course(client, admin_headers, is_free=False, price="1500.00")
    assert course["price"] == "1500.00"

    response = await client.put(
        f"{COURSES}/{course['id']}",
        json={"title": "Aligner Essentials Two", "is_free": True},
        headers=admin_headers,
    )

    data = response.json()["data"]
    assert data["slug"] == "aligner-essentials-two"
    assert data["price"] == "0.00"


async def test_create_with_media_uploads_in_background(client, admin_headers, uploader) -> None:
    response = await client.post(
        f"{COURSES}/with-media",
        data={**course_body(), "tags": "aligners,orthodontics"},
        files={
            "thumbnail": ("cover.png", b"\x89PNG fake image", "image/png"),
            "video": ("intro.mp4", b"fake video bytes", "video/mp4"),
        },
        headers=admin_headers,
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["message"] == "Course created successfully. Media is uploading in the background."
    assert body["data"]["tags"] == ["aligners", "orthodontics"]
    course_id = body["data"]["id"]

    assert {u.name for u in uploader.uploads} == {"cover.png", "intro.mp4"}
    assert all(u.file_id.startswith(f"courses/{course_id}/") for u in uploader.uploads)

    stored = await client.get(f"{COURSES}/{course_id}", headers=admin_headers)
    data = stored.json()["data"]
    assert data["thumbnail_image"].startswith("https://cdn.test/courses/")
    assert data["video_file"].endswith("intro.mp4")


async def test_failed_media_upload_leaves_course_intact(client, admin_headers, uploader) -> None:
    uploader.fail = True

    response = await client.post(
        f"{COURSES}/with-media",
        data=course_body(),
        files={"thumbnail": ("cover.png", b"\x89PNG", "image/png")},
        headers=admin_headers,
    )

    assert response.status_code == 201
    stored = await client.get(f"{COURSES}/{response.json()['data']['id']}", headers=admin_headers)
    assert stored.json()["data"]["thumbnail_image"] is None


async def test_update_with_media(client, admin_headers, uploader) -> None:
    course = await create_course(client, admin_headers)

    response = await client.put(
        f"{COURSES}/{course['id']}/with-media",
        data={"short_description": "Now with a cover"},
        files={"thumbnail": ("new-cover.jpg", b"jpeg bytes", "image/jpeg")},
        headers=admin_headers,
    )

    assert response.status_code == 200, response.text
    stored = await client.get(f"{COURSES}/{course['id']}", headers=admin_headers)
    assert stored.json()["data"]["short_description"] == "Now with a cover"
    assert stored.json()["data"]["thumbnail_image"].endswith("new-cover.jpg")


async def test_with_media_form_without_files(client, admin_headers, uploader) -> None:
    response = await client.post(
        f"{COURSES}/with-media",
        data={**course_body(), "tags": ["aligners", "retainers"], "max_enrollments": "25"},
        headers=admin_headers,
    )

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["message"] == "Course created successfully"
    assert body["data"]["tags"] == ["aligners", "retainers"]
    assert body["data"]["max_enrollments"] == 25
    assert uploader.uploads == []


async def test_statistics(client, admin_headers) -> None:
    await create_course(client, admin_headers, title="One", status="PUBLISHED")
    await create_course(client, admin_headers, title="Two")

    response = await client.get(f"{COURSES}/statistics", headers=admin_headers)

    data = response.json()["data"]
    assert data["total"] == 2
    assert data["published"] == 1
    assert data["draft"] == 1
    assert data["total_enrollments"] == 0
