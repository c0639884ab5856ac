API = "/api/v1"


def _case_study(**overrides) -> dict:
    body = {
        "name": "Crowding correction",
        "age": 24,
        "case_description": "Moderate anterior crowding treated in 14 months.",
        "gender": "F",
        "upper": 22,
        "lower": 18,
    }
    body.update(overrides)
    return body


async def test_case_studies(client, admin_headers, dentist_headers) -> None:
    denied = await client.post(f"{API}/case-studies", json=_case_study(), headers=dentist_headers)
    assert denied.status_code == 403

    created = await client.post(f"{API}/case-studies", json=_case_study(), headers=admin_headers)
    assert created.status_code == 201
    await client.post(f"{API}/case-studies", json=_case_study(name="Open bite", gender="M"), headers=admin_headers)
    case_id = created.json()["data"]["id"]

    women = await client.get(f"{API}/case-studies", params={"gender": "F"})
    assert [c["name"] for c in women.json()["data"]] == ["Crowding correction"]

    updated = await client.put(f"{API}/case-studies/{case_id}", json={"upper": 24}, headers=admin_headers)
    assert updated.json()["data"]["upper"] == 24
    assert updated.json()["data"]["lower"] == 18

    public = await client.get(f"{API}/case-studies/{case_id}")
    assert public.status_code == 200

    await client.delete(f"{API}/case-studies/{case_id}", headers=admin_headers)
    assert (await client.get(f"{API}/case-studies/{case_id}")).status_code == 404


async def test_testimonials(client, admin_headers) -> None:
    first = await client.post(
        f"{API}/testimonials", json={"name": "Ritu", "message": "Painless treatment."}, headers=admin_headers,
    )
    assert first.status_code == 201
    await client.post(
        f"{API}/testimonials", json={"name": "Arjun", "message": "Great results."}, headers=admin_headers,
    )

    listing = await client.get(f"{API}/testimonials")
    assert {t["name"] for t in listing.json()["data"]} == {"Ritu", "Arjun"}

    testimonial_id = first.json()["data"]["id"]
    edited = await client.put(
        f"{API}/testimonials/{testimonial_id}", json={"message": "Quick and painless."}, headers=admin_headers,
    )
    assert edited.json()["data"]["message"] == "Quick and painless."

    removed = await client.delete(f"{API}/testimonials/{testimonial_id}", headers=admin_headers)
    assert removed.status_code == 200
    assert len((await client.get(f"{API}/testimonials")).json()["data"]) == 1


async def test_aligner_cases(client, admin_headers, dentist, dentist_headers, other_headers) -> None:
    unknown = await client.post(
        f"{API}/aligner-cases",
        json={"patient_name": "P. Shah", "quantity": 2, "user_id": "00000000-0000-0000-0000-000000000000"},
        headers=admin_headers,
    )
    assert unknown.status_code == 404
    assert unknown.json()["message"] == "User not found"

    created = await client.post(
        f"{API}/aligner-cases",
        json={"patient_name": "P. Shah", "quantity": 2, "user_id": str(dentist.id)},
        headers=admin_headers,
    )
    assert created.status_code == 201
    case_id = created.json()["data"]["id"]

    mine = await client.get(f"{API}/aligner-cases/my-cases", headers=dentist_headers)
    assert mine.json()["pagination"]["total"] == 1

    own = await client.get(f"{API}/aligner-cases/{case_id}", headers=dentist_headers)
    assert own.status_code == 200

    someone_elses = await client.get(f"{API}/aligner-cases/{case_id}", headers=other_headers)
    assert someone_elses.status_code == 403
    assert someone_elses.json()["message"] == "You can only view your own aligner cases"

    zero = await client.put(f"{API}/aligner-cases/{case_id}", json={"quantity": 0}, headers=admin_headers)
    assert zero.status_code == 422

    stats = await client.get(f"{API}/aligner-cases/statistics", headers=admin_headers)
    assert stats.json()["data"] == {
        "total_cases": 1,
        "total_quantity": 2,
        "practitioners": 1,
        "cases_this_month": 1,
    }


async def test_aligner_process_video(client, admin_headers) -> None:
    empty = await client.get(f"{API}/aligner-process")
    assert empty.status_code == 200
    assert empty.json()["data"] is None

    await client.put(
        f"{API}/aligner-process", json={"video_url": "https://video.test/v1"}, headers=admin_headers,
    )
    await client.put(
        f"{API}/aligner-process", json={"video_url": "https://video.test/v2"}, headers=admin_headers,
    )

    current = await client.get(f"{API}/aligner-process")
    assert current.json()["data"]["video_url"] == "https://video.test/v2"


async def test_contact_queries(client, dentist, dentist_headers, admin_headers) -> None:
    anonymous = await client.post(
        f"{API}/contacts", json={"name": "A", "email": "a@clinic.in", "message": "Hi"},
    )
    assert anonymous.status_code == 401

    too_long = await client.post(
        f"{API}/contacts",
        json={"name": "Asha", "email": "asha@clinic.in", "message": "x" * 501},
        headers=dentist_headers,
    )
    assert too_long.status_code == 422

    sent = await client.post(
        f"{API}/contacts",
        json={"name": "Asha", "email": "Asha@Clinic.in", "message": "Please call me back."},
        headers=dentist_headers,
    )
    assert sent.status_code == 201
    assert sent.json()["data"]["email"] == "asha@clinic.in"
    assert sent.json()["data"]["user_id"] == str(dentist.id)

    inbox = await client.get(f"{API}/contacts", headers=admin_headers)
    assert inbox.json()["pagination"]["total"] == 1
