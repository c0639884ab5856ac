from .conftest import create_user

USERS = "/api/v1/users"


async def test_location_update_geocodes_and_joins_the_map(client, dentist, dentist_headers, geocoder) -> None:
    response = await client.put(
        f"{USERS}/me/location",
        json={"location": "Koramangala, Bengaluru", "show_on_map": True},
        headers=dentist_headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["latitude"] == 12.9352
    assert data["show_on_map"] is True
    assert geocoder.calls == ["Koramangala, Bengaluru"]

    pins = await client.get(f"{USERS}/coordinates")
    assert [p["id"] for p in pins.json()["data"]] == [str(dentist.id)]
    assert "email" not in pins.json()["data"][0]


async def test_unknown_location_is_rejected(client, dentist_headers) -> None:
    response = await client.put(
        f"{USERS}/me/location", json={"location": "Nowhere In Particular"}, headers=dentist_headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Could not geocode the provided location"


async def test_admin_lists_practitioners_only(client, admin_headers, dentist, other_dentist) -> None:
    response = await client.get(USERS, headers=admin_headers)

    emails = {u["email"] for u in response.json()["data"]}
    assert emails == {dentist.email, other_dentist.email}

    searched = await client.get(USERS, params={"search": "vikram"}, headers=admin_headers)
    assert [u["email"] for u in searched.json()["data"]] == [other_dentist.email]


async def test_user_admin_requires_admin_role(client, dentist_headers) -> None:
    response = await client.get(USERS, headers=dentist_headers)

    assert response.status_code == 403
    assert response.json()["message"] == "Administrator access required."


async def test_verification_and_visibility_toggles(client, session_factory, admin_headers) -> None:
    pending = await create_user(session_factory, "pending@clinic.in", verified=False)
    url = f"{USERS}/{pending.id}"

    verified = await client.patch(f"{url}/verification", json={"is_email_verified": True}, headers=admin_headers)
    assert verified.json()["data"]["is_email_verified"] is True

    shown = await client.patch(f"{url}/map-visibility", json={"show_on_map": True}, headers=admin_headers)
    assert shown.json()["data"]["show_on_map"] is True

    deleted = await client.delete(url, headers=admin_headers)
    assert deleted.status_code == 200
    assert (await client.get(url, headers=admin_headers)).status_code == 404


async def test_administrators_cannot_be_managed(client, admin, admin_headers) -> None:
    response = await client.delete(f"{USERS}/{admin.id}", headers=admin_headers)

    assert response.status_code == 403


async def test_statistics(client, session_factory, admin_headers, dentist, other_dentist) -> None:
    await create_user(session_factory, "pending@clinic.in", verified=False)

    response = await client.get(f"{USERS}/statistics", headers=admin_headers)

    assert response.json()["data"] == {
        "total": 3,
        "verified": 2,
        "unverified": 1,
        "dentists": 1,
        "orthodontists": 1,
    }
