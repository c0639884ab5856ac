MAP_USERS = "/api/v1/map-users"


def _entry(**overrides) -> dict:
    body = {
        "first_name": "Kiran",
        "last_name": "Patil",
        "phone": "+919812345678",
        "location": "Bandra West, Mumbai",
        "clinic_name": "Patil Dental Studio",
        "zip_code": "400050",
    }
    body.update(overrides)
    return body


async def _create(client, headers, **overrides) -> dict:
    response = await client.post(MAP_USERS, json=_entry(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def test_create_geocodes_location(client, admin_headers) -> None:
    entry = await _create(client, admin_headers)

    assert entry["latitude"] == 19.0596
    assert entry["longitude"] == 72.8295
    assert entry["show_on_map"] is False


async def test_create_fails_when_location_cannot_be_geocoded(client, admin_headers) -> None:
    response = await client.post(MAP_USERS, json=_entry(location="Atlantis"), headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Could not geocode the provided location"


async def test_phone_numbers_are_unique(client, admin_headers) -> None:
    await _create(client, admin_headers)

    response = await client.post(MAP_USERS, json=_entry(first_name="Other"), headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["message"] == "A user with this phone number already exists"


async def test_update_regeocodes_only_when_location_changes(client, admin_headers, geocoder) -> None:
    entry = await _create(client, admin_headers)
    url = f"{MAP_USERS}/{entry['id']}"

    renamed = await client.put(url, json={"clinic_name": "Patil Smile Studio"}, headers=admin_headers)
    assert renamed.json()["data"]["clinic_name"] == "Patil Smile Studio"
    assert len(geocoder.calls) == 1

    moved = await client.put(url, json={"location": "Koramangala, Bengaluru"}, headers=admin_headers)
    assert moved.json()["data"]["latitude"] == 12.9352
    assert len(geocoder.calls) == 2


async def test_update_rechecks_phone(client, admin_headers) -> None:
    await _create(client, admin_headers)
    second = await _create(client, admin_headers, phone="+919800000000")

    response = await client.put(
        f"{MAP_USERS}/{second['id']}", json={"phone": "+919812345678"}, headers=admin_headers,
    )

    assert response.status_code == 409


async def test_public_directory_shows_visible_entries(client, admin_headers) -> None:
    hidden = await _create(client, admin_headers)
    shown = await _create(client, admin_headers, phone="+919800000000", show_on_map=True)

    listing = await client.get(MAP_USERS)
    assert [e["id"] for e in listing.json()["data"]] == [shown["id"]]

    assert (await client.get(f"{MAP_USERS}/{hidden['id']}")).status_code == 404
    assert (await client.get(f"{MAP_USERS}/admin/{hidden['id']}", headers=admin_headers)).status_code == 200


async def test_toggle_visibility(client, admin_headers) -> None:
    entry = await _create(client, admin_headers)
    url = f"{MAP_USERS}/{entry['id']}/toggle-visibility"

    flipped = await client.patch(url, headers=admin_headers)
    assert flipped.json()["data"]["show_on_map"] is True

    explicit = await client.patch(url, json={"show_on_map": True}, headers=admin_headers)
    assert explicit.json()["data"]["show_on_map"] is True

    flipped_back = await client.patch(url, headers=admin_headers)
    assert flipped_back.json()["data"]["show_on_map"] is False


async def test_admin_listing_and_statistics(client, admin_headers) -> None:
    await _create(client, admin_headers, show_on_map=True)
    await _create(client, admin_headers, phone="+919800000000", first_name="Neha")
    await _create(client, admin_headers, phone="+919811111111", location="Koramangala, Bengaluru")

    searched = await client.get(f"{MAP_USERS}/admin", params={"search": "neha"}, headers=admin_headers)
    assert searched.json()["pagination"]["total"] == 1

    visible = await client.get(f"{MAP_USERS}/admin", params={"show_on_map": "true"}, headers=admin_headers)
    assert visible.json()["pagination"]["total"] == 1

    stats = await client.get(f"{MAP_USERS}/statistics", headers=admin_headers)
    data = stats.json()["data"]
    assert (data["total"], data["visible"], data["hidden"]) == (3, 1, 2)
    assert data["popular_locations"][0] == {"location": "Bandra West, Mumbai", "count": 2}


async def test_directory_curation_is_admin_only(client, dentist_headers) -> None:
    response = await client.post(MAP_USERS, json=_entry(), headers=dentist_headers)

    assert response.status_code == 403


async def test_delete(client, admin_headers) -> None:
    entry = await _create(client, admin_headers)

    deleted = await client.delete(f"{MAP_USERS}/{entry['id']}", headers=admin_headers)

    assert deleted.status_code == 200
    assert (await client.get(f"{MAP_USERS}/admin/{entry['id']}", headers=admin_headers)).status_code == 404
