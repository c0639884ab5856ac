from datetime import datetime, timedelta, timezone

import pytest

from dentalportal.live_sessions.schemas import to_utc

SESSIONS = "/api/v1/live-sessions"


def _future(days: int = 7) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


async def _create(client, headers, **overrides) -> dict:
    body = {
        "title": "Digital Smile Design Live",
        "description": "Planning veneers with digital mock-ups.",
        "scheduled_at": _future(),
    }
    body.update(overrides)
    response = await client.post(SESSIONS, json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_naive_times_are_read_in_the_session_timezone() -> None:
    local = datetime(2030, 1, 15, 10, 0)

    assert to_utc(local, "Asia/Kolkata") == datetime(2030, 1, 15, 4, 30, tzinfo=timezone.utc)
    assert to_utc(local, None) == datetime(2030, 1, 15, 4, 30, tzinfo=timezone.utc)
    assert to_utc(local, "Europe/London") == datetime(2030, 1, 15, 10, 0, tzinfo=timezone.utc)


def test_aware_times_keep_their_offset() -> None:
    aware = datetime(2030, 1, 15, 10, 0, tzinfo=timezone(timedelta(hours=-5)))

    assert to_utc(aware, "Asia/Kolkata") == datetime(2030, 1, 15, 15, 0, tzinfo=timezone.utc)


async def test_create_localizes_scheduled_time(client, admin_headers) -> None:
    session = await _create(client, admin_headers, scheduled_at="2030-01-15T10:00:00")

    assert session["scheduled_at"].startswith("2030-01-15T04:30:00")
    assert session["timezone"] == "Asia/Kolkata"
    assert session["status"] == "SCHEDULED"
    assert session["host_name"] == "Admin Rao"


async def test_create_rejects_past_times(client, admin_headers) -> None:
    response = await client.post(
        SESSIONS,
        json={"title": "Too late", "description": "d", "scheduled_at": "2020-01-01T10:00:00Z"},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Scheduled time must be in the future"


async def test_create_rejects_unknown_timezone(client, admin_headers) -> None:
    response = await client.post(
        SESSIONS,
        json={
            "title": "Bad zone",
            "description": "d",
            "scheduled_at": _future(),
            "timezone": "Mars/Olympus_Mons",
        },
        headers=admin_headers,
    )

    assert response.status_code == 422


async def test_session_runs_from_scheduled_to_completed(client, admin_headers) -> None:
    session = await _create(client, admin_headers)
    url = f"{SESSIONS}/{session['id']}"

    early_end = await client.patch(f"{url}/end", headers=admin_headers)
    assert early_end.status_code == 400
    assert early_end.json()["message"] == "Session is not live"

    started = await client.patch(f"{url}/start", headers=admin_headers)
    assert started.json()["data"]["status"] == "LIVE"
    assert started.json()["data"]["started_at"] is not None

    ended = await client.patch(f"{url}/end", headers=admin_headers)
    assert ended.json()["data"]["status"] == "COMPLETED"
    assert ended.json()["data"]["ended_at"] is not None

    cancel = await client.patch(f"{url}/cancel", headers=admin_headers)
    assert cancel.status_code == 400
    assert cancel.json()["message"] == "Cannot cancel a completed session"


async def test_cancelling_a_live_session_closes_it(client, admin_headers) -> None:
    session = await _create(client, admin_headers)
    url = f"{SESSIONS}/{session['id']}"
    await client.patch(f"{url}/start", headers=admin_headers)

    cancelled = await client.patch(f"{url}/cancel", headers=admin_headers)
    assert cancelled.json()["data"]["status"] == "CANCELLED"
    assert cancelled.json()["data"]["ended_at"] is not None

    again = await client.patch(f"{url}/cancel", headers=admin_headers)
    assert again.status_code == 200
    assert again.json()["data"]["status"] == "CANCELLED"


async def test_postpone_and_reschedule(client, admin_headers) -> None:
    session = await _create(client, admin_headers)
    url = f"{SESSIONS}/{session['id']}"

    early = await client.patch(f"{url}/reschedule", json={"scheduled_at": _future(9)}, headers=admin_headers)
    assert early.status_code == 400
    assert early.json()["message"] == "Only postponed sessions can be rescheduled"

    postponed = await client.patch(f"{url}/postpone", headers=admin_headers)
    assert postponed.json()["data"]["status"] == "POSTPONED"

    past = await client.patch(
        f"{url}/reschedule", json={"scheduled_at": "2020-06-01T09:00:00Z"}, headers=admin_headers,
    )
    assert past.status_code == 400
    assert past.json()["message"] == "Scheduled time must be in the future"

    rescheduled = await client.patch(
        f"{url}/reschedule",
        json={"scheduled_at": "2031-02-01T18:00:00", "timezone": "Europe/London"},
        headers=admin_headers,
    )
    data = rescheduled.json()["data"]
    assert data["status"] == "SCHEDULED"
    assert data["timezone"] == "Europe/London"
    assert data["scheduled_at"].startswith("2031-02-01T18:00:00")


async def test_upcoming_listing_hides_finished_and_inactive_sessions(client, admin_headers) -> None:
    upcoming = await _create(client, admin_headers, title="Upcoming")
    finished = await _create(client, admin_headers, title="Finished")
    await _create(client, admin_headers, title="Hidden", is_active=False)
    await client.patch(f"{SESSIONS}/{finished['id']}/start", headers=admin_headers)
    await client.patch(f"{SESSIONS}/{finished['id']}/end", headers=admin_headers)

    response = await client.get(SESSIONS)

    assert [s["id"] for s in response.json()["data"]] == [upcoming["id"]]

    admin_listing = await client.get(f"{SESSIONS}/admin", headers=admin_headers)
    assert admin_listing.json()["pagination"]["total"] == 3


async def test_inactive_sessions_are_hidden_from_the_public(client, admin_headers) -> None:
    session = await _create(client, admin_headers, is_active=False)

    assert (await client.get(f"{SESSIONS}/{session['id']}")).status_code == 404
    assert (await client.get(f"{SESSIONS}/{session['id']}", headers=admin_headers)).status_code == 200


async def test_only_admins_schedule_sessions(client, dentist_headers) -> None:
    response = await client.post(
        SESSIONS,
        json={"title": "x", "description": "y", "scheduled_at": _future()},
        headers=dentist_headers,
    )

    assert response.status_code == 403


@pytest.mark.parametrize("minutes", [0, 14])
async def test_sessions_last_at_least_fifteen_minutes(client, admin_headers, minutes) -> None:
    response = await client.post(
        SESSIONS,
        json={"title": "x", "description": "y", "scheduled_at": _future(), "duration_minutes": minutes},
        headers=admin_headers,
    )

    assert response.status_code == 422


async def test_statistics(client, admin_headers) -> None:
    first = await _create(client, admin_headers, title="One")
    await _create(client, admin_headers, title="Two")
    await client.patch(f"{SESSIONS}/{first['id']}/postpone", headers=admin_headers)

    response = await client.get(f"{SESSIONS}/statistics", headers=admin_headers)

    data = response.json()["data"]
    assert data["total"] == 2
    assert data["scheduled"] == 1
    assert data["postponed"] == 1
