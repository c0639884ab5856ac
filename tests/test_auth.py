from urllib.parse import parse_qs, urlparse

from dentalportal.email.templates import EmailKind

SIGNUP = "/api/v1/auth/signup"
LOGIN = "/api/v1/auth/login"


def _dentist_body(**overrides) -> dict:
    body = {
        "email": "Meera@Clinic.in",
        "password": "password123",
        "first_name": "Meera",
        "last_name": "Iyer",
        "clinic_name": "Iyer Dental",
        "location": "Bandra West, Mumbai",
        "dci_registration_number": "DCI-3003",
        "professional_type": "DENTIST",
    }
    body.update(overrides)
    return body


def _token_from(url: str) -> str:
    return parse_qs(urlparse(url).query)["token"][0]


async def test_health(client) -> None:
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "dentalportal"}
    assert response.headers["X-Request-ID"]


async def test_signup_verify_and_login(client, mailer) -> None:
    response = await client.post(SIGNUP, json=_dentist_body())
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["email"] == "meera@clinic.in"
    assert body["data"]["is_email_verified"] is False
    assert "password_hash" not in body["data"]

    kind, recipient, variables = mailer.sent[-1]
    assert kind == EmailKind.EMAIL_VERIFICATION
    assert recipient == "meera@clinic.in"

    blocked = await client.post(LOGIN, json={"email": "meera@clinic.in", "password": "password123"})
    assert blocked.status_code == 401
    assert blocked.json()["success"] is False

    verified = await client.post(
        "/api/v1/auth/verify-email", json={"token": _token_from(variables["verification_url"])},
    )
    assert verified.status_code == 200
    assert verified.json()["data"]["is_email_verified"] is True
    assert mailer.sent[-1][0] == EmailKind.WELCOME

    login = await client.post(LOGIN, json={"email": "MEERA@clinic.in", "password": "password123"})
    assert login.status_code == 200
    assert "access_token" in login.cookies
    token = login.json()["data"]["access_token"]

    me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["clinic_name"] == "Iyer Dental"


async def test_signup_requires_practice_details(client) -> None:
    response = await client.post(SIGNUP, json=_dentist_body(clinic_name=None))

    assert response.status_code == 400
    assert response.json()["message"] == "Please provide clinic name and location"


async def test_signup_requires_dci_number(client) -> None:
    response = await client.post(SIGNUP, json=_dentist_body(dci_registration_number=None))

    assert response.status_code == 400
    assert response.json()["message"] == "Please provide DCI number."


async def test_allowlisted_admin_is_verified_immediately(client, mailer) -> None:
    response = await client.post(
        SIGNUP,
        json={"email": "admin@dentalportal.in", "password": "password123", "first_name": "Root"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["role"] == "admin"
    assert data["is_email_verified"] is True
    assert mailer.sent == []


async def test_pending_signup_cannot_request_a_new_link_early(client) -> None:
    await client.post(SIGNUP, json=_dentist_body())

    again = await client.post(SIGNUP, json=_dentist_body())

    assert again.status_code == 409
    assert again.json()["message"].startswith("Verification email already sent")


async def test_verified_email_cannot_sign_up_again(client, dentist) -> None:
    response = await client.post(SIGNUP, json=_dentist_body(email=dentist.email))

    assert response.status_code == 409
    assert response.json()["message"] == "Email already in use"


async def test_login_with_wrong_password(client, dentist) -> None:
    response = await client.post(LOGIN, json={"email": dentist.email, "password": "not-the-one"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


async def test_password_reset_flow(client, dentist, mailer) -> None:
    unknown = await client.post("/api/v1/auth/forgot-password", json={"email": "nobody@clinic.in"})
    known = await client.post("/api/v1/auth/forgot-password", json={"email": dentist.email})
    assert unknown.json()["message"] == known.json()["message"]

    kind, _, variables = mailer.sent[-1]
    assert kind == EmailKind.PASSWORD_RESET
    reset = await client.post(
        "/api/v1/auth/reset-password",
        json={"token": _token_from(variables["reset_url"]), "new_password": "brand-new-pass"},
    )
    assert reset.status_code == 200

    login = await client.post(LOGIN, json={"email": dentist.email, "password": "brand-new-pass"})
    assert login.status_code == 200


async def test_reset_with_bad_token(client) -> None:
    response = await client.post(
        "/api/v1/auth/reset-password", json={"token": "nope", "new_password": "whatever123"},
    )

    assert response.status_code == 400


async def test_me_requires_authentication(client) -> None:
    response = await client.get("/api/v1/auth/me")

    assert response.status_code == 401
    assert response.json()["message"] == "Not authenticated"


async def test_validation_errors_use_the_envelope(client) -> None:
    response = await client.post(SIGNUP, json={"email": "not-an-email", "password": "x"})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert {error["field"] for error in body["errors"]} >= {"email", "password", "first_name"}
