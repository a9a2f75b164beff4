"""Auth Routes — register/login/logout over HTTP.

Tests cover:
    - register creates a standard account, returns a token and sets the cookie
    - duplicate email → 409, also after the first account was soft-deleted
    - login: unknown email → 404, wrong password → 400 without a token
    - a token from login opens an authenticated route
"""


async def test_register_creates_standard_account(client, validator):
    resp = await client.post("/api/v1/auth/register", json={
        "email": "Alice@Example.com", "password": "pw-alice",
        "firstname": "Alice", "lastname": "Liddell",
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["account"]["email"] == "alice@example.com"
    assert body["account"]["role"] == "standard"
    assert body["account"]["first_name"] == "Alice"
    assert "password_hash" not in body["account"]
    identity = validator.validate(body["token"])
    assert identity.account_id == body["account"]["id"]
    assert resp.cookies.get("jwt") == body["token"]


async def test_register_ignores_role_field(client):
    resp = await client.post("/api/v1/auth/register", json={
        "email": "sneaky@example.com", "password": "pw", "role": "admin",
    })
    assert resp.status_code == 200
    assert resp.json()["account"]["role"] == "standard"


async def test_register_duplicate_email_conflict(client, user):
    resp = await client.post("/api/v1/auth/register", json={
        "email": "reader@example.com", "password": "other",
    })
    assert resp.status_code == 409
    assert resp.json()["code"] == "EMAIL_TAKEN"


async def test_register_email_stays_taken_after_delete(client, user, auth_headers):
    resp = await client.delete(
        f"/api/v1/accounts/{user.id}", headers=auth_headers(user.id),
    )
    assert resp.status_code == 200
    resp = await client.post("/api/v1/auth/register", json={
        "email": "reader@example.com", "password": "again",
    })
    assert resp.status_code == 409


async def test_register_rejects_bad_email(client):
    resp = await client.post("/api/v1/auth/register", json={
        "email": "not-an-email", "password": "pw",
    })
    assert resp.status_code == 400
    assert resp.json()["code"] == "VALIDATION_ERROR"


async def test_register_rejects_empty_password(client):
    resp = await client.post("/api/v1/auth/register", json={
        "email": "empty@example.com", "password": "",
    })
    assert resp.status_code == 400


async def test_login_returns_token(client, user):
    resp = await client.post("/api/v1/auth/login", json={
        "email": "reader@example.com", "password": "reader-pass",
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["account"]["id"] == user.id
    assert body["token"]


async def test_login_email_is_case_insensitive(client, user):
    resp = await client.post("/api/v1/auth/login", json={
        "email": "READER@example.com", "password": "reader-pass",
    })
    assert resp.status_code == 200


async def test_login_wrong_password(client, user):
    resp = await client.post("/api/v1/auth/login", json={
        "email": "reader@example.com", "password": "nope",
    })
    assert resp.status_code == 400
    body = resp.json()
    assert "token" not in body
    assert body["error"] == "Incorrect password"
    assert "jwt" not in resp.cookies


async def test_login_overlong_password_is_400(client, user):
    resp = await client.post("/api/v1/auth/login", json={
        "email": "reader@example.com", "password": "x" * 80,
    })
    assert resp.status_code == 400
    assert resp.json()["code"] == "VALIDATION_ERROR"


async def test_login_unknown_email(client):
    resp = await client.post("/api/v1/auth/login", json={
        "email": "ghost@example.com", "password": "whatever",
    })
    assert resp.status_code == 404


async def test_login_token_opens_protected_route(client, user):
    login = await client.post("/api/v1/auth/login", json={
        "email": "reader@example.com", "password": "reader-pass",
    })
    token = login.json()["token"]
    resp = await client.get(
        "/api/v1/accounts/me", headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 200
    assert resp.json()["email"] == "reader@example.com"


async def test_cookie_alone_authenticates(client, user):
    login = await client.post("/api/v1/auth/login", json={
        "email": "reader@example.com", "password": "reader-pass",
    })
    client.cookies.set("jwt", login.json()["token"])
    resp = await client.get("/api/v1/accounts/me")
    assert resp.status_code == 200


async def test_logout_clears_cookie(client, user):
    resp = await client.post("/api/v1/auth/logout")
    assert resp.status_code == 200
    assert resp.json()["message"] == "Logged out successfully"
    assert "Max-Age=0" in resp.headers["set-cookie"]


async def test_duplicate_register_error_is_message_string(client, user):
    resp = await client.post("/api/v1/auth/register", json={
        "email": "reader@example.com", "password": "other",
    })
    body = resp.json()
    assert body["error"] == "User already exists"
    assert body["code"] == "EMAIL_TAKEN"
    assert body["category"] == "conflict"
