"""Registration and login endpoints.

Covers:
1. Registration, duplicate prevention, input validation
2. Login, merged failure reporting
3. Legacy hash upgrade on login
4. Envelope shape and method mismatches
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from helpers import create_user_row, register_user
from immy.auth.jwt import verify_token
from immy.auth.password import hash_password
from immy.db.models import User


# ═══════════════════════════════════════════════════════════
# Registration
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_register_returns_user_and_token(client):
    r = await client.post(
        "/register",
        json={"name": "Alice", "email": "a@x.com", "password": "pw12345"},
    )
    assert r.status_code == 201
    body = r.json()
    assert body["status"] is True
    assert body["message"] == "Registration successful"
    data = body["data"]
    assert data["name"] == "Alice"
    assert data["email"] == "a@x.com"
    assert verify_token(data["token"]).subject == data["id"]


@pytest.mark.asyncio
async def test_register_duplicate_email(client, db_session):
    """Second registration is rejected and no second row is written."""
    await register_user(client, email="dup@x.com")

    r = await client.post(
        "/register",
        json={"name": "Other", "email": "dup@x.com", "password": "another"},
    )
    assert r.status_code == 409
    assert r.json() == {"status": False, "message": "Email already registered"}

    count = await db_session.scalar(
        select(func.count()).select_from(User).where(User.email == "dup@x.com")
    )
    assert count == 1


@pytest.mark.asyncio
async def test_register_duplicate_email_is_case_insensitive(client):
    await register_user(client, email="Bob@X.com")
    r = await client.post(
        "/register",
        json={"name": "Bob", "email": "bob@x.com", "password": "pw12345"},
    )
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_register_stores_email_lowercased(client):
    data = await register_user(client, email="  Carol@Example.COM ")
    assert data["email"] == "carol@example.com"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"email": "a@x.com", "password": "pw12345"},
        {"name": "Alice", "password": "pw12345"},
        {"name": "Alice", "email": "a@x.com"},
        {"name": "   ", "email": "a@x.com", "password": "pw12345"},
        {},
    ],
)
async def test_register_missing_fields(client, body):
    r = await client.post("/register", json=body)
    assert r.status_code == 422
    assert r.json() == {"status": False, "message": "Missing required fields"}


@pytest.mark.asyncio
@pytest.mark.parametrize("email", ["not-an-email", "a@", "@x.com", "a b@x.com"])
async def test_register_invalid_email(client, email):
    r = await client.post(
        "/register", json={"name": "Alice", "email": email, "password": "pw12345"}
    )
    assert r.status_code == 422
    assert r.json()["message"] == "Invalid email format"


@pytest.mark.asyncio
async def test_register_non_json_body(client):
    r = await client.post(
        "/register", content="name=Alice", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 422
    assert r.json()["status"] is False


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success_token_subject_is_user_id(client):
    registered = await register_user(client, email="login@x.com", password="secret1")

    r = await client.post(
        "/login", json={"email": "login@x.com", "password": "secret1"}
    )
    assert r.status_code == 200
    body = r.json()
    assert body["status"] is True
    assert body["message"] == "Login successful"
    assert body["data"]["id"] == registered["id"]
    assert body["data"]["name"] == "Alice"
    assert verify_token(body["data"]["token"]).subject == registered["id"]


@pytest.mark.asyncio
async def test_login_email_is_case_insensitive(client):
    await register_user(client, email="case@x.com", password="secret1")
    r = await client.post("/login", json={"email": "CASE@x.com", "password": "secret1"})
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_login_wrong_password_and_unknown_email_look_the_same(client):
    await register_user(client, email="known@x.com", password="right-password")

    wrong_password = await client.post(
        "/login", json={"email": "known@x.com", "password": "wrong-password"}
    )
    unknown_email = await client.post(
        "/login", json={"email": "nobody@x.com", "password": "whatever"}
    )

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {
        "status": False,
        "message": "Invalid email or password",
    }


@pytest.mark.asyncio
async def test_login_missing_fields(client):
    r = await client.post("/login", json={"email": "a@x.com"})
    assert r.status_code == 422
    assert r.json() == {"status": False, "message": "Missing required fields"}


@pytest.mark.asyncio
async def test_login_upgrades_php_hash(client, db_session):
    php_hash = "$2y$" + hash_password("pw12345")[4:]
    user = await create_user_row(db_session, email="legacy@x.com", password_hash=php_hash)

    r = await client.post("/login", json={"email": "legacy@x.com", "password": "pw12345"})
    assert r.status_code == 200

    await db_session.refresh(user)
    assert user.password_hash.startswith("$2b$")


# ═══════════════════════════════════════════════════════════
# Method mismatch
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_get_on_login_not_allowed(client):
    r = await client.get("/login")
    assert r.status_code == 405
    assert r.json() == {"status": False, "message": "Method not allowed"}


@pytest.mark.asyncio
async def test_post_on_profile_not_allowed(client):
    r = await client.post("/profile", json={})
    assert r.status_code == 405
    assert r.json()["message"] == "Method not allowed"


# ═══════════════════════════════════════════════════════════
# Storage failures
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_storage_error_does_not_leak_driver_text(client, db_session, monkeypatch):
    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT secret", {}, Exception("driver secret text"))

    monkeypatch.setattr(db_session, "execute", failing_execute)

    r = await client.post("/login", json={"email": "a@x.com", "password": "pw12345"})
    assert r.status_code == 503
    assert r.json() == {"status": False, "message": "Service temporarily unavailable"}
    assert "secret" not in r.text
