"""Tests for /api/auth: registration, login, session status and rate limiting."""
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from quotewatch.config import RateLimit
from quotewatch.db.models import User
from quotewatch.main import create_app
from quotewatch.utils import utc_now
from tests.conftest import PASSWORD, make_settings, register, registration


def test_register_returns_sanitized_free_user(client: TestClient):
    response = client.post("/api/auth/register", json=registration("  Jane@Example.com "))

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    user = body["data"]["user"]
    assert user["email"] == "jane@example.com"
    assert user["firstName"] == "Jane"
    assert user["isPremium"] is False
    assert "passwordHash" not in user
    assert "password_hash" not in user
    assert client.cookies.get("token")


def test_register_sets_httponly_strict_cookie(client: TestClient):
    response = client.post("/api/auth/register", json=registration())
    set_cookie = response.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "samesite=strict" in set_cookie


def test_register_rejects_duplicate_email_in_any_case(client: TestClient):
    register(client, "jane@example.com")
    response = client.post("/api/auth/register", json=registration("JANE@EXAMPLE.COM"))

    assert response.status_code == 409
    assert response.json() == {
        "success": False,
        "error": "This email address is already in use",
    }


def test_register_reports_all_validation_errors(client: TestClient):
    response = client.post(
        "/api/auth/register",
        json=registration("bad", password="abc", confirmPassword="abd", firstName=""),
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert "Invalid email address" in error
    assert "Passwords do not match" in error
    assert "First name is required" in error


def test_register_rejects_password_longer_than_bcrypt_reads(client: TestClient):
    long_password = "a1" * 36 + "x"
    response = client.post(
        "/api/auth/register",
        json=registration(password=long_password, confirmPassword=long_password),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Password cannot exceed 72 bytes"


def test_register_with_empty_body(client: TestClient):
    response = client.post("/api/auth/register", json={})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_login_succeeds_with_correct_password(client: TestClient):
    register(client)
    client.cookies.clear()

    response = client.post(
        "/api/auth/login", json={"email": "JANE@example.com", "password": PASSWORD}
    )

    assert response.status_code == 200
    assert response.json()["data"]["user"]["email"] == "jane@example.com"
    assert client.cookies.get("token")


def test_login_does_not_reveal_which_part_was_wrong(client: TestClient):
    register(client)
    client.cookies.clear()

    unknown = client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": PASSWORD}
    )
    wrong = client.post(
        "/api/auth/login", json={"email": "jane@example.com", "password": "wrong999"}
    )

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {
        "success": False,
        "error": "Invalid email or password",
    }
    assert "set-cookie" not in wrong.headers


def test_status_is_anonymous_without_a_session(client: TestClient):
    response = client.get("/api/auth/status")
    assert response.status_code == 200
    assert response.json() == {"success": True, "authenticated": False}


def test_status_with_garbage_token_is_anonymous(client: TestClient):
    response = client.get("/api/auth/status", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 200
    assert response.json()["authenticated"] is False


def test_status_and_verify_with_session(client: TestClient, registered):
    status = client.get("/api/auth/status").json()
    assert status["authenticated"] is True
    assert status["data"]["user"]["id"] == registered["id"]

    verify = client.get("/api/auth/verify")
    assert verify.status_code == 200
    assert verify.json()["data"]["user"]["email"] == registered["email"]


def test_verify_without_token(client: TestClient):
    response = client.get("/api/auth/verify")
    assert response.status_code == 401
    assert response.json()["error"] == "Authentication token required"


def test_bearer_header_works_without_cookie(client: TestClient, app, registered):
    token = client.cookies.get("token")
    other = TestClient(app)

    response = other.get("/api/auth/verify", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["data"]["user"]["id"] == registered["id"]


def test_expired_token_is_rejected(client: TestClient, app, registered):
    token_service = app.state.token_service
    user = User(id=registered["id"], email=registered["email"], password_hash="unused")
    stale = token_service.issue(user, now=utc_now() - timedelta(days=8))

    response = TestClient(app).get(
        "/api/auth/verify", headers={"Authorization": f"Bearer {stale}"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "Session expired, please log in again"


def test_logout_clears_the_cookie(client: TestClient, registered):
    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert "max-age=0" in response.headers["set-cookie"].lower()
    assert client.get("/api/auth/status").json()["authenticated"] is False


@pytest.fixture
def strict_app(engine, provider):
    settings = make_settings(
        login_rate_limit=RateLimit(count=2, window_seconds=900),
        register_rate_limit=RateLimit(count=1, window_seconds=3600),
    )
    return create_app(settings, engine=engine, quote_provider=provider)


def test_login_is_rate_limited(strict_app):
    with TestClient(strict_app) as client:
        body = {"email": "jane@example.com", "password": "wrong999"}
        assert client.post("/api/auth/login", json=body).status_code == 401
        assert client.post("/api/auth/login", json=body).status_code == 401

        blocked = client.post("/api/auth/login", json=body)

    assert blocked.status_code == 429
    assert blocked.json()["success"] is False
    assert "login attempts" in blocked.json()["error"]
    assert int(blocked.headers["retry-after"]) > 0


def test_register_is_rate_limited(strict_app):
    with TestClient(strict_app) as client:
        register(client, "first@example.com")
        blocked = client.post("/api/auth/register", json=registration("second@example.com"))

    assert blocked.status_code == 429
    assert "sign-up attempts" in blocked.json()["error"]
