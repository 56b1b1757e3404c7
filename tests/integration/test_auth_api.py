"""Integration tests for registration, login and logout endpoints."""

from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient

MAIN_SITE_URL = "http://www.trainerdesk.com"
TEST_PASSWORD = "correct-horse-battery"


def _registration(**overrides) -> dict:
    data = {
        "name": "Jane Doe",
        "email": "jane@acmegym.io",
        "business_name": "Acme Gym",
        "password": "password123",
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
class TestRegister:
    async def test_register_returns_created_account(self, test_client):
        response = await test_client.post("/api/auth/register", json=_registration())

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Account created successfully"
        assert data["user"]["email"] == "jane@acmegym.io"
        assert data["user"]["name"] == "Jane Doe"
        assert data["trainer"]["subdomain"] == "acme-gym"
        UUID(data["user"]["id"])
        UUID(data["trainer"]["id"])
        assert "password" not in str(data)

    async def test_colliding_business_names_get_suffixes(self, test_client):
        first = await test_client.post("/api/auth/register", json=_registration())
        second = await test_client.post(
            "/api/auth/register", json=_registration(email="bob@acmegym.io")
        )

        assert first.json()["trainer"]["subdomain"] == "acme-gym"
        assert second.json()["trainer"]["subdomain"] == "acme-gym-2"

    async def test_duplicate_email_conflict(self, test_client):
        await test_client.post("/api/auth/register", json=_registration())

        response = await test_client.post(
            "/api/auth/register", json=_registration(business_name="Other Gym")
        )

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "email_taken"
        assert body["message"] == "User with this email already exists"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"email": "not-an-email"},
            {"password": "short"},
            {"name": "J"},
            {"business_name": "A"},
        ],
    )
    async def test_invalid_input(self, test_client, overrides):
        response = await test_client.post("/api/auth/register", json=_registration(**overrides))

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "validation_error"
        assert body["details"]["errors"]

    async def test_missing_fields(self, test_client):
        response = await test_client.post("/api/auth/register", json={"email": "a@b.io"})

        assert response.status_code == 422

    async def test_business_name_without_letters(self, test_client):
        response = await test_client.post(
            "/api/auth/register", json=_registration(business_name="!!!")
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "invalid_subdomain"

    async def test_subdomain_exhaustion(self, test_settings, db_session):
        """Test every candidate being taken yields a conflict."""
        from trainerdesk.api.app import create_app
        from trainerdesk.db.config import get_db

        app = create_app(settings=test_settings.model_copy(update={"SUBDOMAIN_MAX_ATTEMPTS": 2}))

        async def _get_test_db():
            yield db_session

        app.dependency_overrides[get_db] = _get_test_db

        async with AsyncClient(transport=ASGITransport(app=app), base_url=MAIN_SITE_URL) as client:
            for email in ("a@acmegym.io", "b@acmegym.io"):
                ok = await client.post("/api/auth/register", json=_registration(email=email))
                assert ok.status_code == 201

            response = await client.post(
                "/api/auth/register", json=_registration(email="c@acmegym.io")
            )

        assert response.status_code == 409
        body = response.json()
        assert body["error_code"] == "subdomain_unavailable"
        assert body["message"] == "Unable to generate unique subdomain"
        assert body["details"] == {"base_label": "acme-gym", "attempts": 2}


@pytest.mark.asyncio
class TestLogin:
    async def test_login_returns_token_and_user(self, test_client, registered_account):
        response = await test_client.post(
            "/api/auth/login",
            json={"email": registered_account["email"], "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"]["email"] == registered_account["email"]
        assert data["user"]["role"] == "PRIMARY_TRAINER"
        assert data["user"]["trainer_id"] == registered_account["trainer"]["id"]

    async def test_login_sets_session_cookie(self, test_client, registered_account):
        response = await test_client.post(
            "/api/auth/login",
            json={"email": registered_account["email"], "password": TEST_PASSWORD},
        )

        cookie = response.headers["set-cookie"]
        assert cookie.startswith("authjs.session-token=")
        assert "HttpOnly" in cookie
        assert "samesite=lax" in cookie.lower()

    async def test_session_cookie_authenticates(self, test_client, registered_account):
        await test_client.post(
            "/api/auth/login",
            json={"email": registered_account["email"], "password": TEST_PASSWORD},
        )

        response = await test_client.get("/api/dashboard/stats")

        assert response.status_code == 200

    async def test_wrong_password(self, test_client, registered_account):
        response = await test_client.post(
            "/api/auth/login",
            json={"email": registered_account["email"], "password": "wrong-password"},
        )

        assert response.status_code == 401
        body = response.json()
        assert body["error_code"] == "unauthorized"
        assert body["message"] == "Invalid email or password"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_unknown_email(self, test_client):
        response = await test_client.post(
            "/api/auth/login", json={"email": "ghost@acmegym.io", "password": "whatever"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


@pytest.mark.asyncio
class TestLogout:
    async def test_logout_clears_cookies(self, test_client):
        response = await test_client.post("/api/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Logged out successfully"}

        cleared = response.headers.get_list("set-cookie")
        names = {header.split("=", 1)[0] for header in cleared}
        assert names == {
            "authjs.session-token",
            "authjs.csrf-token",
            "authjs.callback-url",
            "__Secure-authjs.session-token",
            "__Secure-authjs.csrf-token",
            "__Secure-authjs.callback-url",
        }

    async def test_logout_ends_cookie_session(self, test_client, registered_account):
        await test_client.post(
            "/api/auth/login",
            json={"email": registered_account["email"], "password": TEST_PASSWORD},
        )

        await test_client.post("/api/auth/logout")
        response = await test_client.get("/api/dashboard/stats")

        assert response.status_code == 401
