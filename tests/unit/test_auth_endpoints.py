"""Unit tests for auth API endpoints.

Tests /auth/register, /auth/login, /auth/refresh and /auth/me using
FastAPI TestClient with mocked services.
"""

from unittest.mock import AsyncMock, patch

from roomdesk.models.user import Role
from roomdesk.services.auth_service import (
    EMAIL_TAKEN_MESSAGE,
    INVALID_REFRESH_MESSAGE,
    REVOKED_REFRESH_MESSAGE,
    TokenPair,
)
from roomdesk.services.errors import (
    AuthenticationFault,
    CredentialsFault,
    HashingError,
    StoreError,
    ValidationFault,
)

VALID_REGISTRATION = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "password": "secret1",
}


# ---------------------------------------------------------------------------
# POST /auth/register
# ---------------------------------------------------------------------------

class TestRegister:
    """Tests for POST /auth/register."""

    def test_register_success(self, client, regular_user):
        with patch("roomdesk.api.auth.AuthService") as MockAuthService:
            instance = MockAuthService.return_value
            instance.register = AsyncMock(return_value=regular_user)

            response = client.post("/auth/register", json=VALID_REGISTRATION)

        assert response.status_code == 201
        assert response.json() == {"status": "success", "message": "User registered successfully"}
        kwargs = instance.register.call_args.kwargs
        assert kwargs["email"] == "ada@example.com"
        assert kwargs["password"] == "secret1"
        assert "role" not in kwargs

    def test_register_ignores_role_in_body(self, client, regular_user):
        with patch("roomdesk.api.auth.AuthService") as MockAuthService:
            instance = MockAuthService.return_value
            instance.register = AsyncMock(return_value=regular_user)

            response = client.post("/auth/register", json={**VALID_REGISTRATION, "role": "ADMIN"})

        assert response.status_code == 201
        assert instance.register.call_args.kwargs.get("role", Role.USER) is Role.USER

    def test_register_duplicate_email(self, client):
        with patch("roomdesk.api.auth.AuthService") as MockAuthService:
            MockAuthService.return_value.register = AsyncMock(
                side_effect=ValidationFault.for_field("email", EMAIL_TAKEN_MESSAGE)
            )

            response = client.post("/auth/register", json=VALID_REGISTRATION)

        assert response.status_code == 422
        assert response.json() == {
            "status": "error",
            "errors": {"email": [EMAIL_TAKEN_MESSAGE]},
        }

    def test_register_short_names(self, client):
        response = client.post(
            "/auth/register",
            json={**VALID_REGISTRATION, "first_name": "A", "last_name": "B"},
        )

        assert response.status_code == 422
        errors = response.json()["errors"]
        assert errors["first_name"] == ["First name must be at least 2 characters long"]
        assert errors["last_name"] == ["Last name must be at least 2 characters long"]

    def test_register_short_password(self, client):
        response = client.post("/auth/register", json={**VALID_REGISTRATION, "password": "12345"})

        assert response.status_code == 422
        assert response.json()["errors"]["password"] == [
            "Password must be at least 6 characters long"
        ]

    def test_register_bad_email(self, client):
        response = client.post("/auth/register", json={**VALID_REGISTRATION, "email": "not-an-email"})

        assert response.status_code == 422
        assert "email" in response.json()["errors"]

    def test_register_missing_fields(self, client):
        response = client.post("/auth/register", json={})

        assert response.status_code == 422
        errors = response.json()["errors"]
        assert errors["first_name"] == ["first_name is required"]
        assert set(errors) == {"first_name", "last_name", "email", "password"}

    def test_register_hashing_failure(self, client):
        with patch("roomdesk.api.auth.AuthService") as MockAuthService:
            MockAuthService.return_value.register = AsyncMock(
                side_effect=HashingError("Failed to hash password.")
            )

            response = client.post("/auth/register", json=VALID_REGISTRATION)

        assert response.status_code == 500
        assert response.json()["status"] == "error"


# ---------------------------------------------------------------------------
# POST /auth/login
# ---------------------------------------------------------------------------

class TestLogin:
    """Tests for POST /auth/login."""

    def test_login_success(self, client):
        with patch("roomdesk.api.auth.AuthService") as MockAuthService:
            MockAuthService.return_value.login = AsyncMock(
                return_value=TokenPair(access_token="access-jwt", refresh_token="refresh-jwt")
            )

            response = client.post(
                "/auth/login", json={"email": "ada@example.com", "password": "secret1"}
            )

        assert response.status_code == 200
        assert response.json() == {
            "status": "success",
            "message": "Login successful",
            "access_token": "access-jwt",
            "refresh_token": "refresh-jwt",
        }

    def test_login_bad_credentials(self, client):
        with patch("roomdesk.api.auth.AuthService") as MockAuthService:
            MockAuthService.return_value.login = AsyncMock(side_effect=CredentialsFault())

            response = client.post(
                "/auth/login", json={"email": "ada@example.com", "password": "wrong-pw"}
            )

        assert response.status_code == 400
        assert response.json() == {"status": "error", "message": "Invalid email or password"}

    def test_login_short_password(self, client):
        response = client.post("/auth/login", json={"email": "ada@example.com", "password": "abc"})

        assert response.status_code == 422
        assert response.json()["errors"]["password"] == [
            "Password must be at least 4 characters long"
        ]

    def test_login_store_failure(self, client):
        with patch("roomdesk.api.auth.AuthService") as MockAuthService:
            MockAuthService.return_value.login = AsyncMock(side_effect=StoreError())

            response = client.post(
                "/auth/login", json={"email": "ada@example.com", "password": "secret1"}
            )

        assert response.status_code == 500
        assert response.json() == {"status": "error", "message": "Internal server error"}


# ---------------------------------------------------------------------------
# POST /auth/refresh
# ---------------------------------------------------------------------------

class TestRefresh:
    """Tests for POST /auth/refresh."""

    def test_refresh_success(self, client):
        with patch("roomdesk.api.auth.AuthService") as MockAuthService:
            instance = MockAuthService.return_value
            instance.refresh = AsyncMock(return_value="new-access-jwt")

            response = client.post("/auth/refresh", json={"refresh_token": "refresh-jwt"})

        assert response.status_code == 200
        assert response.json() == {"status": "success", "access_token": "new-access-jwt"}
        instance.refresh.assert_awaited_once_with("refresh-jwt")

    def test_refresh_invalid(self, client):
        with patch("roomdesk.api.auth.AuthService") as MockAuthService:
            MockAuthService.return_value.refresh = AsyncMock(
                side_effect=AuthenticationFault(INVALID_REFRESH_MESSAGE)
            )

            response = client.post("/auth/refresh", json={"refresh_token": "bad"})

        assert response.status_code == 401
        assert response.json() == {"status": "error", "message": INVALID_REFRESH_MESSAGE}

    def test_refresh_revoked(self, client):
        with patch("roomdesk.api.auth.AuthService") as MockAuthService:
            MockAuthService.return_value.refresh = AsyncMock(
                side_effect=AuthenticationFault(REVOKED_REFRESH_MESSAGE)
            )

            response = client.post("/auth/refresh", json={"refresh_token": "old"})

        assert response.status_code == 401
        assert response.json()["message"] == REVOKED_REFRESH_MESSAGE

    def test_refresh_missing_token(self, client):
        response = client.post("/auth/refresh", json={})

        assert response.status_code == 422
        assert response.json()["errors"] == {"refresh_token": ["refresh_token is required"]}


# ---------------------------------------------------------------------------
# GET /auth/me
# ---------------------------------------------------------------------------

class TestMe:
    """Tests for GET /auth/me."""

    def test_me_returns_identity(self, client, as_user, admin_user):
        as_user(admin_user.public())

        response = client.get("/auth/me")

        assert response.status_code == 200
        assert response.json() == {
            "status": "success",
            "data": {
                "id": 99,
                "first_name": "Grace",
                "last_name": "Hopper",
                "email": "grace@example.com",
                "role": "ADMIN",
            },
        }

    def test_me_requires_token(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401
