"""
Test suite for signup and login endpoints.

System role: Verification of account HTTP API
"""

import pytest

from mini_perplexity.api.deps import get_auth_service
from mini_perplexity.application.services.auth_service import AuthService
from mini_perplexity.configs.auth import AuthSettings


@pytest.fixture
def auth_app(app, test_async_db):
    service = AuthService(db=test_async_db, settings=AuthSettings(bcrypt_rounds=4))
    app.dependency_overrides[get_auth_service] = lambda: service
    return app


@pytest.mark.usefixtures("auth_app")
class TestAuthEndpoints:
    """Test suite for /api/auth."""

    @pytest.mark.asyncio
    async def test_signup_then_login_should_return_user(self, client) -> None:
        # Act
        signup = await client.post(
            "/api/auth/signup",
            json={"email": "ada@example.com", "password": "s3cret!", "name": "Ada"},
        )
        login = await client.post(
            "/api/auth/login", json={"email": "ada@example.com", "password": "s3cret!"}
        )

        # Assert
        assert signup.status_code == 200
        assert signup.json() == {"success": True}
        assert login.status_code == 200
        user = login.json()["user"]
        assert user["email"] == "ada@example.com"
        assert user["name"] == "Ada"
        assert "password_hash" not in user

    @pytest.mark.asyncio
    async def test_duplicate_signup_should_return_400(self, client) -> None:
        # Arrange
        body = {"email": "ada@example.com", "password": "s3cret!"}
        await client.post("/api/auth/signup", json=body)

        # Act
        response = await client.post("/api/auth/signup", json=body)

        # Assert
        assert response.status_code == 400
        assert response.json()["detail"] == "Email already in use"

    @pytest.mark.asyncio
    async def test_signup_with_short_password_should_return_400(self, client) -> None:
        response = await client.post(
            "/api/auth/signup", json={"email": "ada@example.com", "password": "123"}
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_login_with_wrong_password_should_return_401(self, client) -> None:
        # Arrange
        await client.post("/api/auth/signup", json={"email": "ada@example.com", "password": "s3cret!"})

        # Act
        response = await client.post(
            "/api/auth/login", json={"email": "ada@example.com", "password": "nope-nope"}
        )

        # Assert
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"
