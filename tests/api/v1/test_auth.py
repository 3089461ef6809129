"""
Tests for authentication API endpoints.

These tests cover the /api/v1/auth endpoints including:
- Registration
- Login
- Reading and updating the caller's profile
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import UserRole
from app.models import Users
from tests.conftest import DEFAULT_PASSWORD, auth_headers


@pytest.mark.api
class TestRegister:
    """Tests for POST /api/v1/auth/register endpoint."""

    async def test_register_artist(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "username": "newartist",
                "email": "newartist@example.com",
                "password": "Password123",
                "role": "artist",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "User registered successfully"
        assert data["token_type"] == "bearer"
        assert data["token"]
        assert data["user"]["role"] == "artist"
        assert "password" not in data["user"]

    async def test_register_admin_refused(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "username": "boss",
                "email": "boss@example.com",
                "password": "Password123",
                "role": "admin",
            },
        )

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": 'role: Role must be either "artist" or "curator"',
        }

    async def test_register_weak_password(self, client: AsyncClient):
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "username": "weak",
                "email": "weak@example.com",
                "password": "password",
                "role": "artist",
            },
        )

        assert response.status_code == 400
        assert "digit" in response.json()["message"]

    async def test_register_duplicate(self, client: AsyncClient, artist: Users):
        response = await client.post(
            "/api/v1/auth/register",
            json={
                "username": "painter",
                "email": "other@example.com",
                "password": "Password123",
                "role": "artist",
            },
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Username or email already exists"

    async def test_register_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/register", json={"username": "x"})
        assert response.status_code == 400
        assert response.json()["success"] is False


@pytest.mark.api
class TestLogin:
    """Tests for POST /api/v1/auth/login endpoint."""

    async def test_login_success(self, client: AsyncClient, artist: Users):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "painter@example.com", "password": DEFAULT_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["user"]["username"] == "painter"
        assert data["expires_in"] == 24 * 60 * 60

    async def test_login_token_authenticates(self, client: AsyncClient, artist: Users):
        login = await client.post(
            "/api/v1/auth/login",
            json={"email": "painter@example.com", "password": DEFAULT_PASSWORD},
        )
        token = login.json()["token"]

        response = await client.get(
            "/api/v1/auth/profile", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.json()["user"]["user_id"] == artist.user_id

    async def test_login_wrong_password(self, client: AsyncClient, artist: Users):
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "painter@example.com", "password": "WrongPass1"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


@pytest.mark.api
class TestProfile:
    """Tests for GET/PUT /api/v1/auth/profile."""

    async def test_profile_requires_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/profile")

        assert response.status_code == 401
        assert response.json()["message"] == "Access denied. No token provided."
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_profile_rejects_bad_token(self, client: AsyncClient):
        response = await client.get(
            "/api/v1/auth/profile", headers={"Authorization": "Bearer nonsense"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token."

    async def test_token_for_deleted_user(self, client: AsyncClient):
        ghost = Users(
            user_id=4242, username="ghost", email="g@example.com", password="x", role=UserRole.artist
        )

        response = await client.get("/api/v1/auth/profile", headers=auth_headers(ghost))

        assert response.status_code == 401
        assert response.json()["message"] == "User not found"

    async def test_update_profile(self, client: AsyncClient, artist: Users):
        response = await client.put(
            "/api/v1/auth/profile",
            json={"bio": "Landscapes mostly"},
            headers=auth_headers(artist),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Profile updated successfully"
        assert data["user"]["bio"] == "Landscapes mostly"

    async def test_update_profile_conflict(
        self, client: AsyncClient, artist: Users, other_artist: Users
    ):
        response = await client.put(
            "/api/v1/auth/profile",
            json={"email": "sculptor@example.com"},
            headers=auth_headers(artist),
        )

        assert response.status_code == 409

    async def test_update_profile_empty(self, client: AsyncClient, artist: Users):
        response = await client.put(
            "/api/v1/auth/profile", json={}, headers=auth_headers(artist)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "No fields to update"
