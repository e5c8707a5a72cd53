"""Tests for authentication and user endpoints."""

from unittest.mock import MagicMock

import pytest
from httpx import AsyncClient

from talentnest.core.exceptions import UnauthorizedException
from talentnest.core.security import create_refresh_token, decode_access_token
from talentnest.services import auth_service
from talentnest.services.auth_service import AuthService


@pytest.fixture
def firebase_claims(monkeypatch) -> dict:
    """Replace Firebase token verification with fixed claims."""
    claims = {
        "uid": "firebase-uid-ada",
        "email": "ada.obi@unilag.edu.ng",
        "email_verified": True,
        "name": "Ada Obi",
        "picture": "https://example.org/ada.png",
    }

    async def fake_verify(id_token: str) -> dict:
        if id_token != "valid-token":
            raise ValueError("Invalid Firebase ID token")
        return claims

    monkeypatch.setattr(auth_service, "verify_firebase_token", fake_verify)
    return claims


@pytest.mark.asyncio
class TestFirebaseSignIn:
    """Tests for /auth/firebase/verify."""

    async def test_first_sign_in_registers_artisan(self, client: AsyncClient, firebase_claims):
        response = await client.post(
            "/api/v1/auth/firebase/verify",
            json={
                "id_token": "valid-token",
                "role": "artisan",
                "matric_number": "21-52HL001",
                "phone": "08012345678",
                "department": "Fine Arts",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["email"] == firebase_claims["email"]
        assert body["user"]["name"] == "Ada Obi"
        assert body["user"]["role"] == "artisan"
        assert body["user"]["is_verified"] is False

        me = await client.get(
            "/api/v1/users/me", headers={"Authorization": f"Bearer {body['access_token']}"}
        )
        assert me.status_code == 200
        profile = me.json()
        assert profile["matric_number"] == "21-52hl001"
        assert profile["phone"] == "+2348012345678"
        assert profile["first_name"] == "Ada"
        assert profile["last_name"] == "Obi"

    async def test_returning_user_keeps_original_role(self, client: AsyncClient, firebase_claims):
        first = await client.post(
            "/api/v1/auth/firebase/verify", json={"id_token": "valid-token", "role": "student"}
        )
        second = await client.post(
            "/api/v1/auth/firebase/verify", json={"id_token": "valid-token", "role": "artisan"}
        )

        assert first.json()["user"]["id"] == second.json()["user"]["id"]
        assert second.json()["user"]["role"] == "student"

    async def test_admin_role_cannot_be_self_selected(self, client: AsyncClient, firebase_claims):
        response = await client.post(
            "/api/v1/auth/firebase/verify", json={"id_token": "valid-token", "role": "admin"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_input"

    async def test_bad_matric_number(self, client: AsyncClient, firebase_claims):
        response = await client.post(
            "/api/v1/auth/firebase/verify",
            json={"id_token": "valid-token", "matric_number": "ABC123"},
        )

        assert response.status_code == 400

    async def test_invalid_firebase_token(self, client: AsyncClient, firebase_claims):
        response = await client.post(
            "/api/v1/auth/firebase/verify", json={"id_token": "forged"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"


@pytest.mark.asyncio
class TestTokens:
    """Tests for refresh and logout."""

    async def test_refresh(self, client: AsyncClient, artisan_user):
        refresh = create_refresh_token(data={"sub": str(artisan_user["id"])})

        response = await client.post("/api/v1/auth/refresh", json={"refresh_token": refresh})

        assert response.status_code == 200
        payload = decode_access_token(response.json()["access_token"])
        assert payload["sub"] == str(artisan_user["id"])

    async def test_access_token_cannot_refresh(self, client: AsyncClient, artisan_headers):
        access = artisan_headers["Authorization"].removeprefix("Bearer ")

        response = await client.post("/api/v1/auth/refresh", json={"refresh_token": access})

        assert response.status_code == 401

    async def test_refresh_token_cannot_authenticate(self, client: AsyncClient, artisan_user):
        refresh = create_refresh_token(data={"sub": str(artisan_user["id"])})

        response = await client.get(
            "/api/v1/users/me", headers={"Authorization": f"Bearer {refresh}"}
        )

        assert response.status_code == 401

    async def test_logout(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/logout", json={"refresh_token": "anything"})

        assert response.status_code == 204


def test_revoked_refresh_token_is_refused():
    cache = MagicMock()
    cache.exists.return_value = True
    service = AuthService(cache)
    refresh = create_refresh_token(data={"sub": "user-1"})

    with pytest.raises(UnauthorizedException):
        service.refresh_access_token(refresh)
    cache.exists.assert_called_once_with(f"blacklist:{refresh}")


def test_revoke_blacklists_token():
    cache = MagicMock()

    AuthService(cache).revoke_token("tok")

    cache.set.assert_called_once_with("blacklist:tok", "1", ttl=AuthService.REVOCATION_TTL)


@pytest.mark.asyncio
class TestUserEndpoints:
    """Tests for /users/me and /admin/users."""

    async def test_update_me_cannot_change_role(self, client: AsyncClient, student_headers):
        response = await client.patch(
            "/api/v1/users/me", json={"role": "admin"}, headers=student_headers
        )

        assert response.status_code == 400

    async def test_update_me(self, client: AsyncClient, student_headers):
        response = await client.patch(
            "/api/v1/users/me",
            json={"department": "Architecture", "phone": "+2349012345678"},
            headers=student_headers,
        )

        assert response.status_code == 200
        assert response.json()["department"] == "Architecture"
        assert response.json()["role"] == "student"

    async def test_deactivated_user_is_blocked(
        self, client: AsyncClient, user_factory, headers_for
    ):
        user = await user_factory(role="artisan", is_active=False)

        response = await client.get("/api/v1/users/me", headers=headers_for(user["id"]))

        assert response.status_code == 403

    async def test_admin_lists_users(
        self, client: AsyncClient, admin_headers, artisan_user, student_user
    ):
        response = await client.get(
            "/api/v1/admin/users", params={"role": "artisan"}, headers=admin_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["users"][0]["email"] == artisan_user["email"]

    async def test_student_cannot_list_users(self, client: AsyncClient, student_headers):
        response = await client.get("/api/v1/admin/users", headers=student_headers)

        assert response.status_code == 403
        assert response.json()["error"] == "unauthorized"
