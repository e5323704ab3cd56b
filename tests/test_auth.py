# =============================================================================
# tests/test_auth.py - Authentication Tests
# =============================================================================
# This module contains tests for:
# - Supabase JWT verification (HS256)
# - /api/auth/me, /verify, /password and /account
#
# Supabase admin calls are patched on SupabaseClient.
# =============================================================================

import time
from unittest.mock import patch
from uuid import UUID

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from jose import jwt

from app.auth.dependencies import decode_access_token
from app.config import settings
from app.main import app
from lib.supabase_client import SupabaseClientError

USER_ID = "550e8400-e29b-41d4-a716-446655440000"


def make_token(secret=None, **claims) -> str:
    payload = {
        "sub": USER_ID,
        "email": "member@example.com",
        "aud": "authenticated",
        "exp": int(time.time()) + 3600,
        "iat": int(time.time()),
    }
    payload.update(claims)
    return jwt.encode(payload, secret or settings.SUPABASE_JWT_SECRET, algorithm="HS256")


def auth_headers(**claims) -> dict:
    return {"Authorization": f"Bearer {make_token(**claims)}"}


@pytest.fixture
def client():
    return TestClient(app)


# =============================================================================
# Token Verification Tests
# =============================================================================

class TestDecodeAccessToken:
    """Test JWT verification."""

    def test_valid_token(self):
        user = decode_access_token(make_token())

        assert user.id == UUID(USER_ID)
        assert user.email == "member@example.com"

    def test_expired_token(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(make_token(exp=int(time.time()) - 60))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token has expired"

    def test_wrong_secret(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(make_token(secret="another-secret"))

        assert exc_info.value.status_code == 401

    def test_wrong_audience(self):
        with pytest.raises(HTTPException):
            decode_access_token(make_token(aud="anon"))

    def test_malformed_user_id(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(make_token(sub="not-a-uuid"))

        assert exc_info.value.detail == "Invalid token: malformed user ID"

    def test_garbage_token(self):
        with pytest.raises(HTTPException):
            decode_access_token("not.a.jwt")


# =============================================================================
# Route Tests
# =============================================================================

class TestAuthRoutes:
    """Test the account endpoints."""

    def test_verify(self, client):
        response = client.get("/api/auth/verify", headers=auth_headers())

        assert response.status_code == 200
        assert response.json() == {"valid": True, "user_id": USER_ID, "email": "member@example.com"}

    def test_requires_token(self, client):
        response = client.get("/api/auth/verify")

        assert response.status_code in (401, 403)

    def test_me(self, client):
        record = {
            "id": USER_ID,
            "email": "member@example.com",
            "created_at": "2026-01-15T10:30:00+00:00",
            "app_metadata": {"provider": "kakao"},
        }
        with patch("app.auth.routes.SupabaseClient.fetch_user", return_value=record):
            response = client.get("/api/auth/me", headers=auth_headers())

        body = response.json()
        assert response.status_code == 200
        assert body["id"] == USER_ID
        assert body["provider"] == "kakao"
        assert body["created_at"].startswith("2026-01-15T10:30:00")

    def test_me_falls_back_to_token(self, client):
        with patch("app.auth.routes.SupabaseClient.fetch_user", return_value=None):
            response = client.get("/api/auth/me", headers=auth_headers())

        assert response.json() == {
            "id": USER_ID,
            "email": "member@example.com",
            "provider": None,
            "created_at": None,
        }

    def test_change_password(self, client):
        with patch("app.auth.routes.SupabaseClient.update_password") as update:
            response = client.post(
                "/api/auth/password",
                json={"new_password": "abcd1234", "confirm_password": "abcd1234"},
                headers=auth_headers(),
            )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        update.assert_called_once_with(UUID(USER_ID), "abcd1234")

    def test_password_too_short(self, client):
        with patch("app.auth.routes.SupabaseClient.update_password") as update:
            response = client.post(
                "/api/auth/password",
                json={"new_password": "abc", "confirm_password": "abc", "locale": "en"},
                headers=auth_headers(),
            )

        assert response.status_code == 400
        assert response.json()["error"] == "Password must be at least 8 characters."
        update.assert_not_called()

    def test_null_password_is_too_short(self, client):
        with patch("app.auth.routes.SupabaseClient.update_password") as update:
            response = client.post(
                "/api/auth/password",
                json={"new_password": None, "confirm_password": None, "locale": "en"},
                headers=auth_headers(),
            )

        assert response.status_code == 400
        assert response.json()["error"] == "Password must be at least 8 characters."
        update.assert_not_called()

    def test_password_mismatch(self, client):
        response = client.post(
            "/api/auth/password",
            json={"new_password": "abcd1234", "confirm_password": "abcd12345"},
            headers=auth_headers(),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "비밀번호가 일치하지 않습니다."

    def test_password_rejected_by_supabase_is_translated(self, client):
        error = SupabaseClientError("Password should contain at least one character of each: abc, 123")
        with patch("app.auth.routes.SupabaseClient.update_password", side_effect=error):
            response = client.post(
                "/api/auth/password",
                json={"new_password": "abcdefgh", "confirm_password": "abcdefgh", "locale": "en"},
                headers=auth_headers(),
            )

        assert response.status_code == 400
        assert response.json()["error"] == "Password must include letters and numbers."

    def test_delete_account(self, client):
        with patch("app.auth.routes.SupabaseClient.delete_user") as delete:
            response = client.delete("/api/auth/account", headers=auth_headers())

        assert response.status_code == 200
        assert response.json() == {"success": True}
        delete.assert_called_once_with(UUID(USER_ID))

    def test_delete_account_failure(self, client):
        with patch("app.auth.routes.SupabaseClient.delete_user", side_effect=SupabaseClientError("nope")):
            response = client.delete("/api/auth/account", params={"locale": "en"}, headers=auth_headers())

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to delete the account. Please try again later."
