"""
Unit tests for access-token validation.
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import HTTPException

from backend.auth import get_current_user, validate_token
from backend.settings import Settings

SECRET = "test-jwt-secret"


def make_token(payload, secret=SECRET, algorithm="HS256"):
    return jwt.encode(payload, secret, algorithm=algorithm)


@pytest.mark.unit
class TestValidateToken:
    """Tests for validate_token."""

    def test_returns_sub_claim(self):
        token = make_token({"sub": "user-1"})
        assert validate_token(token, SECRET) == "user-1"

    def test_falls_back_to_legacy_id_claim(self):
        token = make_token({"_id": "665f1c2e9b1e8a3d4c5b6a79"})
        assert validate_token(token, SECRET) == "665f1c2e9b1e8a3d4c5b6a79"

    def test_expired_token(self):
        token = make_token({
            "sub": "user-1",
            "exp": datetime.now(timezone.utc) - timedelta(minutes=5),
        })
        with pytest.raises(HTTPException) as exc_info:
            validate_token(token, SECRET)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Token expired"

    def test_wrong_secret(self):
        token = make_token({"sub": "user-1"}, secret="another-secret")
        with pytest.raises(HTTPException) as exc_info:
            validate_token(token, SECRET)
        assert exc_info.value.detail == "Invalid token"

    def test_garbage_token(self):
        with pytest.raises(HTTPException) as exc_info:
            validate_token("not-a-jwt", SECRET)
        assert exc_info.value.status_code == 401

    def test_missing_user_claim(self):
        token = make_token({"role": "user"})
        with pytest.raises(HTTPException) as exc_info:
            validate_token(token, SECRET)
        assert exc_info.value.detail == "Token missing user ID"


@pytest.mark.unit
class TestGetCurrentUser:
    """Tests for the get_current_user dependency."""

    @pytest.fixture
    def settings(self):
        return Settings(jwt_secret=SECRET, _env_file=None)

    @pytest.mark.asyncio
    async def test_valid_bearer_token(self, settings):
        token = make_token({"sub": "user-1"})
        assert await get_current_user(f"Bearer {token}", settings) == "user-1"

    @pytest.mark.asyncio
    async def test_missing_header(self, settings):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(None, settings)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_non_bearer_header(self, settings):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user("Basic dXNlcjpwYXNz", settings)
        assert exc_info.value.detail == "Invalid authorization header format"

    @pytest.mark.asyncio
    async def test_secret_not_configured(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        settings = Settings(jwt_secret=None, _env_file=None)
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user("Bearer abc", settings)
        assert exc_info.value.status_code == 500
