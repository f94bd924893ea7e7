"""
Tests for authentication: password hashing, tokens, register and login endpoints.
"""

import pytest
from fastapi import HTTPException

from shared.security.auth import get_bearer_token, sign_jwt, sign_user_token, verify_jwt
from shared.security.password import hash_password, needs_rehash, verify_password


class TestPasswordHashing:
    """Test password hashing utilities."""

    def test_hash_password_returns_bcrypt_hash(self):
        """Hash should return bcrypt format."""
        hashed = hash_password("mypassword")
        assert hashed.startswith("$2b$")

    def test_verify_password_correct(self):
        """Correct password should verify."""
        hashed = hash_password("mypassword")
        assert verify_password("mypassword", hashed) is True

    def test_verify_password_incorrect(self):
        """Incorrect password should not verify."""
        hashed = hash_password("mypassword")
        assert verify_password("wrongpassword", hashed) is False

    def test_plain_text_never_verifies(self):
        """A stored value that is not a bcrypt hash is rejected."""
        assert verify_password("plaintext", "plaintext") is False

    def test_needs_rehash_bcrypt(self):
        """Hashes made with the configured cost don't need rehashing."""
        hashed = hash_password("mypassword")
        assert needs_rehash(hashed) is False


class TestTokens:
    """Test JWT helpers."""

    def test_user_token_round_trip(self):
        """A signed user token verifies and carries the subject."""
        token = sign_user_token(42, "owner@test.com")
        payload = verify_jwt(token)
        assert payload["sub"] == "42"
        assert payload["email"] == "owner@test.com"
        assert payload["type"] == "access"

    def test_expired_token_rejected(self):
        """Expired tokens raise 401."""
        token = sign_jwt({"sub": "1"}, ttl_seconds=-10)
        with pytest.raises(HTTPException) as exc_info:
            verify_jwt(token)
        assert exc_info.value.status_code == 401

    def test_tampered_token_rejected(self):
        """A modified signature raises 401."""
        token = sign_user_token(1, "owner@test.com")
        with pytest.raises(HTTPException) as exc_info:
            verify_jwt(token[:-2] + ("aa" if not token.endswith("aa") else "bb"))
        assert exc_info.value.status_code == 401

    def test_bearer_header_parsing(self):
        """Only 'Bearer <token>' headers are accepted."""
        assert get_bearer_token("Bearer abc.def") == "abc.def"
        with pytest.raises(HTTPException):
            get_bearer_token("Basic abc")
        with pytest.raises(HTTPException):
            get_bearer_token(None)


class TestRegisterEndpoint:
    """Test POST /api/auth/register."""

    def test_register_success(self, client):
        """New email creates a user and never echoes the password."""
        response = client.post(
            "/api/auth/register",
            json={"name": "Ana", "email": "ana@test.com", "password": "secret123"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["email"] == "ana@test.com"
        assert "password" not in body["data"]

    def test_register_duplicate_email(self, client, seed_owner):
        """An existing email answers 400."""
        response = client.post(
            "/api/auth/register",
            json={"name": "Again", "email": "owner@test.com", "password": "secret123"},
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "User already exists"
        assert body["kind"] == "CONFLICT"

    def test_register_invalid_body(self, client):
        """Malformed input answers 400 with the failure envelope."""
        response = client.post(
            "/api/auth/register",
            json={"name": "Ana", "email": "not-an-email", "password": "secret123"},
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "VALIDATION"


class TestLoginEndpoint:
    """Test POST /api/auth/login."""

    def test_login_success(self, client, seed_owner):
        """Valid credentials return a token and the user view."""
        response = client.post(
            "/api/auth/login",
            json={"email": "owner@test.com", "password": "ownerpass123"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["token"]
        assert data["token_type"] == "Bearer"
        assert data["user"]["id"] == seed_owner.id
        assert "password" not in data["user"]

    def test_login_invalid_email(self, client, seed_owner):
        """Unknown email fails with 401."""
        response = client.post(
            "/api/auth/login",
            json={"email": "nobody@test.com", "password": "ownerpass123"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid email or password"

    def test_login_invalid_password(self, client, seed_owner):
        """Wrong password fails with 401."""
        response = client.post(
            "/api/auth/login",
            json={"email": "owner@test.com", "password": "wrongpassword"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid email or password"

    def test_protected_route_requires_token(self, client):
        """Owner routes answer 401 without a bearer token."""
        response = client.get("/api/user/profile")
        assert response.status_code == 401
