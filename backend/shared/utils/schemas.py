"""
Shared Pydantic schemas for authentication and user accounts.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from shared.config.constants import Limits
from shared.utils.validators import validate_image_url


def _password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > Limits.MAX_PASSWORD_BYTES:
        raise ValueError(f"Password too long (max {Limits.MAX_PASSWORD_BYTES} bytes)")
    return value


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    """Owner registration body."""

    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    email: EmailStr
    password: str = Field(min_length=Limits.MIN_PASSWORD_LENGTH)

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        return _password_bytes(value)


class UserView(BaseModel):
    """Public projection of a user record (never includes the password hash)."""

    id: int
    name: str
    email: str
    avatar_url: str | None = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Login response with JWT token."""

    user: UserView
    token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds


# =============================================================================
# User Account Schemas
# =============================================================================


class UserUpdate(BaseModel):
    """Self-service profile update. Only provided, non-empty fields are applied."""

    name: str | None = Field(default=None, max_length=Limits.MAX_NAME_LENGTH)
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=Limits.MIN_PASSWORD_LENGTH)
    avatar_url: str | None = None

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str | None) -> str | None:
        return None if value is None else _password_bytes(value)

    @field_validator("name", "email", "password", "avatar_url", mode="before")
    @classmethod
    def _blank_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("avatar_url")
    @classmethod
    def _check_avatar_url(cls, value: str | None) -> str | None:
        return validate_image_url(value)
