"""
User Service - owner accounts and authentication.

Usage:
    from menu_api.services.domain import UserService

    service = UserService(db)
    result = service.register(name="Ana", email="ana@example.com", password="secret1")
    result = service.login("ana@example.com", "secret1")
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from menu_api.models import User
from menu_api.services.base_service import BaseCRUDService, violates_unique
from shared.config.logging import auth_logger, get_logger, mask_email
from shared.security.auth import access_token_ttl_seconds, sign_user_token
from shared.security.password import hash_password, needs_rehash, verify_password
from shared.utils.exceptions import (
    AppError,
    ConflictError,
    ErrorKind,
    NotFoundError,
    ValidationError,
)
from shared.utils.result import service_operation
from shared.utils.schemas import LoginResponse, UserView

logger = get_logger(__name__)


class InvalidCredentialsError(AppError):
    """Unknown email or wrong password. Reported identically for both."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, **log_context: Any):
        super().__init__("Invalid email or password", log_level="warning", **log_context)


class UserService(BaseCRUDService[User, UserView]):
    """
    Service for owner accounts.

    Business rules:
    - Email is unique (case-insensitive)
    - Passwords are stored as bcrypt hashes, never returned
    - Profile updates only touch fields that are provided and non-empty
    - Deleting a user deletes their restaurants
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=User,
            output_schema=UserView,
            entity_name="User",
            required_fields=("name", "email", "password"),
            text_fields=("name",),
        )

    def _find_by_email(self, email: str) -> User | None:
        return self._db.scalar(
            select(User).where(func.lower(User.email) == email.strip().lower()).limit(1)
        )

    def _get_user(self, user_id: int) -> User:
        user = self._db.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    # =========================================================================
    # Authentication
    # =========================================================================

    @service_operation("Error creating user")
    def register(self, *, name: str | None, email: str | None, password: str | None) -> UserView:
        """Create an owner account."""
        data = self._clean({"name": name, "email": email, "password": password})
        self._require(data)

        if self._find_by_email(data["email"]) is not None:
            raise ConflictError("User already exists", email=mask_email(data["email"]))

        user = User(
            name=data["name"],
            email=data["email"].strip().lower(),
            password=hash_password(data["password"]),
        )
        self._insert(user)
        auth_logger.info("User registered", user_id=user.id, email=mask_email(user.email))
        return self.to_output(user)

    @service_operation("Error authenticating user")
    def login(self, email: str, password: str) -> LoginResponse:
        """Verify credentials and issue an access token."""
        user = self._find_by_email(email)
        if user is None or not verify_password(password, user.password):
            raise InvalidCredentialsError(email=mask_email(email))

        # Upgrade hashes created with a lower cost factor
        if needs_rehash(user.password):
            user.password = hash_password(password)
            self._commit()
            self._db.refresh(user)

        token = sign_user_token(user.id, user.email)
        auth_logger.info("User logged in", user_id=user.id, email=mask_email(user.email))
        return LoginResponse(
            user=self.to_output(user),
            token=token,
            expires_in=access_token_ttl_seconds(),
        )

    # =========================================================================
    # Account
    # =========================================================================

    @service_operation("Error fetching user")
    def get_profile(self, user_id: int) -> UserView:
        return self.to_output(self._get_user(user_id))

    @service_operation("Error updating user")
    def update(self, user_id: int, data: dict[str, Any]) -> UserView:
        """
        Apply a profile update.

        Empty values are ignored. Changing the email re-checks uniqueness against
        every other user. A request with nothing to apply fails.
        """
        user = self._get_user(user_id)

        changes: dict[str, Any] = {}
        if data.get("name"):
            changes["name"] = data["name"]
        if data.get("email"):
            new_email = data["email"].strip().lower()
            if new_email != user.email:
                other = self._find_by_email(new_email)
                if other is not None and other.id != user.id:
                    raise ConflictError("Email already in use by another user", user_id=user_id)
                changes["email"] = new_email
        if data.get("password"):
            changes["password"] = hash_password(data["password"])
        if data.get("avatar_url"):
            changes["avatar_url"] = data["avatar_url"]

        if not changes:
            raise ValidationError("No valid fields to update", user_id=user_id)

        self._apply_update(user, changes)
        return self.to_output(user)

    @service_operation("Error deleting user")
    def delete(self, user_id: int) -> UserView:
        """Delete the account and everything it owns. Returns the deleted user's view."""
        user = self._get_user(user_id)
        view = self.to_output(user)
        self._delete(user)
        return view

    def _on_integrity_error(self, exc: IntegrityError) -> None:
        # Another account took the email between the pre-check and the write
        if violates_unique(exc, "uq_app_user_email", "email"):
            raise ConflictError("Email already in use by another user") from exc
