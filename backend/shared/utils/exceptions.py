"""
Centralized domain exceptions for consistent error handling.

Every exception carries an ErrorKind. Services raise these internally and the
service_operation wrapper turns them into failed ServiceResult envelopes, so routers
decide status codes from the kind and never from the message text.

Usage:
    from shared.utils.exceptions import NotFoundError, UnauthorizedError, ValidationError

    raise NotFoundError("Product", product_id)
    raise UnauthorizedError("update these settings")
    raise ValidationError.missing_fields(["name", "price"])
"""

from enum import Enum
from typing import Any, Iterable

from shared.config.logging import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    """Machine-readable failure categories."""

    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFLICT = "CONFLICT"
    INTERNAL = "INTERNAL"


class AppError(Exception):
    """
    Base exception with automatic logging.

    All domain exceptions inherit from this class
    to ensure consistent logging and envelope format.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        detail: str,
        log_level: str = "warning",
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, kind=self.kind.value, **log_context)

        super().__init__(detail)
        self.detail = detail
        self.log_context = log_context

    def __str__(self) -> str:
        return self.detail


# =============================================================================
# Not Found Errors
# =============================================================================


class NotFoundError(AppError):
    """
    Entity not found, or found under a different parent than the one claimed.

    Usage:
        raise NotFoundError("Product", 123)
        raise NotFoundError("Addon category", addon_category_id, product_id=product_id)
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        super().__init__(
            f"{entity} not found",
            log_level="warning",
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )
        self.entity = entity


# =============================================================================
# Ownership Errors
# =============================================================================


class UnauthorizedError(AppError):
    """
    Acting user does not own the restaurant at the root of the chain.

    Usage:
        raise UnauthorizedError()
        raise UnauthorizedError("update these settings", user_id=user_id)
    """

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, action: str | None = None, **log_context: Any):
        detail = f"Unauthorized to {action}" if action else "Unauthorized"
        super().__init__(
            detail,
            log_level="warning",
            action=action,
            **log_context,
        )


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(AppError):
    """
    Missing or malformed input.

    Usage:
        raise ValidationError("Price must be positive", field="price", value=-1)
    """

    kind = ErrorKind.VALIDATION

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(detail, log_level="warning", **log_context)

    @classmethod
    def missing_fields(cls, fields: Iterable[str]) -> "ValidationError":
        """Build the error for a list of missing required fields."""
        names = list(fields)
        return cls(f"{_join_names(names)} {'is' if len(names) == 1 else 'are'} required", fields=names)


def _join_names(names: list[str]) -> str:
    """Join field names as 'a', 'a and b' or 'a, b, and c'."""
    if len(names) <= 1:
        return "".join(names)
    if len(names) == 2:
        return f"{names[0]} and {names[1]}"
    return f"{', '.join(names[:-1])}, and {names[-1]}"


# =============================================================================
# Conflict Errors
# =============================================================================


class ConflictError(AppError):
    """
    Uniqueness violation.

    Usage:
        raise ConflictError("Opening hour already exists for this day")
    """

    kind = ErrorKind.CONFLICT

    def __init__(self, detail: str, **log_context: Any):
        super().__init__(detail, log_level="warning", **log_context)


class DuplicateEntityError(ConflictError):
    """A unique attribute of an entity is already taken."""

    def __init__(self, entity: str, attribute: str, value: str | None = None, **log_context: Any):
        super().__init__(
            f"{entity} {attribute} already in use",
            entity=entity,
            attribute=attribute,
            value=value,
            **log_context,
        )


# =============================================================================
# Internal Errors
# =============================================================================


class InternalError(AppError):
    """
    Unexpected store or programming failure. The detail is safe to show to clients.

    Usage:
        raise InternalError("Failed to create product", restaurant_id=3)
    """

    kind = ErrorKind.INTERNAL

    def __init__(self, detail: str = "Internal server error", **log_context: Any):
        super().__init__(detail, log_level="error", **log_context)
