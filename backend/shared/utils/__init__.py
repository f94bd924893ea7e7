"""
Utilities: domain exceptions, result envelope, validators, shared schemas.
"""

from shared.utils.exceptions import (
    AppError,
    ErrorKind,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
    ConflictError,
    DuplicateEntityError,
    InternalError,
)
from shared.utils.result import ServiceResult, service_operation

__all__ = [
    # exceptions
    "AppError",
    "ErrorKind",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "ConflictError",
    "DuplicateEntityError",
    "InternalError",
    # result
    "ServiceResult",
    "service_operation",
]
