"""
Uniform service result envelope.

Every public service operation returns a ServiceResult instead of raising:
    success=True  -> data (and optionally a message)
    success=False -> error message plus an ErrorKind

Usage:
    from shared.utils.result import ServiceResult, service_operation

    class ProductService(...):
        @service_operation("Failed to create product")
        def create(self, ...) -> ProductOutput:
            ...  # raise NotFoundError / UnauthorizedError freely

    result = service.create(...)
    if not result.success and result.kind is ErrorKind.UNAUTHORIZED:
        ...
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from shared.utils.exceptions import AppError, ErrorKind, InternalError


T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """Tri-state outcome of a service call: data, or an error message with its kind."""

    success: bool
    data: T | None = None
    error: str | None = None
    message: str | None = None
    kind: ErrorKind | None = None

    @classmethod
    def ok(cls, data: T | None = None, message: str | None = None) -> "ServiceResult[T]":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, kind: ErrorKind, error: str) -> "ServiceResult[T]":
        return cls(success=False, error=error, kind=kind)

    @classmethod
    def from_error(cls, exc: AppError) -> "ServiceResult[T]":
        return cls.fail(exc.kind, exc.detail)

    def unwrap(self) -> T:
        """Return data or raise RuntimeError (for scripts and tests)."""
        if not self.success:
            raise RuntimeError(f"{self.kind.value if self.kind else 'ERROR'}: {self.error}")
        return self.data  # type: ignore[return-value]


def service_operation(failure_message: str) -> Callable:
    """
    Decorator for service methods that turns raised errors into failed results.

    - AppError subclasses become ServiceResult.fail(kind, detail)
    - SQLAlchemy errors roll back the session and become an INTERNAL failure
      carrying failure_message (the driver message is only logged)
    - Return values that are not already a ServiceResult are wrapped with ok()

    The decorated method's instance must expose the session as ``db``.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., ServiceResult]:
        @functools.wraps(func)
        def wrapper(self, *args: Any, **kwargs: Any) -> ServiceResult:
            try:
                value = func(self, *args, **kwargs)
            except AppError as exc:
                self.db.rollback()
                return ServiceResult.from_error(exc)
            except SQLAlchemyError as exc:
                self.db.rollback()
                return ServiceResult.from_error(
                    InternalError(
                        failure_message,
                        operation=func.__qualname__,
                        error=str(exc),
                        exc_info=True,
                    )
                )

            if isinstance(value, ServiceResult):
                return value
            return ServiceResult.ok(value)

        return wrapper

    return decorator
