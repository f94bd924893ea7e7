"""
Rate limiting using slowapi.
Protects the login endpoint from credential stuffing.

Usage:
    from shared.security.rate_limit import limiter, login_rate_limit

    @router.post("/login")
    @limiter.limit(login_rate_limit)
    def login(request: Request, ...):
        ...
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from shared.config.logging import get_logger
from shared.config.settings import settings

logger = get_logger(__name__)

# Limiter keyed by client IP; counters live in process memory
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def login_rate_limit() -> str:
    """Rule for the login endpoint, read from settings at request time."""
    return settings.login_rate_limit_rule


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Handler for rate limit exceeded errors.
    Returns the standard error envelope with retry information.
    """
    logger.warning(
        "Rate limit exceeded",
        path=request.url.path,
        ip_address=get_remote_address(request),
        limit=str(exc.detail),
    )
    return JSONResponse(
        status_code=429,
        content={
            "success": False,
            "error": "Too many requests. Try again later.",
            "kind": "RATE_LIMITED",
            "limit": str(exc.detail),
        },
        headers={"Retry-After": str(settings.login_rate_window)},
    )
