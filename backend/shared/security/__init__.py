"""
Security module: Authentication, password hashing, rate limiting.
"""

from shared.security.auth import (
    sign_jwt,
    sign_user_token,
    verify_jwt,
    get_bearer_token,
    current_user_context,
    get_user_id,
)
from shared.security.password import hash_password, verify_password, needs_rehash
from shared.security.rate_limit import (
    limiter,
    login_rate_limit,
    rate_limit_exceeded_handler,
)

__all__ = [
    # auth
    "sign_jwt",
    "sign_user_token",
    "verify_jwt",
    "get_bearer_token",
    "current_user_context",
    "get_user_id",
    # password
    "hash_password",
    "verify_password",
    "needs_rehash",
    # rate_limit
    "limiter",
    "login_rate_limit",
    "rate_limit_exceeded_handler",
]
