"""
Shared FastAPI dependencies for routers.
"""

from typing import Any

from fastapi import Depends

from shared.security.auth import current_user_context, get_user_id


def current_user_id(ctx: dict[str, Any] = Depends(current_user_context)) -> int:
    """Id of the authenticated owner (401 when the bearer token is missing or invalid)."""
    return get_user_id(ctx)
