"""
Authentication router.
Handles owner registration and login.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from menu_api.routers._common import envelope_response
from menu_api.services.domain import UserService
from shared.config.logging import auth_logger as logger, mask_email
from shared.infrastructure.db import get_db
from shared.security.rate_limit import limiter, login_rate_limit
from shared.utils.schemas import LoginRequest, RegisterRequest


router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    """
    Create an owner account.

    An email that is already registered fails with 400.
    """
    result = UserService(db).register(name=body.name, email=body.email, password=body.password)
    return envelope_response(
        result,
        success_status=status.HTTP_201_CREATED,
        message="User created successfully",
    )


@router.post("/login")
@limiter.limit(login_rate_limit)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate an owner and return an access token.

    Rate limited per client IP. Unknown email and wrong password both
    answer 401 with the same message.
    """
    result = UserService(db).login(body.email, body.password)
    if not result.success:
        logger.warning("LOGIN_FAILED", email=mask_email(body.email))
    return envelope_response(
        result,
        failure_status=status.HTTP_401_UNAUTHORIZED,
        unauthorized_status=status.HTTP_401_UNAUTHORIZED,
        message="Login successful",
    )
