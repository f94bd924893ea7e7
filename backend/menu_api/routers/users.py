"""
User account router.
The authenticated owner reads, updates and deletes their own account.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from menu_api.routers._common import current_user_id, envelope_response
from menu_api.services.domain import UserService
from shared.infrastructure.db import get_db
from shared.utils.schemas import UserUpdate


router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/profile")
def get_profile(user_id: int = Depends(current_user_id), db: Session = Depends(get_db)):
    """Profile of the authenticated owner."""
    return envelope_response(UserService(db).get_profile(user_id))


@router.put("")
def update_user(
    body: UserUpdate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """
    Update name, email, password or avatar.

    Taking an email that belongs to another user answers 409.
    """
    result = UserService(db).update(user_id, body.model_dump(exclude_unset=True))
    return envelope_response(result, allow_conflict=True, message="User updated successfully")


@router.delete("")
def delete_user(user_id: int = Depends(current_user_id), db: Session = Depends(get_db)):
    """Delete the account together with every restaurant it owns."""
    result = UserService(db).delete(user_id)
    return envelope_response(result, message="User deleted successfully")
