"""
Restaurant settings and opening hours router.

Opening hours are addressed by (settings id, day of week); one row per day.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menu_api.routers._common import DayOfWeekParam, EntityId, current_user_id, envelope_response
from menu_api.schemas import OpeningHourCreate, OpeningHourUpdate, SettingsUpdate
from menu_api.services.domain import OpeningHourService, SettingsService
from shared.infrastructure.db import get_db


router = APIRouter(prefix="/api/restaurants/{restaurant_id}", tags=["settings"])


# =============================================================================
# Settings
# =============================================================================


@router.get("/settings")
def get_settings(restaurant_id: EntityId, db: Session = Depends(get_db)):
    """Settings with opening hours ordered by day."""
    return envelope_response(
        SettingsService(db).get(restaurant_id),
        failure_status=status.HTTP_404_NOT_FOUND,
    )


@router.patch("/settings")
def update_settings(
    restaurant_id: EntityId,
    body: SettingsUpdate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = SettingsService(db).update(restaurant_id, user_id, body.model_dump(exclude_unset=True))
    return envelope_response(result, message="Settings updated successfully")


# =============================================================================
# Opening hours
# =============================================================================


@router.get("/opening-hours")
def list_opening_hours(restaurant_id: EntityId, db: Session = Depends(get_db)):
    """Same payload as GET /settings."""
    return envelope_response(
        SettingsService(db).get(restaurant_id),
        failure_status=status.HTTP_404_NOT_FOUND,
    )


@router.post("/opening-hours", status_code=status.HTTP_201_CREATED)
def create_opening_hour(
    restaurant_id: EntityId,
    body: OpeningHourCreate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """A second row for the same day answers 409."""
    result = OpeningHourService(db).create(restaurant_id, user_id, body.model_dump())
    return envelope_response(
        result,
        success_status=status.HTTP_201_CREATED,
        allow_conflict=True,
        message="Opening hour created successfully",
    )


@router.put("/settings/{settings_id}/opening-hours/{day_of_week}")
def update_opening_hour(
    restaurant_id: EntityId,
    settings_id: EntityId,
    day_of_week: DayOfWeekParam,
    body: OpeningHourUpdate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = OpeningHourService(db).update(
        restaurant_id, settings_id, day_of_week, user_id, body.model_dump(exclude_unset=True)
    )
    return envelope_response(result, message="Opening hour updated successfully")


@router.delete(
    "/settings/{settings_id}/opening-hours/{day_of_week}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_opening_hour(
    restaurant_id: EntityId,
    settings_id: EntityId,
    day_of_week: DayOfWeekParam,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = OpeningHourService(db).delete(restaurant_id, settings_id, day_of_week, user_id)
    return envelope_response(result, success_status=status.HTTP_204_NO_CONTENT)


@router.patch("/settings/{settings_id}/opening-hours/{day_of_week}/toggle")
def toggle_opening_hour(
    restaurant_id: EntityId,
    settings_id: EntityId,
    day_of_week: DayOfWeekParam,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Flip is_open for one day."""
    result = OpeningHourService(db).toggle(restaurant_id, settings_id, day_of_week, user_id)
    return envelope_response(result, message="Opening hour status updated successfully")
