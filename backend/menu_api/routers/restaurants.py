"""
Restaurant router.

Public: show by id or slug.
Owner: list own, create, update, delete, toggle is_active.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menu_api.routers._common import EntityId, current_user_id, envelope_response
from menu_api.schemas import RestaurantCreate, RestaurantUpdate
from menu_api.services.domain import RestaurantService
from shared.infrastructure.db import get_db


router = APIRouter(prefix="/api/restaurants", tags=["restaurants"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_restaurant(
    body: RestaurantCreate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Create a restaurant with default settings. A taken slug answers 409."""
    result = RestaurantService(db).create(body.model_dump(), user_id)
    return envelope_response(
        result,
        success_status=status.HTTP_201_CREATED,
        allow_conflict=True,
        message="Restaurant created successfully",
    )


@router.get("")
def list_restaurants(user_id: int = Depends(current_user_id), db: Session = Depends(get_db)):
    """Restaurants owned by the caller, newest first, with category and product counts."""
    return envelope_response(RestaurantService(db).list_for_user(user_id))


@router.get("/slug/{slug}")
def get_restaurant_by_slug(slug: str, db: Session = Depends(get_db)):
    """Public menu entry point."""
    return envelope_response(
        RestaurantService(db).get_by_slug(slug),
        failure_status=status.HTTP_404_NOT_FOUND,
    )


@router.get("/{restaurant_id}")
def get_restaurant(restaurant_id: EntityId, db: Session = Depends(get_db)):
    return envelope_response(
        RestaurantService(db).get_by_id(restaurant_id),
        failure_status=status.HTTP_404_NOT_FOUND,
    )


@router.patch("/{restaurant_id}")
def update_restaurant(
    restaurant_id: EntityId,
    body: RestaurantUpdate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = RestaurantService(db).update(restaurant_id, user_id, body.model_dump(exclude_unset=True))
    return envelope_response(result, message="Restaurant updated successfully")


@router.delete("/{restaurant_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_restaurant(
    restaurant_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Delete the restaurant and everything under it."""
    result = RestaurantService(db).delete(restaurant_id, user_id)
    return envelope_response(result, success_status=status.HTTP_204_NO_CONTENT)


@router.patch("/{restaurant_id}/toggle-status")
def toggle_restaurant_status(
    restaurant_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = RestaurantService(db).toggle_status(restaurant_id, user_id)
    return envelope_response(result, message="Restaurant status updated successfully")
