"""
Add-on router: add-on categories of a product and their add-ons.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menu_api.routers._common import EntityId, current_user_id, envelope_response
from menu_api.schemas import (
    AddOnCategoryCreate,
    AddOnCategoryUpdate,
    AddOnCreate,
    AddOnUpdate,
)
from menu_api.services.domain import AddOnCategoryService, AddOnService
from shared.infrastructure.db import get_db


router = APIRouter(prefix="/api/restaurants/{restaurant_id}", tags=["addons"])


# =============================================================================
# Add-on categories
# =============================================================================


@router.post("/products/{product_id}/addon-categories", status_code=status.HTTP_201_CREATED)
def create_add_on_category(
    restaurant_id: EntityId,
    product_id: EntityId,
    body: AddOnCategoryCreate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = AddOnCategoryService(db).create(restaurant_id, product_id, user_id, body.model_dump())
    return envelope_response(
        result,
        success_status=status.HTTP_201_CREATED,
        message="Addon category created successfully",
    )


@router.put("/products/{product_id}/addon-categories/{add_on_category_id}")
def update_add_on_category(
    restaurant_id: EntityId,
    product_id: EntityId,
    add_on_category_id: EntityId,
    body: AddOnCategoryUpdate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = AddOnCategoryService(db).update(
        restaurant_id, product_id, add_on_category_id, user_id, body.model_dump(exclude_unset=True)
    )
    return envelope_response(result, message="Addon category updated successfully")


@router.delete(
    "/products/{product_id}/addon-categories/{add_on_category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_add_on_category(
    restaurant_id: EntityId,
    product_id: EntityId,
    add_on_category_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = AddOnCategoryService(db).delete(restaurant_id, product_id, add_on_category_id, user_id)
    return envelope_response(result, success_status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Add-ons
# =============================================================================


@router.post(
    "/products/{product_id}/addon-categories/{add_on_category_id}/addons",
    status_code=status.HTTP_201_CREATED,
)
def create_add_on(
    restaurant_id: EntityId,
    product_id: EntityId,
    add_on_category_id: EntityId,
    body: AddOnCreate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = AddOnService(db).create(
        restaurant_id, product_id, add_on_category_id, user_id, body.model_dump()
    )
    return envelope_response(
        result,
        success_status=status.HTTP_201_CREATED,
        message="Addon created successfully",
    )


@router.put("/addon-categories/{add_on_category_id}/addons/{add_on_id}")
def update_add_on(
    restaurant_id: EntityId,
    add_on_category_id: EntityId,
    add_on_id: EntityId,
    body: AddOnUpdate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """The product is resolved from the add-on category."""
    result = AddOnService(db).update(
        restaurant_id, add_on_category_id, add_on_id, user_id, body.model_dump(exclude_unset=True)
    )
    return envelope_response(result, message="Addon updated successfully")


@router.delete(
    "/addon-categories/{add_on_category_id}/addons/{add_on_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_add_on(
    restaurant_id: EntityId,
    add_on_category_id: EntityId,
    add_on_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = AddOnService(db).delete(restaurant_id, add_on_category_id, add_on_id, user_id)
    return envelope_response(result, success_status=status.HTTP_204_NO_CONTENT)
