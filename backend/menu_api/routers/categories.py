"""
Category router.

Public: show one category, list a restaurant's active categories.
Owner: create, update, delete, toggle is_active.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menu_api.routers._common import EntityId, current_user_id, envelope_response
from menu_api.schemas import CategoryCreate, CategoryUpdate
from menu_api.services.domain import CategoryService
from shared.infrastructure.db import get_db


router = APIRouter(prefix="/api", tags=["categories"])


@router.get("/restaurants/{restaurant_id}/categories")
def list_categories(restaurant_id: EntityId, db: Session = Depends(get_db)):
    """Active categories ordered by order_index, each with its available products."""
    return envelope_response(CategoryService(db).list_for_restaurant(restaurant_id))


@router.get("/restaurants/{restaurant_id}/categories/with-product-count")
def list_categories_with_product_count(restaurant_id: EntityId, db: Session = Depends(get_db)):
    """Every category with its available product count and total views, most viewed first."""
    return envelope_response(CategoryService(db).list_with_product_count(restaurant_id))


@router.get("/categories/{category_id}")
def get_category(category_id: EntityId, db: Session = Depends(get_db)):
    return envelope_response(
        CategoryService(db).get_by_id(category_id),
        failure_status=status.HTTP_404_NOT_FOUND,
    )


@router.post("/restaurants/{restaurant_id}/categories", status_code=status.HTTP_201_CREATED)
def create_category(
    restaurant_id: EntityId,
    body: CategoryCreate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = CategoryService(db).create(restaurant_id, user_id, body.model_dump())
    return envelope_response(
        result,
        success_status=status.HTTP_201_CREATED,
        message="Category created successfully",
    )


@router.put("/restaurants/{restaurant_id}/categories/{category_id}")
def update_category(
    restaurant_id: EntityId,
    category_id: EntityId,
    body: CategoryUpdate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = CategoryService(db).update(
        restaurant_id, category_id, user_id, body.model_dump(exclude_unset=True)
    )
    return envelope_response(result, message="Category updated successfully")


@router.delete(
    "/restaurants/{restaurant_id}/categories/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_category(
    restaurant_id: EntityId,
    category_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Delete the category and its products."""
    result = CategoryService(db).delete(restaurant_id, category_id, user_id)
    return envelope_response(result, success_status=status.HTTP_204_NO_CONTENT)


@router.patch("/restaurants/{restaurant_id}/categories/{category_id}/toggle-status")
def toggle_category_status(
    restaurant_id: EntityId,
    category_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = CategoryService(db).toggle_status(restaurant_id, category_id, user_id)
    return envelope_response(result, message="Category status updated successfully")
