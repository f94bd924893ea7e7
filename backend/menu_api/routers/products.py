"""
Product router.

Public: show one product, list available products by category or restaurant.
Owner: create under a category, update, delete, toggle is_available.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menu_api.routers._common import EntityId, current_user_id, envelope_response
from menu_api.schemas import ProductCreate, ProductUpdate
from menu_api.services.domain import ProductService
from shared.infrastructure.db import get_db


router = APIRouter(prefix="/api", tags=["products"])


@router.get("/products/{product_id}")
def get_product(product_id: EntityId, db: Session = Depends(get_db)):
    """Product with its active variant and add-on groups."""
    return envelope_response(
        ProductService(db).get_by_id(product_id),
        failure_status=status.HTTP_404_NOT_FOUND,
    )


@router.get("/categories/{category_id}/products")
def list_category_products(category_id: EntityId, db: Session = Depends(get_db)):
    return envelope_response(ProductService(db).list_by_category(category_id))


@router.get("/restaurants/{restaurant_id}/products")
def list_restaurant_products(restaurant_id: EntityId, db: Session = Depends(get_db)):
    return envelope_response(ProductService(db).list_by_restaurant(restaurant_id))


@router.post(
    "/restaurants/{restaurant_id}/categories/{category_id}/products",
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    restaurant_id: EntityId,
    category_id: EntityId,
    body: ProductCreate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Create a product and its zeroed metric row."""
    result = ProductService(db).create(restaurant_id, category_id, user_id, body.model_dump())
    return envelope_response(
        result,
        success_status=status.HTTP_201_CREATED,
        message="Product created successfully",
    )


@router.patch("/restaurants/{restaurant_id}/products/{product_id}")
def update_product(
    restaurant_id: EntityId,
    product_id: EntityId,
    body: ProductUpdate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Partial update: omitted fields keep their values."""
    result = ProductService(db).update(
        restaurant_id, product_id, user_id, body.model_dump(exclude_unset=True)
    )
    return envelope_response(result, message="Product updated successfully")


@router.delete(
    "/restaurants/{restaurant_id}/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_product(
    restaurant_id: EntityId,
    product_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = ProductService(db).delete(restaurant_id, product_id, user_id)
    return envelope_response(result, success_status=status.HTTP_204_NO_CONTENT)


@router.patch("/restaurants/{restaurant_id}/products/{product_id}/toggle-status")
def toggle_product_status(
    restaurant_id: EntityId,
    product_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = ProductService(db).toggle_status(restaurant_id, product_id, user_id)
    return envelope_response(result, message="Product status updated successfully")
