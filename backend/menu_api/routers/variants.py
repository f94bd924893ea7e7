"""
Variant router: variant categories of a product and their variants.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menu_api.routers._common import EntityId, current_user_id, envelope_response
from menu_api.schemas import (
    VariantCategoryCreate,
    VariantCategoryUpdate,
    VariantCreate,
    VariantUpdate,
)
from menu_api.services.domain import VariantCategoryService, VariantService
from shared.infrastructure.db import get_db


router = APIRouter(prefix="/api/restaurants/{restaurant_id}", tags=["variants"])


# =============================================================================
# Variant categories
# =============================================================================


@router.post("/products/{product_id}/variant-categories", status_code=status.HTTP_201_CREATED)
def create_variant_category(
    restaurant_id: EntityId,
    product_id: EntityId,
    body: VariantCategoryCreate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = VariantCategoryService(db).create(restaurant_id, product_id, user_id, body.model_dump())
    return envelope_response(
        result,
        success_status=status.HTTP_201_CREATED,
        message="Variant category created successfully",
    )


@router.put("/products/{product_id}/variant-categories/{variant_category_id}")
def update_variant_category(
    restaurant_id: EntityId,
    product_id: EntityId,
    variant_category_id: EntityId,
    body: VariantCategoryUpdate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = VariantCategoryService(db).update(
        restaurant_id, product_id, variant_category_id, user_id, body.model_dump(exclude_unset=True)
    )
    return envelope_response(result, message="Variant category updated successfully")


@router.delete(
    "/products/{product_id}/variant-categories/{variant_category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_variant_category(
    restaurant_id: EntityId,
    product_id: EntityId,
    variant_category_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = VariantCategoryService(db).delete(restaurant_id, product_id, variant_category_id, user_id)
    return envelope_response(result, success_status=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Variants
# =============================================================================


@router.post(
    "/products/{product_id}/variant-categories/{variant_category_id}/variants",
    status_code=status.HTTP_201_CREATED,
)
def create_variant(
    restaurant_id: EntityId,
    product_id: EntityId,
    variant_category_id: EntityId,
    body: VariantCreate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = VariantService(db).create(
        restaurant_id, product_id, variant_category_id, user_id, body.model_dump()
    )
    return envelope_response(
        result,
        success_status=status.HTTP_201_CREATED,
        message="Variant created successfully",
    )


@router.put("/products/{product_id}/variant-categories/{variant_category_id}/variants/{variant_id}")
def update_variant(
    restaurant_id: EntityId,
    product_id: EntityId,
    variant_category_id: EntityId,
    variant_id: EntityId,
    body: VariantUpdate,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = VariantService(db).update(
        restaurant_id,
        product_id,
        variant_category_id,
        variant_id,
        user_id,
        body.model_dump(exclude_unset=True),
    )
    return envelope_response(result, message="Variant updated successfully")


@router.delete(
    "/variant-categories/{variant_category_id}/variants/{variant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_variant(
    restaurant_id: EntityId,
    variant_category_id: EntityId,
    variant_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """The product is resolved from the variant category."""
    result = VariantService(db).delete(restaurant_id, variant_category_id, variant_id, user_id)
    return envelope_response(result, success_status=status.HTTP_204_NO_CONTENT)
