"""
Product metrics router.

Recording and per-product reads are public (called by the customer menu).
Restaurant-wide listings and the overview are owner-only.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from menu_api.routers._common import EntityId, current_user_id, envelope_response
from menu_api.services.domain import MetricsService
from shared.infrastructure.db import get_db


router = APIRouter(prefix="/api", tags=["metrics"])


# =============================================================================
# Public
# =============================================================================


@router.post("/products/{product_id}/restaurants/{restaurant_id}/record-view")
def record_view(product_id: EntityId, restaurant_id: EntityId, db: Session = Depends(get_db)):
    result = MetricsService(db).record_view(product_id, restaurant_id)
    return envelope_response(result, message="View recorded successfully")


@router.post("/products/{product_id}/restaurants/{restaurant_id}/record-add-to-cart")
def record_add_to_cart(product_id: EntityId, restaurant_id: EntityId, db: Session = Depends(get_db)):
    result = MetricsService(db).record_added_to_cart(product_id, restaurant_id)
    return envelope_response(result, message="Add to cart recorded successfully")


@router.get("/products/{product_id}/metrics")
def get_product_metrics(product_id: EntityId, db: Session = Depends(get_db)):
    return envelope_response(
        MetricsService(db).get_product_metrics(product_id),
        failure_status=status.HTTP_404_NOT_FOUND,
    )


@router.get("/products/{product_id}/conversion-rate")
def get_conversion_rate(product_id: EntityId, db: Session = Depends(get_db)):
    return envelope_response(
        MetricsService(db).get_conversion_rate(product_id),
        failure_status=status.HTTP_404_NOT_FOUND,
    )


# =============================================================================
# Owner
# =============================================================================


@router.get("/restaurants/{restaurant_id}/metrics")
def get_restaurant_metrics(
    restaurant_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    return envelope_response(MetricsService(db).get_restaurant_metrics(restaurant_id, user_id))


@router.get("/restaurants/{restaurant_id}/metrics/top-by-views")
def get_top_by_views(
    restaurant_id: EntityId,
    limit: Optional[str] = Query(default=None),
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    """Most viewed products. A missing or unusable limit means 10."""
    result = MetricsService(db).get_top_products_by_views(restaurant_id, user_id, limit)
    return envelope_response(result)


@router.get("/restaurants/{restaurant_id}/metrics/top-by-added-to-cart")
def get_top_by_added_to_cart(
    restaurant_id: EntityId,
    limit: Optional[str] = Query(default=None),
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = MetricsService(db).get_top_products_by_added_to_cart(restaurant_id, user_id, limit)
    return envelope_response(result)


@router.get("/restaurants/{restaurant_id}/metrics/overview")
def get_metrics_overview(
    restaurant_id: EntityId,
    user_id: int = Depends(current_user_id),
    db: Session = Depends(get_db),
):
    result = MetricsService(db).get_restaurant_overview(restaurant_id, user_id)
    return envelope_response(result)
