"""
Metrics Service - product engagement counters and restaurant rollups.

Counters (views, added_to_cart) start at zero and only grow.
conversion_rate = added_to_cart / views * 100, rounded to 2 decimals, 0 when views is 0.

Usage:
    from menu_api.services.domain import MetricsService

    service = MetricsService(db)
    service.record_view(product_id, restaurant_id)
    service.record_added_to_cart(product_id, restaurant_id)
    overview = service.get_restaurant_overview(restaurant_id, user_id)
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from menu_api.models import ProductMetric
from menu_api.schemas import (
    ConversionRateOutput,
    MetricsOverview,
    ProductMetricOutput,
    ProductMetricWithProduct,
)
from menu_api.services.base_service import BaseService
from shared.config.constants import Limits
from shared.config.logging import metrics_logger as logger
from shared.utils.exceptions import NotFoundError
from shared.utils.result import service_operation
from shared.utils.validators import parse_limit


def compute_conversion_rate(added_to_cart: int, views: int) -> float:
    """Percentage of views that ended in a cart add, 2 decimals; 0 without views."""
    if views <= 0:
        return 0.0
    return round(added_to_cart / views * 100, Limits.RATE_DECIMALS)


class MetricsService(BaseService):
    """
    Service for product metrics.

    Recording is public. Restaurant-wide listings and the overview are
    owner-scoped and go through the ownership resolver.
    """

    def __init__(self, db: Session):
        super().__init__(db)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _metric_for(self, product_id: int, *, lock: bool = False) -> ProductMetric:
        query = select(ProductMetric).where(ProductMetric.product_id == product_id)
        if lock:
            # Row lock so concurrent increments serialize (no-op on SQLite)
            query = query.with_for_update()
        metric = self._db.scalar(query)
        if metric is None:
            raise NotFoundError("Metrics", product_id=product_id)
        return metric

    def _ranked(self, restaurant_id: int, counter, limit: int | None) -> list[ProductMetricWithProduct]:
        """Metrics of a restaurant ordered by counter desc, lowest product id first on ties."""
        query = (
            select(ProductMetric)
            .where(ProductMetric.restaurant_id == restaurant_id)
            .options(selectinload(ProductMetric.product))
            .order_by(counter.desc(), ProductMetric.product_id.asc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [ProductMetricWithProduct.model_validate(m) for m in self._db.scalars(query).all()]

    # =========================================================================
    # Public reads
    # =========================================================================

    @service_operation("Failed to fetch metrics")
    def get_product_metrics(self, product_id: int) -> ProductMetricOutput:
        return ProductMetricOutput.model_validate(self._metric_for(product_id))

    @service_operation("Failed to fetch conversion rate")
    def get_conversion_rate(self, product_id: int) -> ConversionRateOutput:
        """Derived from the current counters; the stored value is not read or written."""
        metric = self._metric_for(product_id)
        return ConversionRateOutput(
            product_id=product_id,
            conversion_rate=compute_conversion_rate(metric.added_to_cart, metric.views),
        )

    # =========================================================================
    # Recording (public)
    # =========================================================================

    @service_operation("Failed to record view")
    def record_view(self, product_id: int, restaurant_id: int) -> ProductMetricOutput:
        """Increment views by one. The metric row must exist and belong to restaurant_id."""
        metric = self._metric_for(product_id, lock=True)
        if metric.restaurant_id != restaurant_id:
            raise NotFoundError("Metrics", product_id=product_id, restaurant_id=restaurant_id)

        metric.views = metric.views + 1
        metric.last_viewed_at = datetime.now(timezone.utc)
        self._commit()
        self._db.refresh(metric)

        logger.debug("Product view recorded", product_id=product_id, views=metric.views)
        return ProductMetricOutput.model_validate(metric)

    @service_operation("Failed to record add to cart")
    def record_added_to_cart(self, product_id: int, restaurant_id: int) -> ProductMetricOutput:
        """
        Increment added_to_cart and refresh conversion_rate from the new counters.

        Read, increment and recompute happen on a locked row inside one
        transaction, so the stored rate always matches the stored counters.
        """
        metric = self._metric_for(product_id, lock=True)
        if metric.restaurant_id != restaurant_id:
            raise NotFoundError("Metrics", product_id=product_id, restaurant_id=restaurant_id)

        metric.added_to_cart = metric.added_to_cart + 1
        metric.last_added_at = datetime.now(timezone.utc)
        metric.conversion_rate = compute_conversion_rate(metric.added_to_cart, metric.views)
        self._commit()
        self._db.refresh(metric)

        logger.debug(
            "Product cart add recorded",
            product_id=product_id,
            added_to_cart=metric.added_to_cart,
            conversion_rate=metric.conversion_rate,
        )
        return ProductMetricOutput.model_validate(metric)

    # =========================================================================
    # Owner rollups
    # =========================================================================

    @service_operation("Failed to fetch metrics")
    def get_restaurant_metrics(self, restaurant_id: int, user_id: int) -> list[ProductMetricWithProduct]:
        """Every product metric of the restaurant, most viewed first."""
        self.resolver.authorize_restaurant(user_id, restaurant_id)
        return self._ranked(restaurant_id, ProductMetric.views, None)

    @service_operation("Failed to fetch products")
    def get_top_products_by_views(
        self, restaurant_id: int, user_id: int, limit: object = None
    ) -> list[ProductMetricWithProduct]:
        self.resolver.authorize_restaurant(user_id, restaurant_id)
        return self._ranked(restaurant_id, ProductMetric.views, parse_limit(limit))

    @service_operation("Failed to fetch products")
    def get_top_products_by_added_to_cart(
        self, restaurant_id: int, user_id: int, limit: object = None
    ) -> list[ProductMetricWithProduct]:
        self.resolver.authorize_restaurant(user_id, restaurant_id)
        return self._ranked(restaurant_id, ProductMetric.added_to_cart, parse_limit(limit))

    @service_operation("Failed to fetch metrics overview")
    def get_restaurant_overview(self, restaurant_id: int, user_id: int) -> MetricsOverview:
        """
        Totals across the restaurant's products.

        average_conversion_rate is the mean of the stored per-product rates.
        top_product is the most viewed product, lowest product id on ties.
        """
        self.resolver.authorize_restaurant(user_id, restaurant_id)

        total_views, total_added, average_rate, total_products = self._db.execute(
            select(
                func.coalesce(func.sum(ProductMetric.views), 0),
                func.coalesce(func.sum(ProductMetric.added_to_cart), 0),
                func.avg(ProductMetric.conversion_rate),
                func.count(ProductMetric.id),
            ).where(ProductMetric.restaurant_id == restaurant_id)
        ).one()

        top = self._ranked(restaurant_id, ProductMetric.views, 1)

        overview = MetricsOverview(
            total_views=int(total_views),
            total_added_to_cart=int(total_added),
            average_conversion_rate=(
                round(float(average_rate), Limits.RATE_DECIMALS) if total_products else 0.0
            ),
            top_product=top[0] if top else None,
            total_products=int(total_products),
        )
        logger.info(
            "Metrics overview computed",
            restaurant_id=restaurant_id,
            total_products=overview.total_products,
        )
        return overview
