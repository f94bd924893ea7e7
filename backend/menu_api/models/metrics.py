"""
Engagement Metrics Model: ProductMetric.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, DateTime, Float, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BigIntPK, Base, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Product


class ProductMetric(TimestampMixin, Base):
    """
    View and add-to-cart counters for one product.

    Counters start at zero and only grow. conversion_rate is derived from them
    (added_to_cart / views * 100, two decimals) and refreshed on every cart add.
    restaurant_id is denormalized for restaurant-wide rollups.
    """

    __tablename__ = "product_metric"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    product_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("product.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurant.id", ondelete="CASCADE"), nullable=False, index=True
    )
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    added_to_cart: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    conversion_rate: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    last_viewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    last_added_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    # Relationships
    product: Mapped["Product"] = relationship(back_populates="metric")

    __table_args__ = (
        Index("ix_product_metric_restaurant_views", "restaurant_id", "views"),
        Index("ix_product_metric_restaurant_cart", "restaurant_id", "added_to_cart"),
    )

    def __repr__(self) -> str:
        return (
            f"<ProductMetric(product_id={self.product_id}, views={self.views}, "
            f"added_to_cart={self.added_to_cart}, rate={self.conversion_rate})>"
        )
