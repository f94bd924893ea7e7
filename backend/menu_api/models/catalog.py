"""
Catalog Models: Category, Product.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import BigInteger, Boolean, ForeignKey, Index, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BigIntPK, Base, TimestampMixin

if TYPE_CHECKING:
    from .restaurant import Restaurant
    from .options import AddOnCategory, VariantCategory
    from .metrics import ProductMetric


class Category(TimestampMixin, Base):
    """
    Menu section within a restaurant. Inactive categories are hidden from public menus.
    """

    __tablename__ = "category"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurant.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    restaurant: Mapped["Restaurant"] = relationship(back_populates="categories")
    products: Mapped[list["Product"]] = relationship(
        back_populates="category",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        # Public menu queries (restaurant_id + is_active, ordered)
        Index("ix_category_restaurant_active", "restaurant_id", "is_active", "order_index"),
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}', restaurant_id={self.restaurant_id})>"


class Product(TimestampMixin, Base):
    """
    Menu item. Always has exactly one ProductMetric, created in the same transaction.
    """

    __tablename__ = "product"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurant.id", ondelete="CASCADE"), nullable=False, index=True
    )
    category_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("category.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    restaurant: Mapped["Restaurant"] = relationship(back_populates="products")
    category: Mapped["Category"] = relationship(back_populates="products")
    variant_categories: Mapped[list["VariantCategory"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="VariantCategory.order_index",
    )
    add_on_categories: Mapped[list["AddOnCategory"]] = relationship(
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="AddOnCategory.order_index",
    )
    metric: Mapped[Optional["ProductMetric"]] = relationship(
        back_populates="product",
        uselist=False,
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_product_category_available", "category_id", "is_available"),
        Index("ix_product_restaurant_available", "restaurant_id", "is_available"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
