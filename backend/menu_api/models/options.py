"""
Product Option Models: VariantCategory, Variant, AddOnCategory, AddOn.

Variants are mutually exclusive choices that modify the product price (size, crust).
Add-ons are optional extras with their own price, bounded by min/max selections.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Boolean, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BigIntPK, Base, TimestampMixin

if TYPE_CHECKING:
    from .catalog import Product


class VariantCategory(TimestampMixin, Base):
    """Group of variants for a product (e.g. "Size")."""

    __tablename__ = "variant_category"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    product_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    product: Mapped["Product"] = relationship(back_populates="variant_categories")
    variants: Mapped[list["Variant"]] = relationship(
        back_populates="variant_category",
        cascade="all, delete-orphan",
        order_by="Variant.id",
    )


class Variant(TimestampMixin, Base):
    """One choice inside a variant category (e.g. "Large", +3.00)."""

    __tablename__ = "variant"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    variant_category_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("variant_category.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    price_modifier: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    variant_category: Mapped["VariantCategory"] = relationship(back_populates="variants")


class AddOnCategory(TimestampMixin, Base):
    """Group of optional extras for a product (e.g. "Toppings")."""

    __tablename__ = "add_on_category"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    product_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("product.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    min_selections: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    max_selections: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    product: Mapped["Product"] = relationship(back_populates="add_on_categories")
    add_ons: Mapped[list["AddOn"]] = relationship(
        back_populates="add_on_category",
        cascade="all, delete-orphan",
        order_by="AddOn.id",
    )


class AddOn(TimestampMixin, Base):
    """One extra inside an add-on category (e.g. "Extra cheese", 1.50)."""

    __tablename__ = "add_on"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    add_on_category_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("add_on_category.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    add_on_category: Mapped["AddOnCategory"] = relationship(back_populates="add_ons")
