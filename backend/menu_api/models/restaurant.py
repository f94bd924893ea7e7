"""
Restaurant Models: Restaurant, RestaurantSettings, OpeningHour.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    BigInteger, Boolean, CheckConstraint, ForeignKey, Index, Integer, Text, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BigIntPK, Base, TimestampMixin

if TYPE_CHECKING:
    from .user import User
    from .catalog import Category, Product


class Restaurant(TimestampMixin, Base):
    """
    A restaurant owned by one user; the root of every ownership chain.
    The slug is globally unique and used by the public menu URL.
    """

    __tablename__ = "restaurant"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    logo_url: Mapped[Optional[str]] = mapped_column(Text)
    logo_path: Mapped[Optional[str]] = mapped_column(Text)  # storage key of an uploaded logo
    banner_url: Mapped[Optional[str]] = mapped_column(Text)
    banner_path: Mapped[Optional[str]] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    owner: Mapped["User"] = relationship(back_populates="restaurants")
    settings: Mapped[Optional["RestaurantSettings"]] = relationship(
        back_populates="restaurant",
        uselist=False,
        cascade="all, delete-orphan",
    )
    categories: Mapped[list["Category"]] = relationship(
        back_populates="restaurant",
        cascade="all, delete-orphan",
    )
    products: Mapped[list["Product"]] = relationship(
        back_populates="restaurant",
        cascade="all, delete",
    )

    __table_args__ = (
        UniqueConstraint("slug", name="uq_restaurant_slug"),
        Index("ix_restaurant_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Restaurant(id={self.id}, slug='{self.slug}', user_id={self.user_id})>"


class RestaurantSettings(TimestampMixin, Base):
    """
    Per-restaurant configuration, created together with the restaurant (1:1).
    """

    __tablename__ = "restaurant_settings"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurant.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    currency: Mapped[str] = mapped_column(Text, default="USD", nullable=False)
    theme_color: Mapped[Optional[str]] = mapped_column(Text)
    whatsapp_number: Mapped[Optional[str]] = mapped_column(Text)
    accepts_orders: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    delivery_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    pickup_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    show_prices: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    restaurant: Mapped["Restaurant"] = relationship(back_populates="settings")
    opening_hours: Mapped[list["OpeningHour"]] = relationship(
        back_populates="settings",
        cascade="all, delete-orphan",
        order_by="OpeningHour.day_of_week",
    )


class OpeningHour(TimestampMixin, Base):
    """
    Opening window for one day of the week (0 = Sunday ... 6 = Saturday).
    At most one row per (settings, day).
    """

    __tablename__ = "opening_hour"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    settings_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("restaurant_settings.id", ondelete="CASCADE"), nullable=False
    )
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    opens_at: Mapped[str] = mapped_column(Text, nullable=False)  # "HH:MM"
    closes_at: Mapped[str] = mapped_column(Text, nullable=False)  # "HH:MM"
    is_open: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Relationships
    settings: Mapped["RestaurantSettings"] = relationship(back_populates="opening_hours")

    __table_args__ = (
        UniqueConstraint("settings_id", "day_of_week", name="uq_opening_hour_settings_day"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_opening_hour_day_range"),
    )

    def __repr__(self) -> str:
        return f"<OpeningHour(settings_id={self.settings_id}, day={self.day_of_week}, open={self.is_open})>"
