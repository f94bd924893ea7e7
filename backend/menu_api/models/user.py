"""
User Model: restaurant owners.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BigIntPK, Base, TimestampMixin

if TYPE_CHECKING:
    from .restaurant import Restaurant


class User(TimestampMixin, Base):
    """
    Account that owns restaurants.
    Email is unique across the whole system.
    """

    __tablename__ = "app_user"

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    password: Mapped[str] = mapped_column(Text, nullable=False)  # bcrypt hash
    avatar_url: Mapped[Optional[str]] = mapped_column(Text)

    # Relationships
    restaurants: Mapped[list["Restaurant"]] = relationship(
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    __table_args__ = (UniqueConstraint("email", name="uq_app_user_email"),)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', name='{self.name}')>"
