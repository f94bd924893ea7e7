"""
Ownership chain resolver.

Every mutation checks the full path from the restaurant (owned by a user) down to
the entity being touched, e.g. restaurant -> product -> add-on category -> add-on.

Rules:
- Missing restaurant            -> NotFoundError("Restaurant")
- Restaurant owned by someone else -> UnauthorizedError
- Any link missing, or attached to a different parent than the previous link
                                -> NotFoundError(<link entity>)

A cross-parent reference is reported as "not found" rather than forbidden, so a
caller cannot probe for entities under another restaurant. Checks run top-down and
stop at the first failure; nothing is written.

Usage:
    from menu_api.services.permissions import OwnershipResolver, product_link, add_on_link

    chain = OwnershipResolver(db).authorize(
        user_id, restaurant_id,
        product_link(product_id),
        add_on_category_link(add_on_category_id),
        add_on_link(add_on_id),
    )
    add_on = chain.leaf
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.orm import Session

from menu_api.models import (
    AddOn,
    AddOnCategory,
    Base,
    Category,
    Product,
    Restaurant,
    RestaurantSettings,
    Variant,
    VariantCategory,
)
from shared.config.logging import get_logger
from shared.utils.exceptions import NotFoundError, UnauthorizedError

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChainLink:
    """
    One step of an ownership chain.

    parent_path is read from the loaded entity and compared with the id of the
    previous link. Dotted paths follow relationships ("product.restaurant_id") so a
    route that skips an intermediate level can still be anchored to the restaurant.
    """

    model: type[Base]
    entity_id: int
    parent_path: str
    entity: str


@dataclass
class AuthorizedChain:
    """Entities loaded while authorizing, root first."""

    restaurant: Restaurant
    entities: list[Any] = field(default_factory=list)

    @property
    def leaf(self) -> Any:
        """Deepest entity in the chain (the restaurant when there are no links)."""
        return self.entities[-1] if self.entities else self.restaurant


def _read_path(entity: Any, path: str) -> Any:
    value = entity
    for part in path.split("."):
        if value is None:
            return None
        value = getattr(value, part)
    return value


class OwnershipResolver:
    """Read-only guard run before any owner-scoped operation."""

    def __init__(self, db: Session):
        self._db = db

    def authorize(
        self,
        user_id: int,
        restaurant_id: int,
        *links: ChainLink,
        action: str | None = None,
    ) -> AuthorizedChain:
        """
        Verify that user_id owns restaurant_id and that every link hangs off the previous one.

        Args:
            user_id: Acting user.
            restaurant_id: Root of the chain.
            links: Ordered root to leaf.
            action: Optional wording for the Unauthorized message ("update these settings").

        Raises:
            NotFoundError: Restaurant or link missing, or link attached to another parent.
            UnauthorizedError: Restaurant belongs to another user.
        """
        restaurant = self._db.get(Restaurant, restaurant_id)
        if restaurant is None:
            raise NotFoundError("Restaurant", restaurant_id)

        if restaurant.user_id != user_id:
            raise UnauthorizedError(action, user_id=user_id, restaurant_id=restaurant_id)

        chain = AuthorizedChain(restaurant=restaurant)
        expected_parent = restaurant.id

        for link in links:
            entity = self._db.get(link.model, link.entity_id)
            if entity is None or _read_path(entity, link.parent_path) != expected_parent:
                raise NotFoundError(
                    link.entity,
                    link.entity_id,
                    expected_parent=expected_parent,
                    restaurant_id=restaurant_id,
                )
            chain.entities.append(entity)
            expected_parent = entity.id

        logger.debug(
            "Ownership chain verified",
            user_id=user_id,
            restaurant_id=restaurant_id,
            depth=len(links),
        )
        return chain

    def authorize_restaurant(self, user_id: int, restaurant_id: int, action: str | None = None) -> Restaurant:
        """Shortcut for chains that stop at the restaurant."""
        return self.authorize(user_id, restaurant_id, action=action).restaurant


# =============================================================================
# Link builders
# =============================================================================


def category_link(category_id: int) -> ChainLink:
    return ChainLink(Category, category_id, "restaurant_id", "Category")


def product_link(product_id: int) -> ChainLink:
    return ChainLink(Product, product_id, "restaurant_id", "Product")


def settings_link(settings_id: int) -> ChainLink:
    return ChainLink(RestaurantSettings, settings_id, "restaurant_id", "Settings")


def variant_category_link(variant_category_id: int, *, from_restaurant: bool = False) -> ChainLink:
    """
    Variant category under a product, or directly under the restaurant when the
    route carries no product id.
    """
    parent = "product.restaurant_id" if from_restaurant else "product_id"
    return ChainLink(VariantCategory, variant_category_id, parent, "Variant category")


def variant_link(variant_id: int) -> ChainLink:
    return ChainLink(Variant, variant_id, "variant_category_id", "Variant")


def add_on_category_link(add_on_category_id: int, *, from_restaurant: bool = False) -> ChainLink:
    """Add-on category under a product, or directly under the restaurant."""
    parent = "product.restaurant_id" if from_restaurant else "product_id"
    return ChainLink(AddOnCategory, add_on_category_id, parent, "Addon category")


def add_on_link(add_on_id: int) -> ChainLink:
    return ChainLink(AddOn, add_on_id, "add_on_category_id", "Addon")
