"""
Restaurant Service.

Handles restaurant lifecycle for owners plus the public restaurant page.

Usage:
    from menu_api.services.domain import RestaurantService

    service = RestaurantService(db)
    result = service.create(body.model_dump(), user_id)
    result = service.get_by_slug("pizza-place")
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from menu_api.models import Category, Product, Restaurant, RestaurantSettings, User
from menu_api.schemas import (
    CategoryOutput,
    RestaurantDetail,
    RestaurantSummary,
    RestaurantWithSettings,
)
from menu_api.services.base_service import BaseCRUDService, violates_unique
from shared.config.logging import get_logger
from shared.utils.exceptions import DuplicateEntityError, NotFoundError, ValidationError
from shared.utils.result import service_operation
from shared.utils.validators import validate_slug

logger = get_logger(__name__)

_DETAIL_OPTIONS = [
    selectinload(Restaurant.settings).selectinload(RestaurantSettings.opening_hours),
    selectinload(Restaurant.owner),
]

_CREATE_FIELDS = ("name", "slug", "address", "phone", "description", "logo_url", "banner_url")


class RestaurantService(BaseCRUDService[Restaurant, RestaurantWithSettings]):
    """
    Service for restaurant management.

    Business rules:
    - Slugs are unique system-wide (pre-checked, and enforced by the store)
    - Every restaurant gets default settings, created in the same transaction
    - Deleting a restaurant removes its settings, categories, products and metrics
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Restaurant,
            output_schema=RestaurantWithSettings,
            entity_name="Restaurant",
            required_fields=("name", "slug", "address", "phone"),
            toggle_field="is_active",
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def _detail(self, restaurant: Restaurant, *, include_owner: bool) -> RestaurantDetail:
        """Public page: settings with hours and active categories in display order."""
        categories = self._db.scalars(
            select(Category)
            .where(Category.restaurant_id == restaurant.id, Category.is_active.is_(True))
            .order_by(Category.order_index, Category.id)
        ).all()
        detail = RestaurantDetail.model_validate(restaurant)
        return detail.model_copy(update={
            "categories": [CategoryOutput.model_validate(c) for c in categories],
            "owner": detail.owner if include_owner else None,
        })

    @service_operation("Failed to fetch restaurant")
    def get_by_id(self, restaurant_id: int) -> RestaurantDetail:
        restaurant = self._repo.find_by_id(restaurant_id, options=_DETAIL_OPTIONS)
        if restaurant is None:
            raise NotFoundError("Restaurant", restaurant_id)
        return self._detail(restaurant, include_owner=True)

    @service_operation("Failed to fetch restaurant")
    def get_by_slug(self, slug: str) -> RestaurantDetail:
        restaurant = self._repo.find_one_by(slug=slug.strip().lower(), options=_DETAIL_OPTIONS)
        if restaurant is None:
            raise NotFoundError("Restaurant", slug)
        return self._detail(restaurant, include_owner=False)

    @service_operation("Failed to fetch restaurants")
    def list_for_user(self, user_id: int) -> list[RestaurantSummary]:
        """Owner dashboard: newest first, with category and product counts."""
        restaurants = self._repo.find_all(
            Restaurant.user_id == user_id,
            options=[selectinload(Restaurant.settings).selectinload(RestaurantSettings.opening_hours)],
            order_by=[Restaurant.created_at.desc(), Restaurant.id.desc()],
        )
        ids = [r.id for r in restaurants]
        category_counts = self._count_by_restaurant(Category, ids)
        product_counts = self._count_by_restaurant(Product, ids)

        return [
            RestaurantSummary.model_validate({
                **RestaurantWithSettings.model_validate(r).model_dump(),
                "category_count": category_counts.get(r.id, 0),
                "product_count": product_counts.get(r.id, 0),
            })
            for r in restaurants
        ]

    def _count_by_restaurant(self, model: type, restaurant_ids: list[int]) -> dict[int, int]:
        if not restaurant_ids:
            return {}
        rows = self._db.execute(
            select(model.restaurant_id, func.count(model.id))
            .where(model.restaurant_id.in_(restaurant_ids))
            .group_by(model.restaurant_id)
        ).all()
        return {restaurant_id: count for restaurant_id, count in rows}

    # =========================================================================
    # Command Methods
    # =========================================================================

    @service_operation("Failed to create restaurant")
    def create(self, data: dict[str, Any], user_id: int) -> RestaurantWithSettings:
        """
        Create a restaurant owned by user_id together with its default settings.
        """
        data = self._clean({k: data.get(k) for k in _CREATE_FIELDS})
        self._require(data)

        if self._db.get(User, user_id) is None:
            raise NotFoundError("User", user_id)

        slug = self._normalize_slug(data["slug"])
        if self._repo.exists(Restaurant.slug == slug):
            raise DuplicateEntityError("Restaurant", "slug", slug)

        restaurant = Restaurant(
            user_id=user_id,
            name=data["name"],
            slug=slug,
            address=data["address"],
            phone=data["phone"],
            description=data.get("description"),
            logo_url=data.get("logo_url"),
            banner_url=data.get("banner_url"),
            settings=RestaurantSettings(),
        )
        self._insert(restaurant)
        return self.to_output(restaurant)

    @service_operation("Failed to update restaurant")
    def update(self, restaurant_id: int, user_id: int, data: dict[str, Any]) -> RestaurantWithSettings:
        restaurant = self.resolver.authorize_restaurant(
            user_id, restaurant_id, action="update this restaurant"
        )
        if data.get("slug") is not None:
            slug = self._normalize_slug(data["slug"])
            if slug != restaurant.slug and self._repo.exists(
                Restaurant.slug == slug, Restaurant.id != restaurant.id
            ):
                raise DuplicateEntityError("Restaurant", "slug", slug)
            data = {**data, "slug": slug}

        self._apply_update(restaurant, data)
        return self.to_output(restaurant)

    @service_operation("Failed to delete restaurant")
    def delete(self, restaurant_id: int, user_id: int) -> None:
        restaurant = self.resolver.authorize_restaurant(
            user_id, restaurant_id, action="delete this restaurant"
        )
        self._delete(restaurant)

    @service_operation("Failed to toggle restaurant status")
    def toggle_status(self, restaurant_id: int, user_id: int) -> RestaurantWithSettings:
        restaurant = self.resolver.authorize_restaurant(
            user_id, restaurant_id, action="update this restaurant"
        )
        return self.to_output(self._toggle(restaurant))

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _normalize_slug(slug: str) -> str:
        try:
            return validate_slug(slug)
        except ValueError as e:
            raise ValidationError(str(e), field="slug")

    def _on_integrity_error(self, exc: IntegrityError) -> None:
        # Lost a race against a concurrent insert with the same slug
        if violates_unique(exc, "uq_restaurant_slug", "slug"):
            raise DuplicateEntityError("Restaurant", "slug") from exc
