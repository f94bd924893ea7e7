"""
Category Service.

Usage:
    from menu_api.services.domain import CategoryService

    service = CategoryService(db)
    result = service.list_for_restaurant(restaurant_id)
    result = service.create(restaurant_id, user_id, {"name": "Mains"})
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from menu_api.models import Category, Product
from menu_api.schemas import CategoryOutput, CategoryWithProducts, CategoryWithStats, ProductOutput
from menu_api.services.base_service import BaseCRUDService
from menu_api.services.permissions import category_link
from shared.utils.exceptions import NotFoundError
from shared.utils.result import service_operation


def _available_products(category: Category) -> list[Product]:
    return [p for p in category.products if p.is_available]


class CategoryService(BaseCRUDService[Category, CategoryWithProducts]):
    """
    Service for menu categories.

    Business rules:
    - Categories belong to a restaurant; order_index defaults to 0
    - Public listings show active categories with their available products
    - Deleting a category deletes its products (and their options and metrics)
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Category,
            output_schema=CategoryWithProducts,
            entity_name="Category",
            required_fields=("name",),
            toggle_field="is_active",
        )

    def to_output(self, category: Category) -> CategoryWithProducts:
        """Category with its available products only."""
        return CategoryWithProducts(
            **CategoryOutput.model_validate(category).model_dump(),
            products=[ProductOutput.model_validate(p) for p in _available_products(category)],
        )

    def _authorized(self, restaurant_id: int, category_id: int, user_id: int) -> Category:
        return self.resolver.authorize(user_id, restaurant_id, category_link(category_id)).leaf

    # =========================================================================
    # Query Methods
    # =========================================================================

    @service_operation("Failed to fetch category")
    def get_by_id(self, category_id: int) -> CategoryWithProducts:
        category = self._db.scalars(
            select(Category)
            .where(Category.id == category_id)
            .options(selectinload(Category.products))
        ).first()
        if category is None:
            raise NotFoundError("Category", category_id)
        return self.to_output(category)

    @service_operation("Failed to fetch categories")
    def list_for_restaurant(self, restaurant_id: int) -> list[CategoryWithProducts]:
        """Active categories in display order, each with its available products."""
        categories = self._db.scalars(
            select(Category)
            .where(Category.restaurant_id == restaurant_id, Category.is_active.is_(True))
            .options(selectinload(Category.products))
            .order_by(Category.order_index, Category.id)
        ).all()
        return [self.to_output(c) for c in categories]

    @service_operation("Failed to fetch categories")
    def list_with_product_count(self, restaurant_id: int) -> list[CategoryWithStats]:
        """
        Every category with its available-product count and the sum of their views,
        most viewed first (display order breaks ties).
        """
        categories = self._db.scalars(
            select(Category)
            .where(Category.restaurant_id == restaurant_id)
            .options(selectinload(Category.products).selectinload(Product.metric))
            .order_by(Category.order_index, Category.id)
        ).all()

        stats = []
        for category in categories:
            products = _available_products(category)
            stats.append(CategoryWithStats(
                **CategoryOutput.model_validate(category).model_dump(),
                product_count=len(products),
                total_views=sum(p.metric.views if p.metric else 0 for p in products),
            ))
        # sorted() is stable, so equal view counts keep display order
        return sorted(stats, key=lambda c: c.total_views, reverse=True)

    # =========================================================================
    # Command Methods
    # =========================================================================

    @service_operation("Failed to create category")
    def create(self, restaurant_id: int, user_id: int, data: dict[str, Any]) -> CategoryWithProducts:
        data = self._clean(dict(data))
        self._require(data)
        self.resolver.authorize_restaurant(user_id, restaurant_id)

        category = Category(
            restaurant_id=restaurant_id,
            name=data["name"],
            description=data.get("description"),
            order_index=data.get("order_index") or 0,
            is_active=data.get("is_active", True),
        )
        return self.to_output(self._insert(category))

    @service_operation("Failed to update category")
    def update(
        self, restaurant_id: int, category_id: int, user_id: int, data: dict[str, Any]
    ) -> CategoryWithProducts:
        category = self._authorized(restaurant_id, category_id, user_id)
        return self.to_output(self._apply_update(category, data))

    @service_operation("Failed to delete category")
    def delete(self, restaurant_id: int, category_id: int, user_id: int) -> None:
        category = self._authorized(restaurant_id, category_id, user_id)
        self._delete(category)

    @service_operation("Failed to toggle category status")
    def toggle_status(self, restaurant_id: int, category_id: int, user_id: int) -> CategoryWithProducts:
        category = self._authorized(restaurant_id, category_id, user_id)
        return self.to_output(self._toggle(category))
