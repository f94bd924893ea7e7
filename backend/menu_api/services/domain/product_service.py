"""
Product Service.

Usage:
    from menu_api.services.domain import ProductService

    service = ProductService(db)
    result = service.create(restaurant_id, category_id, user_id, {"name": "Margherita", "price": 10})
    result = service.get_by_id(product_id)
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from menu_api.models import AddOnCategory, Product, ProductMetric, VariantCategory
from menu_api.schemas import ProductDetailOutput
from menu_api.services.base_service import BaseCRUDService
from menu_api.services.permissions import category_link, product_link
from shared.config.logging import get_logger
from shared.utils.exceptions import NotFoundError
from shared.utils.result import service_operation

logger = get_logger(__name__)

_DETAIL_OPTIONS = [
    selectinload(Product.variant_categories).selectinload(VariantCategory.variants),
    selectinload(Product.add_on_categories).selectinload(AddOnCategory.add_ons),
    selectinload(Product.metric),
]


def _money(value: Any) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


class ProductService(BaseCRUDService[Product, ProductDetailOutput]):
    """
    Service for products.

    Business rules:
    - A product is created under a category of the same restaurant
    - Every product gets a zeroed metric row in the same transaction
    - Public reads only show active variant/add-on groups and items
    - Deleting a product deletes its option groups and its metric
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Product,
            output_schema=ProductDetailOutput,
            entity_name="Product",
            required_fields=("name", "price"),
            toggle_field="is_available",
        )

    def _authorized(self, restaurant_id: int, product_id: int, user_id: int) -> Product:
        return self.resolver.authorize(user_id, restaurant_id, product_link(product_id)).leaf

    def to_public_output(self, product: Product) -> ProductDetailOutput:
        """Detail view with inactive option groups and items removed."""
        detail = self.to_output(product)
        variant_categories = [
            vc.model_copy(update={"variants": [v for v in vc.variants if v.is_active]})
            for vc in detail.variant_categories
            if vc.is_active
        ]
        add_on_categories = [
            ac.model_copy(update={"add_ons": [a for a in ac.add_ons if a.is_active]})
            for ac in detail.add_on_categories
            if ac.is_active
        ]
        return detail.model_copy(update={
            "variant_categories": variant_categories,
            "add_on_categories": add_on_categories,
        })

    # =========================================================================
    # Query Methods
    # =========================================================================

    @service_operation("Failed to fetch product")
    def get_by_id(self, product_id: int) -> ProductDetailOutput:
        product = self._repo.find_by_id(product_id, options=_DETAIL_OPTIONS)
        if product is None:
            raise NotFoundError("Product", product_id)
        return self.to_public_output(product)

    @service_operation("Failed to fetch products")
    def list_by_category(self, category_id: int) -> list[ProductDetailOutput]:
        """Available products of a category."""
        products = self._db.scalars(
            select(Product)
            .where(Product.category_id == category_id, Product.is_available.is_(True))
            .options(*_DETAIL_OPTIONS)
            .order_by(Product.id)
        ).all()
        return [self.to_public_output(p) for p in products]

    @service_operation("Failed to fetch products")
    def list_by_restaurant(self, restaurant_id: int) -> list[ProductDetailOutput]:
        """Available products of a restaurant, newest first."""
        products = self._repo.find_by_restaurant(
            restaurant_id,
            Product.is_available.is_(True),
            options=_DETAIL_OPTIONS,
            order_by=[Product.created_at.desc(), Product.id.desc()],
        )
        return [self.to_public_output(p) for p in products]

    # =========================================================================
    # Command Methods
    # =========================================================================

    @service_operation("Failed to create product")
    def create(
        self, restaurant_id: int, category_id: int, user_id: int, data: dict[str, Any]
    ) -> ProductDetailOutput:
        """
        Create a product and its metric row.

        The category must belong to the restaurant; a category of another
        restaurant is reported as not found.
        """
        data = self._clean(dict(data))
        self._require(data)
        self.resolver.authorize(user_id, restaurant_id, category_link(category_id))

        product = Product(
            restaurant_id=restaurant_id,
            category_id=category_id,
            name=data["name"],
            description=data.get("description"),
            price=_money(data["price"]),
            image_url=data.get("image_url"),
            is_available=data.get("is_available", True),
            metric=ProductMetric(restaurant_id=restaurant_id),
        )
        self._insert(product)
        return self.to_output(product)

    @service_operation("Failed to update product")
    def update(
        self, restaurant_id: int, product_id: int, user_id: int, data: dict[str, Any]
    ) -> ProductDetailOutput:
        product = self._authorized(restaurant_id, product_id, user_id)
        if data.get("price") is not None:
            data = {**data, "price": _money(data["price"])}
        return self.to_output(self._apply_update(product, data))

    @service_operation("Failed to delete product")
    def delete(self, restaurant_id: int, product_id: int, user_id: int) -> None:
        product = self._authorized(restaurant_id, product_id, user_id)
        self._delete(product)

    @service_operation("Failed to toggle product status")
    def toggle_status(self, restaurant_id: int, product_id: int, user_id: int) -> ProductDetailOutput:
        product = self._authorized(restaurant_id, product_id, user_id)
        return self.to_output(self._toggle(product))
