"""
Variant Services: variant categories and their variants.

Chains checked before every mutation:
    variant category: restaurant -> product -> variant category
    variant:          restaurant -> product -> variant category -> variant
    variant delete:   restaurant -> variant category (via its product) -> variant
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from menu_api.models import Variant, VariantCategory
from menu_api.schemas import VariantCategoryOutput, VariantOutput
from menu_api.services.base_service import BaseCRUDService
from menu_api.services.permissions import product_link, variant_category_link, variant_link
from shared.utils.result import service_operation


class VariantCategoryService(BaseCRUDService[VariantCategory, VariantCategoryOutput]):
    """Service for variant groups of a product ("Size", "Crust")."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=VariantCategory,
            output_schema=VariantCategoryOutput,
            entity_name="Variant category",
            required_fields=("name",),
            text_fields=("name",),
        )

    def _authorized(
        self, restaurant_id: int, product_id: int, variant_category_id: int, user_id: int
    ) -> VariantCategory:
        return self.resolver.authorize(
            user_id,
            restaurant_id,
            product_link(product_id),
            variant_category_link(variant_category_id),
        ).leaf

    @service_operation("Failed to create variant category")
    def create(
        self, restaurant_id: int, product_id: int, user_id: int, data: dict[str, Any]
    ) -> VariantCategoryOutput:
        data = self._clean(dict(data))
        self._require(data)
        self.resolver.authorize(user_id, restaurant_id, product_link(product_id))

        variant_category = VariantCategory(
            product_id=product_id,
            name=data["name"],
            order_index=data.get("order_index") or 0,
            is_active=data.get("is_active", True),
        )
        return self.to_output(self._insert(variant_category))

    @service_operation("Failed to update variant category")
    def update(
        self,
        restaurant_id: int,
        product_id: int,
        variant_category_id: int,
        user_id: int,
        data: dict[str, Any],
    ) -> VariantCategoryOutput:
        variant_category = self._authorized(restaurant_id, product_id, variant_category_id, user_id)
        return self.to_output(self._apply_update(variant_category, data))

    @service_operation("Failed to delete variant category")
    def delete(self, restaurant_id: int, product_id: int, variant_category_id: int, user_id: int) -> None:
        variant_category = self._authorized(restaurant_id, product_id, variant_category_id, user_id)
        self._delete(variant_category)


class VariantService(BaseCRUDService[Variant, VariantOutput]):
    """Service for single variants ("Large", +3.00)."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Variant,
            output_schema=VariantOutput,
            entity_name="Variant",
            required_fields=("name",),
            text_fields=("name",),
        )

    @service_operation("Failed to create variant")
    def create(
        self,
        restaurant_id: int,
        product_id: int,
        variant_category_id: int,
        user_id: int,
        data: dict[str, Any],
    ) -> VariantOutput:
        data = self._clean(dict(data))
        self._require(data)
        self.resolver.authorize(
            user_id,
            restaurant_id,
            product_link(product_id),
            variant_category_link(variant_category_id),
        )

        variant = Variant(
            variant_category_id=variant_category_id,
            name=data["name"],
            price_modifier=Decimal(str(data.get("price_modifier") or 0)),
            is_active=data.get("is_active", True),
        )
        return self.to_output(self._insert(variant))

    @service_operation("Failed to update variant")
    def update(
        self,
        restaurant_id: int,
        product_id: int,
        variant_category_id: int,
        variant_id: int,
        user_id: int,
        data: dict[str, Any],
    ) -> VariantOutput:
        variant = self.resolver.authorize(
            user_id,
            restaurant_id,
            product_link(product_id),
            variant_category_link(variant_category_id),
            variant_link(variant_id),
        ).leaf
        if data.get("price_modifier") is not None:
            data = {**data, "price_modifier": Decimal(str(data["price_modifier"]))}
        return self.to_output(self._apply_update(variant, data))

    @service_operation("Failed to delete variant")
    def delete(self, restaurant_id: int, variant_category_id: int, variant_id: int, user_id: int) -> None:
        variant = self.resolver.authorize(
            user_id,
            restaurant_id,
            variant_category_link(variant_category_id, from_restaurant=True),
            variant_link(variant_id),
        ).leaf
        self._delete(variant)
