"""
Add-on Services: add-on categories and their add-ons.

Chains checked before every mutation:
    add-on category:        restaurant -> product -> add-on category
    add-on create:          restaurant -> product -> add-on category
    add-on update / delete: restaurant -> add-on category (via its product) -> add-on
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from menu_api.models import AddOn, AddOnCategory
from menu_api.schemas import AddOnCategoryOutput, AddOnOutput
from menu_api.services.base_service import BaseCRUDService
from menu_api.services.permissions import add_on_category_link, add_on_link, product_link
from shared.utils.exceptions import ValidationError
from shared.utils.result import service_operation


class AddOnCategoryService(BaseCRUDService[AddOnCategory, AddOnCategoryOutput]):
    """
    Service for add-on groups of a product ("Toppings").

    min_selections and max_selections default to 0; when both are set,
    max_selections may not be lower than min_selections (0 means no limit).
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=AddOnCategory,
            output_schema=AddOnCategoryOutput,
            entity_name="Addon category",
            required_fields=("name",),
            text_fields=("name",),
        )

    def _authorized(
        self, restaurant_id: int, product_id: int, add_on_category_id: int, user_id: int
    ) -> AddOnCategory:
        return self.resolver.authorize(
            user_id,
            restaurant_id,
            product_link(product_id),
            add_on_category_link(add_on_category_id),
        ).leaf

    @staticmethod
    def _check_bounds(min_selections: int, max_selections: int) -> None:
        if max_selections and max_selections < min_selections:
            raise ValidationError(
                "max_selections cannot be lower than min_selections",
                min_selections=min_selections,
                max_selections=max_selections,
            )

    def _validate_update(self, entity: AddOnCategory, data: dict[str, Any]) -> None:
        self._check_bounds(
            data.get("min_selections", entity.min_selections),
            data.get("max_selections", entity.max_selections),
        )

    @service_operation("Failed to create addon category")
    def create(
        self, restaurant_id: int, product_id: int, user_id: int, data: dict[str, Any]
    ) -> AddOnCategoryOutput:
        data = self._clean(dict(data))
        self._require(data)
        self.resolver.authorize(user_id, restaurant_id, product_link(product_id))

        min_selections = data.get("min_selections") or 0
        max_selections = data.get("max_selections") or 0
        self._check_bounds(min_selections, max_selections)

        add_on_category = AddOnCategory(
            product_id=product_id,
            name=data["name"],
            min_selections=min_selections,
            max_selections=max_selections,
            is_required=data.get("is_required", False),
            order_index=data.get("order_index") or 0,
            is_active=data.get("is_active", True),
        )
        return self.to_output(self._insert(add_on_category))

    @service_operation("Failed to update addon category")
    def update(
        self,
        restaurant_id: int,
        product_id: int,
        add_on_category_id: int,
        user_id: int,
        data: dict[str, Any],
    ) -> AddOnCategoryOutput:
        add_on_category = self._authorized(restaurant_id, product_id, add_on_category_id, user_id)
        return self.to_output(self._apply_update(add_on_category, data))

    @service_operation("Failed to delete addon category")
    def delete(self, restaurant_id: int, product_id: int, add_on_category_id: int, user_id: int) -> None:
        add_on_category = self._authorized(restaurant_id, product_id, add_on_category_id, user_id)
        self._delete(add_on_category)


class AddOnService(BaseCRUDService[AddOn, AddOnOutput]):
    """Service for single add-ons ("Extra cheese", 1.50)."""

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=AddOn,
            output_schema=AddOnOutput,
            entity_name="Addon",
            required_fields=("name",),
            text_fields=("name",),
        )

    def _authorized(self, restaurant_id: int, add_on_category_id: int, add_on_id: int, user_id: int) -> AddOn:
        return self.resolver.authorize(
            user_id,
            restaurant_id,
            add_on_category_link(add_on_category_id, from_restaurant=True),
            add_on_link(add_on_id),
        ).leaf

    @service_operation("Failed to create addon")
    def create(
        self,
        restaurant_id: int,
        product_id: int,
        add_on_category_id: int,
        user_id: int,
        data: dict[str, Any],
    ) -> AddOnOutput:
        data = self._clean(dict(data))
        self._require(data)
        self.resolver.authorize(
            user_id,
            restaurant_id,
            product_link(product_id),
            add_on_category_link(add_on_category_id),
        )

        add_on = AddOn(
            add_on_category_id=add_on_category_id,
            name=data["name"],
            price=Decimal(str(data.get("price") or 0)),
            is_active=data.get("is_active", True),
        )
        return self.to_output(self._insert(add_on))

    @service_operation("Failed to update addon")
    def update(
        self,
        restaurant_id: int,
        add_on_category_id: int,
        add_on_id: int,
        user_id: int,
        data: dict[str, Any],
    ) -> AddOnOutput:
        add_on = self._authorized(restaurant_id, add_on_category_id, add_on_id, user_id)
        if data.get("price") is not None:
            data = {**data, "price": Decimal(str(data["price"]))}
        return self.to_output(self._apply_update(add_on, data))

    @service_operation("Failed to delete addon")
    def delete(self, restaurant_id: int, add_on_category_id: int, add_on_id: int, user_id: int) -> None:
        add_on = self._authorized(restaurant_id, add_on_category_id, add_on_id, user_id)
        self._delete(add_on)
