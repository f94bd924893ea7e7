"""
Tests for the ownership chain resolver.
"""

import pytest

from menu_api.models import AddOn, AddOnCategory, Category, Restaurant, Variant, VariantCategory
from menu_api.services.permissions import (
    OwnershipResolver,
    add_on_category_link,
    add_on_link,
    category_link,
    product_link,
    settings_link,
    variant_category_link,
    variant_link,
)
from shared.utils.exceptions import ErrorKind, NotFoundError, UnauthorizedError


@pytest.fixture
def option_tree(db_session, seed_product):
    """Variant and add-on groups hanging off the seeded product."""
    size = VariantCategory(product_id=seed_product.id, name="Size")
    size.variants.append(Variant(name="Large", price_modifier=3))
    toppings = AddOnCategory(product_id=seed_product.id, name="Toppings")
    toppings.add_ons.append(AddOn(name="Olives", price=1))
    db_session.add_all([size, toppings])
    db_session.commit()
    return {
        "variant_category": size,
        "variant": size.variants[0],
        "add_on_category": toppings,
        "add_on": toppings.add_ons[0],
    }


@pytest.fixture
def foreign_restaurant(db_session, seed_other_user):
    """Restaurant of the other user, with one category."""
    restaurant = Restaurant(
        user_id=seed_other_user.id,
        name="Burger Joint",
        slug="burger-joint",
        address="9 Other St",
        phone="+1987654321",
    )
    restaurant.categories.append(Category(name="Burgers"))
    db_session.add(restaurant)
    db_session.commit()
    return restaurant


class TestRestaurantRoot:
    """The restaurant at the root of every chain."""

    def test_owner_passes(self, db_session, seed_owner, seed_restaurant):
        chain = OwnershipResolver(db_session).authorize(seed_owner.id, seed_restaurant.id)
        assert chain.restaurant.id == seed_restaurant.id
        assert chain.leaf is chain.restaurant

    def test_missing_restaurant(self, db_session, seed_owner):
        with pytest.raises(NotFoundError) as exc_info:
            OwnershipResolver(db_session).authorize(seed_owner.id, 9999)
        assert exc_info.value.detail == "Restaurant not found"
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    def test_other_owner(self, db_session, seed_other_user, seed_restaurant):
        with pytest.raises(UnauthorizedError) as exc_info:
            OwnershipResolver(db_session).authorize(seed_other_user.id, seed_restaurant.id)
        assert exc_info.value.detail == "Unauthorized"

    def test_action_wording(self, db_session, seed_other_user, seed_restaurant):
        with pytest.raises(UnauthorizedError) as exc_info:
            OwnershipResolver(db_session).authorize_restaurant(
                seed_other_user.id, seed_restaurant.id, action="update these settings"
            )
        assert exc_info.value.detail == "Unauthorized to update these settings"

    def test_ownership_checked_before_links(self, db_session, seed_other_user, seed_restaurant):
        """A foreign owner is refused even when the link would not resolve."""
        with pytest.raises(UnauthorizedError):
            OwnershipResolver(db_session).authorize(
                seed_other_user.id, seed_restaurant.id, product_link(9999)
            )


class TestChainLinks:
    """Links below the restaurant."""

    def test_full_add_on_chain(self, db_session, seed_owner, seed_restaurant, seed_product, option_tree):
        chain = OwnershipResolver(db_session).authorize(
            seed_owner.id,
            seed_restaurant.id,
            product_link(seed_product.id),
            add_on_category_link(option_tree["add_on_category"].id),
            add_on_link(option_tree["add_on"].id),
        )
        assert [type(e).__name__ for e in chain.entities] == ["Product", "AddOnCategory", "AddOn"]
        assert chain.leaf.name == "Olives"

    def test_full_variant_chain(self, db_session, seed_owner, seed_restaurant, seed_product, option_tree):
        chain = OwnershipResolver(db_session).authorize(
            seed_owner.id,
            seed_restaurant.id,
            product_link(seed_product.id),
            variant_category_link(option_tree["variant_category"].id),
            variant_link(option_tree["variant"].id),
        )
        assert chain.leaf.name == "Large"

    def test_restaurant_anchored_links(self, db_session, seed_owner, seed_restaurant, option_tree):
        """Routes without a product id anchor the option group through its product."""
        resolver = OwnershipResolver(db_session)
        chain = resolver.authorize(
            seed_owner.id,
            seed_restaurant.id,
            variant_category_link(option_tree["variant_category"].id, from_restaurant=True),
            variant_link(option_tree["variant"].id),
        )
        assert chain.leaf.name == "Large"

        chain = resolver.authorize(
            seed_owner.id,
            seed_restaurant.id,
            add_on_category_link(option_tree["add_on_category"].id, from_restaurant=True),
        )
        assert chain.leaf.name == "Toppings"

    def test_settings_link(self, db_session, seed_owner, seed_restaurant):
        chain = OwnershipResolver(db_session).authorize(
            seed_owner.id, seed_restaurant.id, settings_link(seed_restaurant.settings.id)
        )
        assert chain.leaf.restaurant_id == seed_restaurant.id

    def test_missing_link(self, db_session, seed_owner, seed_restaurant):
        with pytest.raises(NotFoundError) as exc_info:
            OwnershipResolver(db_session).authorize(seed_owner.id, seed_restaurant.id, category_link(9999))
        assert exc_info.value.detail == "Category not found"

    def test_cross_restaurant_link_is_not_found(
        self, db_session, seed_owner, seed_restaurant, foreign_restaurant
    ):
        """An entity of another restaurant is reported as missing, not forbidden."""
        foreign_category = foreign_restaurant.categories[0]
        with pytest.raises(NotFoundError) as exc_info:
            OwnershipResolver(db_session).authorize(
                seed_owner.id, seed_restaurant.id, category_link(foreign_category.id)
            )
        assert exc_info.value.detail == "Category not found"

    def test_wrong_parent_in_middle_of_chain(
        self, db_session, seed_owner, seed_restaurant, seed_product, product_factory, option_tree
    ):
        """A valid add-on under a different product stops the chain at the add-on category."""
        other_product = product_factory("Calzone")
        with pytest.raises(NotFoundError) as exc_info:
            OwnershipResolver(db_session).authorize(
                seed_owner.id,
                seed_restaurant.id,
                product_link(other_product.id),
                add_on_category_link(option_tree["add_on_category"].id),
                add_on_link(option_tree["add_on"].id),
            )
        assert exc_info.value.detail == "Addon category not found"

    def test_variant_under_other_category(
        self, db_session, seed_owner, seed_restaurant, seed_product, option_tree
    ):
        crust = VariantCategory(product_id=seed_product.id, name="Crust")
        db_session.add(crust)
        db_session.commit()

        with pytest.raises(NotFoundError) as exc_info:
            OwnershipResolver(db_session).authorize(
                seed_owner.id,
                seed_restaurant.id,
                product_link(seed_product.id),
                variant_category_link(crust.id),
                variant_link(option_tree["variant"].id),
            )
        assert exc_info.value.detail == "Variant not found"

    def test_resolver_writes_nothing(self, db_session, seed_owner, seed_restaurant, seed_product):
        OwnershipResolver(db_session).authorize(
            seed_owner.id, seed_restaurant.id, product_link(seed_product.id)
        )
        assert not db_session.dirty
        assert not db_session.new
