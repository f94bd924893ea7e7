"""
Tests for product endpoints.
"""

from decimal import Decimal

from menu_api.models import (
    AddOn,
    AddOnCategory,
    Category,
    Product,
    ProductMetric,
    Variant,
    VariantCategory,
)


class TestProductReads:
    """Test public product reads."""

    def test_get_product_hides_inactive_options(self, client, db_session, seed_product):
        """Inactive variant groups and inactive variants are filtered out."""
        db_session.add_all([
            VariantCategory(
                product_id=seed_product.id,
                name="Size",
                variants=[
                    Variant(name="Small"),
                    Variant(name="Huge", is_active=False),
                ],
            ),
            VariantCategory(product_id=seed_product.id, name="Retired", is_active=False),
        ])
        db_session.commit()

        response = client.get(f"/api/products/{seed_product.id}")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == 10.0
        assert [vc["name"] for vc in data["variant_categories"]] == ["Size"]
        assert [v["name"] for v in data["variant_categories"][0]["variants"]] == ["Small"]
        assert data["metric"]["views"] == 0

    def test_get_missing_product(self, client):
        response = client.get("/api/products/9999")
        assert response.status_code == 404
        assert response.json()["error"] == "Product not found"

    def test_list_by_category_only_available(self, client, db_session, seed_category, seed_product, product_factory):
        hidden = product_factory("Hidden")
        hidden.is_available = False
        db_session.commit()

        response = client.get(f"/api/categories/{seed_category.id}/products")
        assert response.status_code == 200
        assert [p["name"] for p in response.json()["data"]] == ["Margherita"]

    def test_list_by_restaurant(self, client, seed_restaurant, seed_product, product_factory):
        product_factory("Calzone")
        response = client.get(f"/api/restaurants/{seed_restaurant.id}/products")
        assert response.status_code == 200
        assert sorted(p["name"] for p in response.json()["data"]) == ["Calzone", "Margherita"]


class TestCreateProduct:
    """Test POST /api/restaurants/{rid}/categories/{cid}/products."""

    def test_create_product_with_metric(self, client, auth_headers, db_session, seed_restaurant, seed_category):
        """A product is created with a zeroed metric row."""
        response = client.post(
            f"/api/restaurants/{seed_restaurant.id}/categories/{seed_category.id}/products",
            json={"name": "Diavola", "price": 12.5},
            headers=auth_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["price"] == 12.5
        assert data["is_available"] is True
        assert data["variant_categories"] == []
        assert data["add_on_categories"] == []
        assert data["metric"]["views"] == 0
        assert data["metric"]["added_to_cart"] == 0
        assert data["metric"]["conversion_rate"] == 0

        metric = db_session.query(ProductMetric).filter_by(product_id=data["id"]).one()
        assert metric.restaurant_id == seed_restaurant.id

    def test_create_product_missing_fields(self, client, auth_headers, seed_restaurant, seed_category):
        response = client.post(
            f"/api/restaurants/{seed_restaurant.id}/categories/{seed_category.id}/products",
            json={"description": "nameless"},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "name and price are required"

    def test_create_product_category_of_other_restaurant(
        self, client, auth_headers, other_auth_headers, db_session, seed_restaurant
    ):
        """(R1, C2) with C2 in R2 is never accepted."""
        other = client.post(
            "/api/restaurants",
            json={"name": "Other", "slug": "other", "address": "x", "phone": "1"},
            headers=other_auth_headers,
        ).json()["data"]
        foreign_category = Category(restaurant_id=other["id"], name="Foreign")
        db_session.add(foreign_category)
        db_session.commit()

        response = client.post(
            f"/api/restaurants/{seed_restaurant.id}/categories/{foreign_category.id}/products",
            json={"name": "Sneaky", "price": 1},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Category not found"
        assert db_session.query(Product).filter_by(name="Sneaky").count() == 0

    def test_create_product_other_user(self, client, other_auth_headers, seed_restaurant, seed_category):
        response = client.post(
            f"/api/restaurants/{seed_restaurant.id}/categories/{seed_category.id}/products",
            json={"name": "Diavola", "price": 12.5},
            headers=other_auth_headers,
        )
        assert response.status_code == 403

    def test_invalid_image_url_rejected(self, client, auth_headers, seed_restaurant, seed_category):
        response = client.post(
            f"/api/restaurants/{seed_restaurant.id}/categories/{seed_category.id}/products",
            json={"name": "Diavola", "price": 12.5, "image_url": "javascript:alert(1)"},
            headers=auth_headers,
        )
        assert response.status_code == 400


class TestUpdateProduct:
    """Test PATCH /api/restaurants/{rid}/products/{id}."""

    def test_partial_update_keeps_other_fields(self, client, auth_headers, seed_restaurant, seed_product):
        """{price: 9.99} changes only the price."""
        response = client.patch(
            f"/api/restaurants/{seed_restaurant.id}/products/{seed_product.id}",
            json={"price": 9.99},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["price"] == 9.99
        assert data["name"] == "Margherita"
        assert data["description"] == "Tomato and mozzarella"
        assert data["is_available"] is True

    def test_update_product_of_other_restaurant(self, client, auth_headers, seed_product):
        second = client.post(
            "/api/restaurants",
            json={"name": "Second", "slug": "second", "address": "x", "phone": "1"},
            headers=auth_headers,
        ).json()["data"]

        response = client.patch(
            f"/api/restaurants/{second['id']}/products/{seed_product.id}",
            json={"price": 1},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Product not found"

    def test_toggle_twice_restores(self, client, auth_headers, seed_restaurant, seed_product):
        url = f"/api/restaurants/{seed_restaurant.id}/products/{seed_product.id}/toggle-status"

        first = client.patch(url, headers=auth_headers)
        assert first.status_code == 200
        assert first.json()["data"]["is_available"] is False
        assert first.json()["data"]["name"] == "Margherita"

        second = client.patch(url, headers=auth_headers)
        assert second.json()["data"]["is_available"] is True


class TestDeleteProduct:
    """Test DELETE /api/restaurants/{rid}/products/{id}."""

    def test_delete_cascades_to_options_and_metric(
        self, client, auth_headers, db_session, seed_restaurant, seed_product
    ):
        db_session.add_all([
            VariantCategory(product_id=seed_product.id, name="Size", variants=[Variant(name="L")]),
            AddOnCategory(
                product_id=seed_product.id,
                name="Extras",
                add_ons=[AddOn(name="Cheese", price=Decimal("1.00"))],
            ),
        ])
        db_session.commit()

        response = client.delete(
            f"/api/restaurants/{seed_restaurant.id}/products/{seed_product.id}",
            headers=auth_headers,
        )
        assert response.status_code == 204

        assert db_session.query(Product).count() == 0
        assert db_session.query(VariantCategory).count() == 0
        assert db_session.query(Variant).count() == 0
        assert db_session.query(AddOnCategory).count() == 0
        assert db_session.query(AddOn).count() == 0
        assert db_session.query(ProductMetric).count() == 0

    def test_delete_other_user_forbidden(self, client, other_auth_headers, seed_restaurant, seed_product):
        response = client.delete(
            f"/api/restaurants/{seed_restaurant.id}/products/{seed_product.id}",
            headers=other_auth_headers,
        )
        assert response.status_code == 403
