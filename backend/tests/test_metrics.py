"""
Tests for product metrics: recording, conversion rate, rankings and overview.
"""

import pytest

from menu_api.models import ProductMetric
from menu_api.services.domain import MetricsService, compute_conversion_rate


def _view(client, product, restaurant_id):
    return client.post(f"/api/products/{product.id}/restaurants/{restaurant_id}/record-view")


def _cart(client, product, restaurant_id):
    return client.post(f"/api/products/{product.id}/restaurants/{restaurant_id}/record-add-to-cart")


class TestConversionRate:
    """Test the conversion rate derivation."""

    @pytest.mark.parametrize(
        "added, views, expected",
        [
            (0, 0, 0),
            (1, 4, 25.0),
            (1, 0, 0),
            (1, 3, 33.33),
            (2, 3, 66.67),
            (5, 5, 100.0),
        ],
    )
    def test_compute_conversion_rate(self, added, views, expected):
        assert compute_conversion_rate(added, views) == expected


class TestRecording:
    """Test the public recording endpoints."""

    def test_record_view_increments(self, client, db_session, seed_restaurant, seed_product):
        response = _view(client, seed_product, seed_restaurant.id)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["views"] == 1
        assert data["last_viewed_at"] is not None

    def test_record_view_wrong_restaurant(self, client, seed_product):
        """A metric is only counted under its own restaurant."""
        response = _view(client, seed_product, 9999)
        assert response.status_code == 400
        assert response.json()["error"] == "Metrics not found"

    def test_record_view_missing_product(self, client, seed_restaurant):
        response = client.post(f"/api/products/9999/restaurants/{seed_restaurant.id}/record-view")
        assert response.status_code == 400
        assert response.json()["kind"] == "NOT_FOUND"

    def test_cart_add_without_views_keeps_rate_zero(self, client, seed_restaurant, seed_product):
        response = _cart(client, seed_product, seed_restaurant.id)
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["added_to_cart"] == 1
        assert data["conversion_rate"] == 0

    def test_cart_add_recomputes_rate(self, client, db_session, seed_restaurant, seed_product):
        """Four views then one cart add store a 25.00 rate."""
        for _ in range(4):
            _view(client, seed_product, seed_restaurant.id)
        response = _cart(client, seed_product, seed_restaurant.id)
        assert response.json()["data"]["conversion_rate"] == 25.0

        db_session.expire_all()
        metric = db_session.query(ProductMetric).filter_by(product_id=seed_product.id).one()
        assert (metric.views, metric.added_to_cart, metric.conversion_rate) == (4, 1, 25.0)

    def test_view_does_not_touch_stored_rate(self, client, seed_restaurant, seed_product):
        """Views alone leave the stored rate as it was."""
        for _ in range(2):
            _view(client, seed_product, seed_restaurant.id)
        _cart(client, seed_product, seed_restaurant.id)
        response = _view(client, seed_product, seed_restaurant.id)
        assert response.json()["data"]["conversion_rate"] == 50.0


class TestProductReads:
    """Test the public per-product reads."""

    def test_get_product_metrics(self, client, seed_product):
        response = client.get(f"/api/products/{seed_product.id}/metrics")
        assert response.status_code == 200
        assert response.json()["data"]["views"] == 0

    def test_get_missing_metrics(self, client):
        response = client.get("/api/products/9999/metrics")
        assert response.status_code == 404
        assert response.json()["error"] == "Metrics not found"

    def test_conversion_rate_from_current_counters(self, client, db_session, seed_product):
        """The rate is derived from the counters, not read from the stored column."""
        metric = db_session.query(ProductMetric).filter_by(product_id=seed_product.id).one()
        metric.views = 8
        metric.added_to_cart = 2
        metric.conversion_rate = 0
        db_session.commit()

        response = client.get(f"/api/products/{seed_product.id}/conversion-rate")
        assert response.status_code == 200
        assert response.json()["data"] == {"product_id": seed_product.id, "conversion_rate": 25.0}

        db_session.expire_all()
        assert db_session.get(ProductMetric, metric.id).conversion_rate == 0

    def test_conversion_rate_missing(self, client):
        response = client.get("/api/products/9999/conversion-rate")
        assert response.status_code == 404


class TestRankings:
    """Test the owner top-N listings."""

    def test_top_by_views_order_and_tie_break(self, client, auth_headers, seed_restaurant, product_factory):
        first = product_factory("First", views=5)
        second = product_factory("Second", views=9)
        third = product_factory("Third", views=5)

        response = client.get(
            f"/api/restaurants/{seed_restaurant.id}/metrics/top-by-views",
            headers=auth_headers,
        )
        assert response.status_code == 200
        ids = [m["product_id"] for m in response.json()["data"]]
        assert ids == [second.id, first.id, third.id]
        assert response.json()["data"][0]["product"]["name"] == "Second"

    def test_top_by_added_to_cart(self, client, auth_headers, seed_restaurant, product_factory):
        low = product_factory("Low", added_to_cart=1)
        high = product_factory("High", added_to_cart=7)

        response = client.get(
            f"/api/restaurants/{seed_restaurant.id}/metrics/top-by-added-to-cart?limit=1",
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert [m["product_id"] for m in response.json()["data"]] == [high.id]
        assert low.id != high.id

    @pytest.mark.parametrize("raw_limit", ["", "abc", "0", "-3"])
    def test_unusable_limit_defaults_to_ten(
        self, client, auth_headers, seed_restaurant, product_factory, raw_limit
    ):
        for index in range(12):
            product_factory(f"Product {index}", views=index)

        response = client.get(
            f"/api/restaurants/{seed_restaurant.id}/metrics/top-by-views?limit={raw_limit}",
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert len(response.json()["data"]) == 10

    def test_limit_is_applied(self, client, auth_headers, seed_restaurant, product_factory):
        for index in range(5):
            product_factory(f"Product {index}", views=index)

        response = client.get(
            f"/api/restaurants/{seed_restaurant.id}/metrics/top-by-views?limit=3",
            headers=auth_headers,
        )
        views = [m["views"] for m in response.json()["data"]]
        assert views == [4, 3, 2]

    def test_huge_limit_returns_every_product(self, client, auth_headers, seed_restaurant, product_factory):
        """A limit beyond the BIGINT range is capped instead of overflowing the driver."""
        for index in range(3):
            product_factory(f"Product {index}", views=index)

        response = client.get(
            f"/api/restaurants/{seed_restaurant.id}/metrics/top-by-views?limit=99999999999999999999",
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert len(response.json()["data"]) == 3

    def test_rankings_owner_only(self, client, other_auth_headers, seed_restaurant):
        response = client.get(
            f"/api/restaurants/{seed_restaurant.id}/metrics/top-by-views",
            headers=other_auth_headers,
        )
        assert response.status_code == 403

    def test_restaurant_metrics_list(self, client, auth_headers, seed_restaurant, seed_product):
        response = client.get(f"/api/restaurants/{seed_restaurant.id}/metrics", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()["data"]
        assert len(data) == 1
        assert data[0]["product"]["name"] == "Margherita"


class TestOverview:
    """Test the owner metrics overview."""

    def test_overview_totals(self, client, auth_headers, seed_restaurant, product_factory):
        first = product_factory("First", views=10, added_to_cart=5, conversion_rate=50.0)
        product_factory("Second", views=10, added_to_cart=1, conversion_rate=10.0)
        product_factory("Third")

        response = client.get(
            f"/api/restaurants/{seed_restaurant.id}/metrics/overview",
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_views"] == 20
        assert data["total_added_to_cart"] == 6
        assert data["average_conversion_rate"] == 20.0
        assert data["total_products"] == 3
        # Equal views: the lowest product id wins
        assert data["top_product"]["product_id"] == first.id

    def test_overview_empty_restaurant(self, client, auth_headers, seed_restaurant):
        response = client.get(
            f"/api/restaurants/{seed_restaurant.id}/metrics/overview",
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"] == {
            "total_views": 0,
            "total_added_to_cart": 0,
            "average_conversion_rate": 0.0,
            "top_product": None,
            "total_products": 0,
        }

    def test_overview_other_user(self, client, other_auth_headers, seed_restaurant):
        response = client.get(
            f"/api/restaurants/{seed_restaurant.id}/metrics/overview",
            headers=other_auth_headers,
        )
        assert response.status_code == 403

    def test_overview_service_result(self, db_session, seed_owner, seed_restaurant, seed_product):
        """The service returns a ServiceResult that scripts can unwrap."""
        overview = MetricsService(db_session).get_restaurant_overview(
            seed_restaurant.id, seed_owner.id
        ).unwrap()
        assert overview.total_products == 1
        assert overview.top_product.product.name == "Margherita"
