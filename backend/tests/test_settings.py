"""
Tests for restaurant settings and opening hours.
"""

import sqlite3
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from menu_api.models import OpeningHour
from menu_api.services.crud import BaseRepository
from menu_api.services.domain import OpeningHourService
from shared.utils.exceptions import ConflictError


HOUR_BODY = {"day_of_week": 1, "opens_at": "09:00", "closes_at": "18:00"}


def _hours_url(restaurant):
    return f"/api/restaurants/{restaurant.id}/opening-hours"


def _day_url(restaurant, day: int) -> str:
    return f"/api/restaurants/{restaurant.id}/settings/{restaurant.settings.id}/opening-hours/{day}"


class TestSettings:
    """Test settings read and update."""

    def test_get_settings(self, client, seed_restaurant):
        """Public read returns defaults and (empty) opening hours."""
        response = client.get(f"/api/restaurants/{seed_restaurant.id}/settings")
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["currency"] == "USD"
        assert data["pickup_enabled"] is True
        assert data["delivery_enabled"] is False
        assert data["opening_hours"] == []

    def test_get_settings_missing_restaurant(self, client):
        response = client.get("/api/restaurants/9999/settings")
        assert response.status_code == 404
        assert response.json()["error"] == "Settings not found"

    def test_update_settings_partial(self, client, auth_headers, seed_restaurant):
        """Only provided settings change."""
        response = client.patch(
            f"/api/restaurants/{seed_restaurant.id}/settings",
            json={"currency": "EUR", "delivery_enabled": True},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["currency"] == "EUR"
        assert data["delivery_enabled"] is True
        assert data["show_prices"] is True

    def test_update_settings_other_user(self, client, other_auth_headers, seed_restaurant):
        response = client.patch(
            f"/api/restaurants/{seed_restaurant.id}/settings",
            json={"currency": "EUR"},
            headers=other_auth_headers,
        )
        assert response.status_code == 403
        assert response.json()["error"] == "Unauthorized to update these settings"


class TestOpeningHours:
    """Test opening hour creation, update, toggle and delete."""

    def test_create_opening_hour(self, client, auth_headers, seed_restaurant):
        response = client.post(_hours_url(seed_restaurant), json=HOUR_BODY, headers=auth_headers)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["day_of_week"] == 1
        assert data["is_open"] is True
        assert data["settings_id"] == seed_restaurant.settings.id

    def test_second_hour_same_day_conflicts(self, client, auth_headers, seed_restaurant):
        """One row per day: a second one answers 409."""
        first = client.post(_hours_url(seed_restaurant), json=HOUR_BODY, headers=auth_headers)
        assert first.status_code == 201

        second = client.post(
            _hours_url(seed_restaurant),
            json={**HOUR_BODY, "opens_at": "10:00"},
            headers=auth_headers,
        )
        assert second.status_code == 409
        assert second.json()["error"] == "Opening hour already exists for this day"

    def test_day_race_lost_at_insert_is_conflict(
        self, client, auth_headers, db_session, seed_restaurant, monkeypatch
    ):
        """The unique (settings, day) constraint still answers 409 when the pre-check misses a concurrent insert."""
        first = client.post(_hours_url(seed_restaurant), json=HOUR_BODY, headers=auth_headers)
        assert first.status_code == 201

        monkeypatch.setattr(BaseRepository, "exists", lambda self, *where: False)
        second = client.post(_hours_url(seed_restaurant), json=HOUR_BODY, headers=auth_headers)
        assert second.status_code == 409
        assert second.json()["kind"] == "CONFLICT"
        assert second.json()["error"] == "Opening hour already exists for this day"
        assert db_session.query(OpeningHour).count() == 1

    def test_day_path_out_of_range(self, client, auth_headers, seed_restaurant):
        """A day outside 0..6 in the path fails validation before any lookup."""
        response = client.put(
            _day_url(seed_restaurant, 9),
            json={"closes_at": "22:30"},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "VALIDATION"

    def test_invalid_day_rejected(self, client, auth_headers, seed_restaurant):
        response = client.post(
            _hours_url(seed_restaurant),
            json={**HOUR_BODY, "day_of_week": 7},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_missing_fields_rejected(self, client, auth_headers, seed_restaurant):
        response = client.post(_hours_url(seed_restaurant), json={"day_of_week": 2}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == "opens_at and closes_at are required"

    def test_create_by_other_user_forbidden(self, client, other_auth_headers, seed_restaurant):
        response = client.post(_hours_url(seed_restaurant), json=HOUR_BODY, headers=other_auth_headers)
        assert response.status_code == 403

    def test_hours_listed_by_day(self, client, auth_headers, seed_restaurant):
        """Opening hours come back ordered by day_of_week."""
        for day in (5, 0, 3):
            client.post(
                _hours_url(seed_restaurant),
                json={**HOUR_BODY, "day_of_week": day},
                headers=auth_headers,
            )
        response = client.get(_hours_url(seed_restaurant))
        assert response.status_code == 200
        days = [h["day_of_week"] for h in response.json()["data"]["opening_hours"]]
        assert days == [0, 3, 5]

    def test_update_opening_hour(self, client, auth_headers, seed_restaurant):
        client.post(_hours_url(seed_restaurant), json=HOUR_BODY, headers=auth_headers)

        response = client.put(
            _day_url(seed_restaurant, 1),
            json={"closes_at": "22:30"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["closes_at"] == "22:30"
        assert data["opens_at"] == "09:00"

    def test_update_missing_day(self, client, auth_headers, seed_restaurant):
        response = client.put(
            _day_url(seed_restaurant, 4),
            json={"closes_at": "22:30"},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Opening hour not found"

    def test_settings_of_other_restaurant_not_found(
        self, client, auth_headers, other_auth_headers, seed_restaurant
    ):
        """A settings id from another restaurant is reported as not found."""
        other = client.post(
            "/api/restaurants",
            json={"name": "Other", "slug": "other", "address": "x", "phone": "1"},
            headers=other_auth_headers,
        ).json()["data"]

        response = client.put(
            f"/api/restaurants/{seed_restaurant.id}/settings/{other['settings']['id']}/opening-hours/1",
            json={"closes_at": "22:30"},
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Settings not found"

    def test_toggle_twice_restores(self, client, auth_headers, seed_restaurant):
        client.post(_hours_url(seed_restaurant), json=HOUR_BODY, headers=auth_headers)
        url = _day_url(seed_restaurant, 1) + "/toggle"

        first = client.patch(url, headers=auth_headers)
        assert first.status_code == 200
        assert first.json()["data"]["is_open"] is False

        second = client.patch(url, headers=auth_headers)
        assert second.json()["data"]["is_open"] is True

    def test_delete_opening_hour(self, client, auth_headers, db_session, seed_restaurant):
        client.post(_hours_url(seed_restaurant), json=HOUR_BODY, headers=auth_headers)

        response = client.delete(_day_url(seed_restaurant, 1), headers=auth_headers)
        assert response.status_code == 204
        assert db_session.query(OpeningHour).count() == 0


class _PostgresError(Exception):
    """Driver error carrying a diagnostics block, as psycopg raises them."""

    def __init__(self, constraint_name):
        super().__init__("duplicate key value violates unique constraint")
        self.diag = SimpleNamespace(constraint_name=constraint_name)


class TestOpeningHourIntegrityErrors:
    """Only the duplicate-day constraint becomes a conflict."""

    @staticmethod
    def _error(orig):
        return IntegrityError("INSERT INTO opening_hour", {}, orig)

    def test_duplicate_day_sqlite(self, db_session):
        exc = self._error(
            sqlite3.IntegrityError("UNIQUE constraint failed: opening_hour.settings_id, opening_hour.day_of_week")
        )
        with pytest.raises(ConflictError, match="Opening hour already exists for this day"):
            OpeningHourService(db_session)._on_integrity_error(exc)

    def test_duplicate_day_postgres(self, db_session):
        exc = self._error(_PostgresError("uq_opening_hour_settings_day"))
        with pytest.raises(ConflictError):
            OpeningHourService(db_session)._on_integrity_error(exc)

    def test_foreign_key_failure_propagates(self, db_session):
        """Anything but the duplicate day is left for the caller to re-raise."""
        exc = self._error(sqlite3.IntegrityError("FOREIGN KEY constraint failed"))
        assert OpeningHourService(db_session)._on_integrity_error(exc) is None

    def test_other_unique_constraint_propagates(self, db_session):
        exc = self._error(sqlite3.IntegrityError("UNIQUE constraint failed: opening_hour.id"))
        assert OpeningHourService(db_session)._on_integrity_error(exc) is None

        exc = self._error(_PostgresError("opening_hour_pkey"))
        assert OpeningHourService(db_session)._on_integrity_error(exc) is None
