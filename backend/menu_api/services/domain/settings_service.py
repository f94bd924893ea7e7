"""
Restaurant Settings and Opening Hours Services.

Usage:
    from menu_api.services.domain import SettingsService, OpeningHourService

    SettingsService(db).update(restaurant_id, user_id, {"currency": "EUR"})
    OpeningHourService(db).create(restaurant_id, user_id, {"day_of_week": 1, ...})
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from menu_api.models import OpeningHour, RestaurantSettings
from menu_api.schemas import OpeningHourOutput, SettingsOutput
from menu_api.services.base_service import BaseCRUDService, violates_unique
from menu_api.services.permissions import settings_link
from shared.config.constants import DayOfWeek
from shared.utils.exceptions import ConflictError, NotFoundError, ValidationError
from shared.utils.result import service_operation

DUPLICATE_DAY_MESSAGE = "Opening hour already exists for this day"


class SettingsService(BaseCRUDService[RestaurantSettings, SettingsOutput]):
    """
    Service for per-restaurant settings.

    Settings rows are created together with their restaurant, so there is no
    create or delete here.
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=RestaurantSettings,
            output_schema=SettingsOutput,
            entity_name="Settings",
            text_fields=(),
        )

    @service_operation("Failed to fetch settings")
    def get(self, restaurant_id: int) -> SettingsOutput:
        """Settings with opening hours ordered by day. Public."""
        settings = self._repo.find_one_by(
            restaurant_id=restaurant_id,
            options=[selectinload(RestaurantSettings.opening_hours)],
        )
        if settings is None:
            raise NotFoundError("Settings", restaurant_id=restaurant_id)
        return self.to_output(settings)

    @service_operation("Failed to update settings")
    def update(self, restaurant_id: int, user_id: int, data: dict[str, Any]) -> SettingsOutput:
        restaurant = self.resolver.authorize_restaurant(
            user_id, restaurant_id, action="update these settings"
        )
        if restaurant.settings is None:
            raise NotFoundError("Settings", restaurant_id=restaurant_id)
        settings = self._apply_update(restaurant.settings, data)
        return self.to_output(settings)


class OpeningHourService(BaseCRUDService[OpeningHour, OpeningHourOutput]):
    """
    Service for opening hours.

    Business rules:
    - At most one row per (settings, day_of_week); a second one is a conflict
    - Rows are addressed by settings id and day, not by their own id
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=OpeningHour,
            output_schema=OpeningHourOutput,
            entity_name="Opening hour",
            required_fields=("day_of_week", "opens_at", "closes_at"),
            toggle_field="is_open",
            text_fields=(),
        )

    def _find(self, settings_id: int, day_of_week: int) -> OpeningHour:
        hour = self._repo.find_one_by(settings_id=settings_id, day_of_week=day_of_week)
        if hour is None:
            raise NotFoundError("Opening hour", settings_id=settings_id, day_of_week=day_of_week)
        return hour

    def _authorized_hour(
        self, restaurant_id: int, settings_id: int, day_of_week: int, user_id: int
    ) -> OpeningHour:
        self.resolver.authorize(user_id, restaurant_id, settings_link(settings_id))
        return self._find(settings_id, day_of_week)

    @service_operation("Failed to create opening hour")
    def create(self, restaurant_id: int, user_id: int, data: dict[str, Any]) -> OpeningHourOutput:
        self._require(data)
        if not DayOfWeek.is_valid(data["day_of_week"]):
            raise ValidationError("day_of_week must be between 0 and 6", day_of_week=data["day_of_week"])

        restaurant = self.resolver.authorize_restaurant(user_id, restaurant_id)
        settings = restaurant.settings
        if settings is None:
            raise NotFoundError("Settings", restaurant_id=restaurant_id)

        if self._repo.exists(
            OpeningHour.settings_id == settings.id,
            OpeningHour.day_of_week == data["day_of_week"],
        ):
            raise ConflictError(DUPLICATE_DAY_MESSAGE, settings_id=settings.id, day_of_week=data["day_of_week"])

        hour = OpeningHour(
            settings_id=settings.id,
            day_of_week=data["day_of_week"],
            opens_at=data["opens_at"],
            closes_at=data["closes_at"],
            is_open=data.get("is_open", True),
        )
        return self.to_output(self._insert(hour))

    @service_operation("Failed to update opening hour")
    def update(
        self,
        restaurant_id: int,
        settings_id: int,
        day_of_week: int,
        user_id: int,
        data: dict[str, Any],
    ) -> OpeningHourOutput:
        hour = self._authorized_hour(restaurant_id, settings_id, day_of_week, user_id)
        return self.to_output(self._apply_update(hour, data))

    @service_operation("Failed to delete opening hour")
    def delete(self, restaurant_id: int, settings_id: int, day_of_week: int, user_id: int) -> None:
        hour = self._authorized_hour(restaurant_id, settings_id, day_of_week, user_id)
        self._delete(hour)

    @service_operation("Failed to toggle opening hour")
    def toggle(self, restaurant_id: int, settings_id: int, day_of_week: int, user_id: int) -> OpeningHourOutput:
        hour = self._authorized_hour(restaurant_id, settings_id, day_of_week, user_id)
        return self.to_output(self._toggle(hour))

    def _on_integrity_error(self, exc: IntegrityError) -> None:
        # Concurrent insert for the same day won the race; anything else propagates
        if violates_unique(exc, "uq_opening_hour_settings_day", "settings_id", "day_of_week"):
            raise ConflictError(DUPLICATE_DAY_MESSAGE) from exc
