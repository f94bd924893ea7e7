"""
Centralized constants for the backend application.
Avoids magic strings and repeated numbers across services and routers.

Usage:
    from shared.config.constants import Limits, DayOfWeek

    if not DayOfWeek.is_valid(day):
        ...
"""

from typing import Final


# =============================================================================
# Opening hours
# =============================================================================


class DayOfWeek:
    """Day-of-week numbering used by opening hours (0 = Sunday)."""

    SUNDAY: Final[int] = 0
    MONDAY: Final[int] = 1
    TUESDAY: Final[int] = 2
    WEDNESDAY: Final[int] = 3
    THURSDAY: Final[int] = 4
    FRIDAY: Final[int] = 5
    SATURDAY: Final[int] = 6

    ALL: Final[list[int]] = [SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY]

    @classmethod
    def is_valid(cls, day: int) -> bool:
        return cls.SUNDAY <= day <= cls.SATURDAY


# Opening/closing times are stored as "HH:MM" strings
TIME_PATTERN: Final[str] = r"^([01]\d|2[0-3]):[0-5]\d$"

# Restaurant slugs: lowercase words joined by hyphens
SLUG_PATTERN: Final[str] = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


# =============================================================================
# Validation Limits
# =============================================================================


class Limits:
    """Validation limits."""

    # Price limits
    MIN_PRICE: Final[int] = 0
    MAX_PRICE: Final[int] = 100_000

    # String lengths
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_SLUG_LENGTH: Final[int] = 100
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_URL_LENGTH: Final[int] = 2048

    # Largest value a BIGINT column (ids, LIMIT) accepts
    MAX_DB_INTEGER: Final[int] = 2**63 - 1
    # Largest value an INTEGER column (order_index, selections) accepts
    MAX_DB_SMALL_INTEGER: Final[int] = 2**31 - 1

    # Metrics rankings
    DEFAULT_TOP_PRODUCTS: Final[int] = 10

    # Conversion rate precision (decimal places)
    RATE_DECIMALS: Final[int] = 2

    # Password
    MIN_PASSWORD_LENGTH: Final[int] = 6
    # bcrypt only reads the first 72 bytes
    MAX_PASSWORD_BYTES: Final[int] = 72
