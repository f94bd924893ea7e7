"""
Common utilities shared across routers.
"""

from .dependencies import current_user_id
from .params import DayOfWeekParam, EntityId
from .responses import envelope_response, failure_status_for

__all__ = [
    "DayOfWeekParam",
    "EntityId",
    "current_user_id",
    "envelope_response",
    "failure_status_for",
]
