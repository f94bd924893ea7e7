"""
Typed path parameters.

Out-of-range values fail request validation (400 envelope) instead of
reaching the database driver.
"""

from typing import Annotated

from fastapi import Path

from shared.config.constants import DayOfWeek, Limits

EntityId = Annotated[int, Path(ge=1, le=Limits.MAX_DB_INTEGER)]
DayOfWeekParam = Annotated[int, Path(ge=DayOfWeek.SUNDAY, le=DayOfWeek.SATURDAY)]
