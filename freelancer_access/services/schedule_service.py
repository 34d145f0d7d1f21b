"""
Access schedules.

A schedule bounds the dates on which a user's grants are honoured. It is
evaluated against the current date on every check and never cached, since
the answer changes at midnight.
"""

import enum
import logging
from datetime import date
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from freelancer_access.exceptions import ValidationError
from freelancer_access.models.access_schedule import AccessSchedule
from freelancer_access.schemas.access import ScheduleData

logger = logging.getLogger(__name__)


class ScheduleStatus(str, enum.Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    NOT_YET_STARTED = "not_yet_started"


def schedule_status(schedule: ScheduleData | None, today: date) -> ScheduleStatus:
    if schedule is None:
        return ScheduleStatus.ACTIVE
    if schedule.start_date is not None and today < schedule.start_date:
        return ScheduleStatus.NOT_YET_STARTED
    if schedule.end_date is not None and today > schedule.end_date:
        return ScheduleStatus.EXPIRED
    return ScheduleStatus.ACTIVE


def is_active(schedule: ScheduleData | None, today: date) -> bool:
    """True when *today* falls inside the window (bounds inclusive)."""
    return schedule_status(schedule, today) is ScheduleStatus.ACTIVE


class ScheduleStore(Protocol):
    async def get_schedule(self, user_id: int) -> ScheduleData | None: ...


class DatabaseScheduleStore:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_schedule(self, user_id: int) -> ScheduleData | None:
        row = await self.db.get(AccessSchedule, user_id)
        if row is None or (row.start_date is None and row.end_date is None):
            return None
        return ScheduleData(start_date=row.start_date, end_date=row.end_date)

    async def set_schedule(
        self, user_id: int, start_date: date | None = None, end_date: date | None = None
    ) -> ScheduleData | None:
        """
        Store the user's window.

        A window with neither bound is the same as no schedule, so it is
        stored as no record at all.
        """
        if start_date and end_date and end_date < start_date:
            raise ValidationError("End date must not be before start date", field="end_date")

        if start_date is None and end_date is None:
            await self.clear_schedule(user_id)
            return None

        row = await self.db.get(AccessSchedule, user_id)
        if row is None:
            row = AccessSchedule(user_id=user_id)
            self.db.add(row)
        row.start_date = start_date
        row.end_date = end_date
        await self.db.commit()
        logger.info("Schedule set: user=%s start=%s end=%s", user_id, start_date, end_date)
        return ScheduleData(start_date=start_date, end_date=end_date)

    async def clear_schedule(self, user_id: int) -> None:
        row = await self.db.get(AccessSchedule, user_id)
        if row is not None:
            await self.db.delete(row)
            await self.db.commit()
            logger.info("Schedule cleared: user=%s", user_id)
