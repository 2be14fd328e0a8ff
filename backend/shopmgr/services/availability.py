"""
Mechanic Availability Service

Day-granular availability for one mechanic over a date range. Each business
day in range yields one DaySlot covering the fixed workday window; a day
with any active appointment is reported busy with a count. Partially booked
days are not split into free/busy windows.
"""
from collections import Counter
from datetime import date, datetime, time, timedelta
from typing import Any, List, Union

from shopmgr.core.status_config import ACTIVE_APPOINTMENT_STATUSES
from shopmgr.logging_config import get_logger
from shopmgr.models import Mechanic
from shopmgr.repositories.record_store import AppointmentQuery, RecordStore
from shopmgr.schemas.common import ServiceResult
from shopmgr.schemas.scheduling import DaySlot

logger = get_logger(__name__)

WORKDAY_START = time(8, 0)
WORKDAY_END = time(17, 0)

# date.weekday(): Monday=0 ... Saturday=5, Sunday=6
WEEKEND_DAYS = frozenset({5, 6})

DateLike = Union[date, datetime]


def is_business_day(day: date) -> bool:
    return day.weekday() not in WEEKEND_DAYS


def iter_business_days(start: date, end: date):
    """Weekdays from start through end inclusive, ascending."""
    current = start
    while current <= end:
        if is_business_day(current):
            yield current
        current += timedelta(days=1)


def _range_start(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _range_end(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.max)


class MechanicAvailabilityService:
    """Builds per-day availability slots from a mechanic's active appointments."""

    def __init__(self, store: RecordStore):
        self.store = store

    def get_mechanic_availability(
        self,
        mechanic_id: Any,
        from_date: DateLike,
        thru_date: DateLike,
    ) -> ServiceResult[List[DaySlot]]:
        """
        Availability for each business day between from_date and thru_date.

        A missing or inactive mechanic has no availability: the result is a
        success with an empty list, not an error.

        Args:
            mechanic_id: Mechanic to check
            from_date: Range start (a bare date means start of that day)
            thru_date: Range end, inclusive (a bare date means end of that day)

        Returns:
            ServiceResult whose value is the DaySlot list, ascending by date
        """
        mechanic = self.store.get(Mechanic, mechanic_id)
        if mechanic is None or not mechanic.is_active:
            logger.info(
                "No availability for missing or inactive mechanic",
                extra={"mechanic_id": mechanic_id},
            )
            return ServiceResult.succeeded([])

        range_start = _range_start(from_date)
        range_end = _range_end(thru_date)
        if range_end < range_start:
            return ServiceResult.succeeded([])

        appointments = self.store.list_appointments(
            AppointmentQuery(
                mechanic_id=mechanic.id,
                statuses=ACTIVE_APPOINTMENT_STATUSES,
                date_from=range_start,
                date_to=range_end,
                order_by_date=True,
            )
        )
        per_day = Counter(appt.appointment_date.date() for appt in appointments)

        slots = []
        for day in iter_business_days(range_start.date(), range_end.date()):
            count = per_day.get(day, 0)
            slots.append(DaySlot(
                date=day,
                start_time=datetime.combine(day, WORKDAY_START),
                end_time=datetime.combine(day, WORKDAY_END),
                available=count == 0,
                appointment_count=count or None,
            ))

        logger.debug(
            f"Computed {len(slots)} day slots for mechanic {mechanic.id}",
            extra={"mechanic_id": mechanic.id, "appointments": len(appointments)},
        )
        return ServiceResult.succeeded(slots)
