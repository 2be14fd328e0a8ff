"""
Overlap Detection

Pure interval logic behind double-booking and capacity checks. No I/O:
callers fetch the competing appointments and pass them in.

Intervals are closed: two appointments that touch at a single instant
(one ends at 10:00, the next starts at 10:00) overlap.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Optional

from shopmgr.core.status_config import is_active_appointment_status
from shopmgr.models import Appointment


@dataclass(frozen=True)
class Interval:
    """Closed time range [start, end]; start == end is an instant."""
    start: datetime
    end: datetime

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Interval start {self.start} is after end {self.end}")

    @property
    def is_instant(self) -> bool:
        return self.start == self.end


def resolve_interval(appointment: Appointment) -> Interval:
    """
    Effective interval of an appointment.

    Precise bounds win; appointment_date stands in for whichever is missing.
    With neither bound set the interval is the instant appointment_date.
    If only one bound is stored and it lands on the wrong side of
    appointment_date, the interval collapses to the instant at its start.
    """
    start = appointment.scheduled_start_time or appointment.appointment_date
    end = appointment.scheduled_end_time or appointment.appointment_date
    if end < start:
        end = start
    return Interval(start, end)


def overlaps(candidate: Interval, other: Interval) -> bool:
    """True if the closed intervals share at least one instant."""
    return candidate.start <= other.end and candidate.end >= other.start


def find_overlapping(
    candidate: Interval,
    appointments: Iterable[Appointment],
    exclude_appointment_id: Optional[Any] = None,
) -> List[Appointment]:
    """
    Active appointments whose effective interval overlaps candidate.

    The appointment being (re)assigned is skipped so it never conflicts with
    itself.
    """
    return [
        appt for appt in appointments
        if (exclude_appointment_id is None or appt.id != exclude_appointment_id)
        and is_active_appointment_status(appt.status)
        and overlaps(candidate, resolve_interval(appt))
    ]


def count_overlapping(
    candidate: Interval,
    appointments: Iterable[Appointment],
    exclude_appointment_id: Optional[Any] = None,
) -> int:
    return len(find_overlapping(candidate, appointments, exclude_appointment_id))
