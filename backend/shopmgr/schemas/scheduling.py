"""
Scheduling Schemas
"""
from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict


class AssignmentConfirmation(BaseModel):
    """Acknowledgment of a committed mechanic/location assignment"""
    model_config = ConfigDict(frozen=True)

    appointment_id: int
    resource_type: str  # "mechanic" or "location"
    resource_id: int


class DaySlot(BaseModel):
    """
    Availability for one business day.

    The window is always the full workday; appointment_count is only set
    when the day is taken.
    """
    model_config = ConfigDict(frozen=True)

    date: date
    start_time: datetime
    end_time: datetime
    available: bool
    appointment_count: Optional[int] = None
