"""Status Configuration

Valid status values for appointments, mechanics and locations, and the
fixed set of appointment statuses that occupy a mechanic or a bay.
"""
from enum import Enum
from typing import FrozenSet


# =============================================================================
# Appointment Status
# =============================================================================

class AppointmentStatus(str, Enum):
    """Valid status values for Appointments"""
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


# Statuses counted for double-booking and capacity checks
ACTIVE_APPOINTMENT_STATUSES: FrozenSet[str] = frozenset({
    AppointmentStatus.SCHEDULED.value,
    AppointmentStatus.CONFIRMED.value,
    AppointmentStatus.IN_PROGRESS.value,
})


def is_active_appointment_status(status: str) -> bool:
    """Check if an appointment in this status blocks its mechanic/location"""
    return status in ACTIVE_APPOINTMENT_STATUSES


# =============================================================================
# Mechanic Status
# =============================================================================

class MechanicStatus(str, Enum):
    """Valid status values for Mechanics"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"


# =============================================================================
# Location Status
# =============================================================================

class LocationStatus(str, Enum):
    """Valid status values for service Locations (bays, lifts)"""
    AVAILABLE = "available"
    OUT_OF_SERVICE = "out_of_service"
