"""Database models"""
from shopmgr.models.mechanic import Mechanic
from shopmgr.models.location import Location
from shopmgr.models.appointment import Appointment
from shopmgr.models.work_log import WorkLog

__all__ = [
    "Mechanic",
    "Location",
    "Appointment",
    "WorkLog",
]
