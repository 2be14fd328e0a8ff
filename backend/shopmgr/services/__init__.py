"""Scheduling services"""
from shopmgr.services.availability import MechanicAvailabilityService
from shopmgr.services.resource_assignment import ResourceAssignmentService
from shopmgr.services.work_log_hours import WorkLogService

__all__ = [
    "MechanicAvailabilityService",
    "ResourceAssignmentService",
    "WorkLogService",
]
