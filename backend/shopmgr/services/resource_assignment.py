"""
Resource Assignment Service

Assigns a mechanic or a location to an appointment after checking that the
resource exists, is eligible, and is free during the appointment's
effective interval.

Validation order (fail fast, no writes on failure):
1. Appointment exists
2. Resource exists
3. Resource is eligible (mechanic active / location in service)
4. No conflict (mechanic: zero overlaps; location: overlaps < capacity)
5. Set the foreign key and persist

The read-validate-write sequence runs in one store transaction with the
resource row locked, so two concurrent assignments to the same mechanic or
location cannot both pass step 4.
"""
from typing import Any, Callable, List

from shopmgr.core.status_config import ACTIVE_APPOINTMENT_STATUSES
from shopmgr.exceptions import (
    RECOVERABLE_ERRORS,
    CapacityExceededError,
    IneligibleError,
    NotFoundError,
    SchedulingConflictError,
)
from shopmgr.logging_config import get_logger
from shopmgr.models import Appointment, Location, Mechanic
from shopmgr.repositories.record_store import AppointmentQuery, RecordStore
from shopmgr.schemas.common import ServiceResult
from shopmgr.schemas.scheduling import AssignmentConfirmation
from shopmgr.services.overlap import find_overlapping, resolve_interval

logger = get_logger(__name__)


class ResourceAssignmentService:
    """Point validation and commit of a single mechanic/location assignment."""

    def __init__(self, store: RecordStore):
        self.store = store

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def assign_mechanic(self, appointment_id: Any, mechanic_id: Any) -> ServiceResult[AssignmentConfirmation]:
        """Assign a mechanic, rejecting inactive mechanics and any double-booking."""
        return self._run(
            "mechanic", appointment_id, mechanic_id, self._assign_mechanic,
            success_message="Mechanic assigned successfully",
        )

    def assign_location(self, appointment_id: Any, location_id: Any) -> ServiceResult[AssignmentConfirmation]:
        """Assign a location, rejecting out-of-service locations and full bays."""
        return self._run(
            "location", appointment_id, location_id, self._assign_location,
            success_message="Location assigned successfully",
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(
        self,
        resource_type: str,
        appointment_id: Any,
        resource_id: Any,
        assign: Callable[[Any, Any], AssignmentConfirmation],
        success_message: str,
    ) -> ServiceResult[AssignmentConfirmation]:
        log_context = {
            "appointment_id": appointment_id,
            "resource_type": resource_type,
            "resource_id": resource_id,
        }
        try:
            with self.store.transaction():
                confirmation = assign(appointment_id, resource_id)
        except RECOVERABLE_ERRORS as exc:
            logger.warning(
                f"{resource_type.capitalize()} assignment rejected: {exc.message}",
                extra={**log_context, "error_code": exc.error_code},
            )
            return ServiceResult.failed(exc)

        logger.info(success_message, extra=log_context)
        return ServiceResult.succeeded(confirmation, message=success_message)

    def _get_appointment(self, appointment_id: Any) -> Appointment:
        appointment = self.store.get(Appointment, appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment", appointment_id)
        return appointment

    def _competing_appointments(self, appointment: Appointment, **resource_filter) -> List[Appointment]:
        """Active appointments on the same resource, other than this one."""
        return self.store.list_appointments(
            AppointmentQuery(
                statuses=ACTIVE_APPOINTMENT_STATUSES,
                exclude_id=appointment.id,
                **resource_filter,
            )
        )

    def _assign_mechanic(self, appointment_id: Any, mechanic_id: Any) -> AssignmentConfirmation:
        appointment = self._get_appointment(appointment_id)

        mechanic = self.store.get(Mechanic, mechanic_id, for_update=True)
        if mechanic is None:
            raise NotFoundError("Mechanic", mechanic_id)

        if not mechanic.is_active:
            raise IneligibleError(
                "Mechanic", mechanic.id,
                f"Mechanic {mechanic.full_name} is not active",
                status=mechanic.status,
            )

        # Mechanic bookings are exclusive regardless of location
        conflicts = find_overlapping(
            resolve_interval(appointment),
            self._competing_appointments(appointment, mechanic_id=mechanic.id),
            exclude_appointment_id=appointment.id,
        )
        if conflicts:
            raise SchedulingConflictError(
                conflicting_ids=[c.id for c in conflicts],
                details={
                    "appointment_id": str(appointment.id),
                    "mechanic_id": str(mechanic.id),
                    "mechanic": mechanic.full_name,
                },
            )

        appointment.mechanic_id = mechanic.id
        self.store.update(appointment)
        return AssignmentConfirmation(
            appointment_id=appointment.id, resource_type="mechanic", resource_id=mechanic.id
        )

    def _assign_location(self, appointment_id: Any, location_id: Any) -> AssignmentConfirmation:
        appointment = self._get_appointment(appointment_id)

        location = self.store.get(Location, location_id, for_update=True)
        if location is None:
            raise NotFoundError("Location", location_id)

        if location.is_out_of_service:
            raise IneligibleError(
                "Location", location.id,
                f"Location {location.location_name} is out of service",
                status=location.status,
            )

        capacity = location.effective_capacity
        overlap_count = len(find_overlapping(
            resolve_interval(appointment),
            self._competing_appointments(appointment, location_id=location.id),
            exclude_appointment_id=appointment.id,
        ))
        # capacity caps the *other* concurrent appointments
        if overlap_count >= capacity:
            raise CapacityExceededError(
                location.location_name,
                capacity=capacity,
                overlap_count=overlap_count,
                details={
                    "appointment_id": str(appointment.id),
                    "location_id": str(location.id),
                },
            )

        appointment.location_id = location.id
        self.store.update(appointment)
        return AssignmentConfirmation(
            appointment_id=appointment.id, resource_type="location", resource_id=location.id
        )
