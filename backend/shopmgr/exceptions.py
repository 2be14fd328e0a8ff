"""
Shop Manager - Custom Exception Hierarchy

Provides structured, typed exceptions with error codes for consistent
error handling across the scheduling services.

Services raise these internally and convert the recoverable ones into a
failed ServiceResult at their boundary (see shopmgr.schemas.common).

Usage:
    from shopmgr.exceptions import NotFoundError, IneligibleError

    raise NotFoundError("Appointment", appointment_id)
    raise IneligibleError("Mechanic", mechanic_id, "Mechanic Jo Smith is not active")
"""
from typing import Any, Dict, List, Optional


class ShopMgrException(Exception):
    """
    Base exception for all Shop Manager errors.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code (e.g., "NOT_FOUND")
        status_code: HTTP-style status code for callers that expose one
        details: Additional context (ids, names) for display
    """

    error_code: str = "SHOPMGR_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for a response payload."""
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# ===================
# 400 Bad Request Errors
# ===================


class InvalidStateError(ShopMgrException):
    """Raised when a record is not in a state the operation can work with."""

    error_code = "INVALID_STATE"
    status_code = 400

    def __init__(
        self,
        message: str = "Operation not allowed in current state",
        *,
        resource: Optional[str] = None,
        resource_id: Any = None,
        missing_fields: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if resource:
            details["resource"] = resource
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        if missing_fields:
            details["missing_fields"] = missing_fields
        super().__init__(message, details=details)


# ===================
# 404 Not Found Errors
# ===================


class NotFoundError(ShopMgrException):
    """Raised when a record is not found."""

    error_code = "NOT_FOUND"
    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Any = None,
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["resource"] = resource
        if resource_id is not None:
            details["resource_id"] = str(resource_id)
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} {resource_id} not found"
        super().__init__(message, details=details)


# ===================
# 409 Conflict Errors
# ===================


class SchedulingConflictError(ShopMgrException):
    """Raised when a mechanic is already booked during the requested time."""

    error_code = "SCHEDULING_CONFLICT"
    status_code = 409

    def __init__(
        self,
        message: str = "Mechanic has conflicting appointment(s) during this time",
        *,
        conflicting_ids: Optional[List[Any]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if conflicting_ids:
            details["conflicting_appointments"] = [str(i) for i in conflicting_ids]
        super().__init__(message, details=details)


class CapacityExceededError(SchedulingConflictError):
    """Raised when a location has no room for another concurrent appointment."""

    error_code = "CAPACITY_EXCEEDED"

    def __init__(
        self,
        location_name: str,
        *,
        capacity: int,
        overlap_count: int,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["location"] = location_name
        details["capacity"] = capacity
        details["capacity_used"] = overlap_count
        super().__init__(
            f"Location {location_name} is at capacity during this time",
            details=details,
        )


# ===================
# 422 Unprocessable Entity Errors
# ===================


class BusinessRuleError(ShopMgrException):
    """Raised when a business rule is violated."""

    error_code = "BUSINESS_RULE_ERROR"
    status_code = 422

    def __init__(
        self,
        message: str = "Business rule violation",
        *,
        rule: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        if rule:
            details["rule"] = rule
        super().__init__(message, details=details)


class IneligibleError(BusinessRuleError):
    """Raised when a mechanic or location cannot take appointments."""

    error_code = "INELIGIBLE"

    def __init__(
        self,
        resource: str,
        resource_id: Any,
        message: str,
        *,
        status: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        details = details or {}
        details["resource"] = resource
        details["resource_id"] = str(resource_id)
        if status:
            details["status"] = status
        super().__init__(message, details=details)


# ===================
# 500 Internal Server Errors
# ===================


class DatabaseError(ShopMgrException):
    """Raised when a record store operation fails."""

    error_code = "DATABASE_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str = "Database operation failed",
        *,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)


# Expected outcomes that services report as failed results instead of raising.
RECOVERABLE_ERRORS = (
    NotFoundError,
    InvalidStateError,
    SchedulingConflictError,
    BusinessRuleError,
)
