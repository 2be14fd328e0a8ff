"""
Common Result Schemas

Every service operation returns a ServiceResult: either a success payload or
a structured error, so expected validation failures never surface as
unhandled exceptions.
"""
from datetime import datetime
from typing import Any, Dict, Generic, Optional, TypeVar
from pydantic import BaseModel, Field

from shopmgr.exceptions import ShopMgrException

T = TypeVar("T")


# ============================================================================
# Error Response Models
# ============================================================================

class ErrorResponse(BaseModel):
    """
    Standardized error payload.

    Error Codes:
        - NOT_FOUND: Appointment, mechanic, location or work log absent
        - INELIGIBLE: Inactive mechanic or out-of-service location
        - SCHEDULING_CONFLICT: Mechanic already booked in that window
        - CAPACITY_EXCEEDED: Location has no room in that window
        - INVALID_STATE: Work log missing required timestamps

    Example:
        {
            "error": "NOT_FOUND",
            "message": "Mechanic 12 not found",
            "details": {"resource": "Mechanic", "resource_id": "12"},
            "timestamp": "2025-12-23T10:30:00Z"
        }
    """
    error: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Identifying context (ids, names) for display"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the error occurred (UTC)"
    )

    @classmethod
    def from_exception(cls, exc: ShopMgrException) -> "ErrorResponse":
        return cls(**exc.to_dict())


# ============================================================================
# Service Result
# ============================================================================

class ServiceResult(BaseModel, Generic[T]):
    """Tagged success/failure outcome of a service operation."""
    ok: bool
    value: Optional[T] = None
    message: Optional[str] = None
    error: Optional[ErrorResponse] = None

    @classmethod
    def succeeded(cls, value: Optional[T] = None, message: Optional[str] = None) -> "ServiceResult[T]":
        return cls(ok=True, value=value, message=message)

    @classmethod
    def failed(cls, exc: ShopMgrException, value: Optional[T] = None) -> "ServiceResult[T]":
        """Failure carrying the error and, where useful, a safe default value."""
        return cls(ok=False, value=value, message=exc.message, error=ErrorResponse.from_exception(exc))

    @property
    def error_code(self) -> Optional[str]:
        return self.error.error if self.error else None
