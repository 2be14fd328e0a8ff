"""
Work Log Hours Service

Derives hours_worked from a work log's start/end times and seeds
billable_hours from it the first time only. Hours are money downstream, so
they are Decimals rounded half-up to two places.
"""
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from shopmgr.core.settings import get_settings
from shopmgr.exceptions import RECOVERABLE_ERRORS, InvalidStateError, NotFoundError
from shopmgr.logging_config import get_logger
from shopmgr.models import WorkLog
from shopmgr.repositories.record_store import RecordStore
from shopmgr.schemas.common import ServiceResult

logger = get_logger(__name__)

HOURS_QUANTUM = Decimal("0.01")
ZERO_HOURS = Decimal("0.00")


def calculate_hours(start_time: datetime, end_time: datetime, truncate_to_minutes: bool = True) -> Decimal:
    """
    Elapsed hours between two instants, rounded half-up to 2 places.

    With truncate_to_minutes the elapsed time is cut to whole minutes
    first (09:00:00 -> 09:00:45 is 0 minutes); otherwise whole seconds count.
    The often quoted 0.01 hours for a 45-second log (0.0125 rounded half-up)
    only holds at second precision. The whole-minute default gives 0.00,
    which is expected and not a rounding bug. WORK_LOG_TRUNCATE_TO_MINUTES
    selects the mode for WorkLogService.

    Examples:
        >>> calculate_hours(datetime(2025, 1, 6, 9, 0), datetime(2025, 1, 6, 13, 30))
        Decimal('4.50')
        >>> calculate_hours(datetime(2025, 1, 6, 9, 0), datetime(2025, 1, 6, 9, 0, 45))
        Decimal('0.00')
        >>> calculate_hours(datetime(2025, 1, 6, 9, 0), datetime(2025, 1, 6, 9, 0, 45), False)
        Decimal('0.01')
    """
    elapsed_seconds = int((end_time - start_time).total_seconds())
    if truncate_to_minutes:
        hours = Decimal(elapsed_seconds // 60) / Decimal(60)
    else:
        hours = Decimal(elapsed_seconds) / Decimal(3600)
    return hours.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


class WorkLogService:
    """Computes and stores labor hours for work logs."""

    def __init__(self, store: RecordStore, truncate_to_minutes: Optional[bool] = None):
        self.store = store
        if truncate_to_minutes is None:
            truncate_to_minutes = get_settings().WORK_LOG_TRUNCATE_TO_MINUTES
        self.truncate_to_minutes = truncate_to_minutes

    def compute_hours(self, work_log_id: Any) -> ServiceResult[Decimal]:
        """
        Recompute hours_worked for a work log.

        billable_hours is only filled in when it is still empty, so a manual
        override survives recomputation.

        Returns:
            ServiceResult with the hours worked; failures carry 0.00 hours
        """
        try:
            with self.store.transaction():
                work_log = self.store.get(WorkLog, work_log_id)
                if work_log is None:
                    raise NotFoundError("Work log", work_log_id)

                missing = [
                    name for name in ("start_time", "end_time")
                    if getattr(work_log, name) is None
                ]
                if missing:
                    raise InvalidStateError(
                        "Work log must have both start and end times",
                        resource="Work log",
                        resource_id=work_log_id,
                        missing_fields=missing,
                    )
                if work_log.end_time < work_log.start_time:
                    raise InvalidStateError(
                        "Work log end time is before its start time",
                        resource="Work log",
                        resource_id=work_log_id,
                    )

                hours_worked = calculate_hours(
                    work_log.start_time, work_log.end_time, self.truncate_to_minutes
                )
                work_log.hours_worked = hours_worked
                if work_log.billable_hours is None:
                    work_log.billable_hours = hours_worked
                self.store.update(work_log)
        except RECOVERABLE_ERRORS as exc:
            logger.warning(
                f"Work log hours not computed: {exc.message}",
                extra={"work_log_id": work_log_id, "error_code": exc.error_code},
            )
            return ServiceResult.failed(exc, value=ZERO_HOURS)

        logger.info(
            f"Work log {work_log_id}: {hours_worked} hours worked",
            extra={"work_log_id": work_log_id, "hours_worked": str(hours_worked)},
        )
        return ServiceResult.succeeded(hours_worked)
