"""
Record Store

The narrow data access interface the scheduling services depend on, plus
its SQLAlchemy implementation. Services never build queries themselves;
they describe what they need with an AppointmentQuery.
"""
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, FrozenSet, Iterator, List, Optional, Type, TypeVar

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from shopmgr.exceptions import DatabaseError, NotFoundError
from shopmgr.logging_config import get_logger
from shopmgr.models import Appointment

logger = get_logger(__name__)

ModelT = TypeVar("ModelT")


@dataclass(frozen=True)
class AppointmentQuery:
    """
    Typed filter over appointments.

    Every populated field narrows the result:
    - mechanic_id / location_id: equality on the foreign key
    - statuses: set membership on status
    - exclude_id: appointment id to leave out
    - date_from / date_to: inclusive range on appointment_date
    """
    mechanic_id: Optional[int] = None
    location_id: Optional[int] = None
    statuses: FrozenSet[str] = field(default_factory=frozenset)
    exclude_id: Optional[int] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    order_by_date: bool = False


class RecordStore(ABC):
    """Data access required by the scheduling services."""

    @abstractmethod
    def get(self, model: Type[ModelT], record_id: Any, *, for_update: bool = False) -> Optional[ModelT]:
        """Fetch a record by primary key, optionally locking its row."""

    @abstractmethod
    def list_appointments(self, query: AppointmentQuery) -> List[Appointment]:
        """List appointments matching the filter."""

    @abstractmethod
    def count_appointments(self, query: AppointmentQuery) -> int:
        """Count appointments matching the filter."""

    @abstractmethod
    def update(self, record: ModelT) -> ModelT:
        """
        Persist mutated fields of an existing record.

        Raises:
            NotFoundError: If the record no longer exists
        """

    @abstractmethod
    @contextmanager
    def transaction(self) -> Iterator["RecordStore"]:
        """Run a read-then-write sequence atomically."""


class SqlAlchemyRecordStore(RecordStore):
    """RecordStore backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, model: Type[ModelT], record_id: Any, *, for_update: bool = False) -> Optional[ModelT]:
        if record_id is None:
            return None
        # FOR UPDATE is a no-op on SQLite, which serializes writers anyway
        return self.db.get(model, record_id, with_for_update=True if for_update else None)

    def _appointment_query(self, query: AppointmentQuery):
        q = self.db.query(Appointment)
        if query.mechanic_id is not None:
            q = q.filter(Appointment.mechanic_id == query.mechanic_id)
        if query.location_id is not None:
            q = q.filter(Appointment.location_id == query.location_id)
        if query.statuses:
            q = q.filter(Appointment.status.in_(sorted(query.statuses)))
        if query.exclude_id is not None:
            q = q.filter(Appointment.id != query.exclude_id)
        if query.date_from is not None:
            q = q.filter(Appointment.appointment_date >= query.date_from)
        if query.date_to is not None:
            q = q.filter(Appointment.appointment_date <= query.date_to)
        return q

    def list_appointments(self, query: AppointmentQuery) -> List[Appointment]:
        q = self._appointment_query(query)
        if query.order_by_date:
            q = q.order_by(Appointment.appointment_date, Appointment.id)
        return q.all()

    def count_appointments(self, query: AppointmentQuery) -> int:
        return self._appointment_query(query).count()

    def update(self, record: ModelT) -> ModelT:
        state = inspect(record)
        label = type(record).__name__
        if state.deleted or state.was_deleted or state.identity is None:
            raise NotFoundError(label, _primary_key(state))
        try:
            self.db.flush()
        except StaleDataError:
            # Row vanished underneath us between read and write
            raise NotFoundError(label, _primary_key(state)) from None
        return record

    @contextmanager
    def transaction(self) -> Iterator["SqlAlchemyRecordStore"]:
        """
        Commit on success, roll back on error.

        If the session already has a transaction open, the work runs in a
        SAVEPOINT instead: a failure rolls back only to the savepoint and a
        success leaves the commit to whoever opened the outer transaction.
        """
        owns_transaction = not self.db.in_transaction()
        scope = self.db.begin() if owns_transaction else self.db.begin_nested()
        try:
            yield self
            scope.commit()
        except SQLAlchemyError as e:
            scope.rollback()
            logger.error(f"Record store transaction failed: {e}", exc_info=True)
            raise DatabaseError(f"Database operation failed: {e.__class__.__name__}") from e
        except Exception:
            scope.rollback()
            raise


def _primary_key(state) -> Optional[str]:
    if state.identity:
        return ", ".join(str(part) for part in state.identity)
    return None
