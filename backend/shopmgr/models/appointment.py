"""
Appointment model
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from shopmgr.core.status_config import AppointmentStatus
from shopmgr.db.base import Base


class Appointment(Base):
    """
    A booked service visit.

    appointment_date is the nominal start. scheduled_start_time and
    scheduled_end_time are optional precise bounds; see
    shopmgr.services.overlap.resolve_interval for how they combine.
    """
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)

    # Assigned resources (optional)
    mechanic_id = Column(Integer, ForeignKey("mechanics.id"), nullable=True, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=True, index=True)

    customer_name = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)

    # Timing
    appointment_date = Column(DateTime, nullable=False, index=True)
    scheduled_start_time = Column(DateTime, nullable=True)
    scheduled_end_time = Column(DateTime, nullable=True)

    status = Column(String(20), default=AppointmentStatus.SCHEDULED.value, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    mechanic = relationship("Mechanic", back_populates="appointments")
    location = relationship("Location", back_populates="appointments")
    work_logs = relationship("WorkLog", back_populates="appointment")

    __table_args__ = (
        Index("ix_appointments_mechanic_date", "mechanic_id", "appointment_date"),
        Index("ix_appointments_location_date", "location_id", "appointment_date"),
    )

    def __repr__(self):
        return f"<Appointment {self.id}: {self.appointment_date} ({self.status})>"
