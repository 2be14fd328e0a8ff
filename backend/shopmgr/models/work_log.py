"""
Work Log model

Labor time recorded against an appointment. hours_worked is derived from
start/end; billable_hours defaults to it once and can then be edited.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, Numeric, Text, ForeignKey
from sqlalchemy.orm import relationship

from shopmgr.db.base import Base


class WorkLog(Base):
    __tablename__ = "work_logs"

    id = Column(Integer, primary_key=True, index=True)

    appointment_id = Column(Integer, ForeignKey("appointments.id"), nullable=True, index=True)
    mechanic_id = Column(Integer, ForeignKey("mechanics.id"), nullable=True, index=True)

    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)

    hours_worked = Column(Numeric(10, 2), nullable=True)
    billable_hours = Column(Numeric(10, 2), nullable=True)

    notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    appointment = relationship("Appointment", back_populates="work_logs")
    mechanic = relationship("Mechanic", back_populates="work_logs")

    def __repr__(self):
        return f"<WorkLog {self.id}: {self.hours_worked} h>"
