"""
Mechanic model
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from shopmgr.core.status_config import MechanicStatus
from shopmgr.db.base import Base


class Mechanic(Base):
    """A technician who can be booked onto appointments."""
    __tablename__ = "mechanics"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)

    status = Column(String(20), default=MechanicStatus.ACTIVE.value, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    appointments = relationship("Appointment", back_populates="mechanic")
    work_logs = relationship("WorkLog", back_populates="mechanic")

    def __repr__(self):
        return f"<Mechanic {self.id}: {self.full_name}>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_active(self) -> bool:
        return self.status == MechanicStatus.ACTIVE
