"""
Service Location model (bay, lift, alignment rack)
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship

from shopmgr.core.status_config import LocationStatus
from shopmgr.db.base import Base


class Location(Base):
    """
    A place in the shop where appointments are worked.

    capacity is how many active appointments may overlap here at once;
    NULL means a single appointment.
    """
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    location_name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    status = Column(String(20), default=LocationStatus.AVAILABLE.value, nullable=False, index=True)
    capacity = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    appointments = relationship("Appointment", back_populates="location")

    def __repr__(self):
        return f"<Location {self.id}: {self.location_name}>"

    @property
    def effective_capacity(self) -> int:
        """Capacity with the single-appointment default applied"""
        return self.capacity or 1

    @property
    def is_out_of_service(self) -> bool:
        return self.status == LocationStatus.OUT_OF_SERVICE
