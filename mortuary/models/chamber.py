# mortuary/models/chamber.py
"""
Storage chamber table.
current_occupancy is a cached count of IN_FACILITY records pointing here;
chamber_service keeps it in step inside every assign/release transaction.
"""

from datetime import datetime
from sqlalchemy import CheckConstraint, Column, DateTime, Enum, Float, Integer, String
from sqlalchemy.orm import relationship
from mortuary.database import Base
from mortuary.models.enums import ChamberStatus


class Chamber(Base):
    __tablename__ = "chambers"
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_chamber_capacity_positive"),
        CheckConstraint("current_occupancy >= 0", name="ck_chamber_occupancy_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(1), unique=True, nullable=False, index=True)   # A–Z
    capacity = Column(Integer, nullable=False)
    current_occupancy = Column(Integer, default=0, nullable=False)
    status = Column(Enum(ChamberStatus, native_enum=False, length=20),
                    default=ChamberStatus.AVAILABLE, nullable=False)
    temperature = Column(Float)                                          # °C
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    occupants = relationship("DeceasedRecord", back_populates="chamber")

    def __repr__(self):
        return f"<Chamber {self.name} {self.current_occupancy}/{self.capacity} {self.status}>"
