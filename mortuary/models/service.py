# mortuary/models/service.py
"""Funeral / care services booked against a deceased record."""

from datetime import datetime
from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from mortuary.database import Base
from mortuary.models.enums import ServiceStatus, ServiceType


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, autoincrement=True)
    deceased_id = Column(Integer, ForeignKey("deceased_records.id", ondelete="CASCADE"),
                         nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    type = Column(Enum(ServiceType, native_enum=False, length=20), nullable=False, index=True)
    cost = Column(Numeric(10, 2), default=0, nullable=False)
    status = Column(Enum(ServiceStatus, native_enum=False, length=20),
                    default=ServiceStatus.PENDING, nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    completed_at = Column(DateTime)

    deceased = relationship("DeceasedRecord", back_populates="services")

    def __repr__(self):
        return f"<Service {self.id} {self.type} status={self.status}>"
