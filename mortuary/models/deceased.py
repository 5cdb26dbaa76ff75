# mortuary/models/deceased.py
"""
Deceased record table.
chamber_id, chamber_unit_number and chamber_unit_name are set and cleared
together. Released records carry NULLs, so a vacated unit name can be
reused without tripping uq_chamber_unit_name.
"""

from datetime import datetime
from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from mortuary.database import Base
from mortuary.models.enums import DeceasedStatus

UNIT_NAME_CONSTRAINT = "uq_chamber_unit_name"


class DeceasedRecord(Base):
    __tablename__ = "deceased_records"
    __table_args__ = (
        UniqueConstraint("chamber_id", "chamber_unit_name", name=UNIT_NAME_CONSTRAINT),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, index=True)
    date_of_birth = Column(Date)
    date_of_death = Column(Date, nullable=False)
    time_of_death = Column(String(10))                      # HH:MM
    cause_of_death = Column(String(255))
    gender = Column(String(20))
    identification_marks = Column(Text)
    personal_belongings = Column(Text)
    status = Column(Enum(DeceasedStatus, native_enum=False, length=20),
                    default=DeceasedStatus.IN_FACILITY, nullable=False, index=True)
    chamber_id = Column(Integer, ForeignKey("chambers.id"), index=True)
    chamber_unit_number = Column(Integer)
    chamber_unit_name = Column(String(10))                  # e.g. "3C"
    handled_by_id = Column(Integer, ForeignKey("staff_users.id", ondelete="SET NULL"))
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    chamber = relationship("Chamber", back_populates="occupants")
    handled_by = relationship("StaffUser")
    next_of_kin = relationship("NextOfKin", back_populates="deceased",
                               cascade="all, delete-orphan")
    services = relationship("Service", back_populates="deceased",
                            cascade="all, delete-orphan")
    release_record = relationship("ReleaseRecord", back_populates="deceased", uselist=False,
                                  cascade="all, delete-orphan")

    def __repr__(self):
        return f"<DeceasedRecord {self.id} {self.last_name} status={self.status} unit={self.chamber_unit_name}>"
