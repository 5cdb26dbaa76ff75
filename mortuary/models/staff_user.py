# mortuary/models/staff_user.py
"""Staff members who handle deceased records."""

from datetime import datetime
from sqlalchemy import Column, DateTime, Enum, Integer, String
from mortuary.database import Base
from mortuary.models.enums import StaffRole, StaffStatus


class StaffUser(Base):
    __tablename__ = "staff_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200), unique=True, nullable=False, index=True)
    role = Column(Enum(StaffRole, native_enum=False, length=20), default=StaffRole.STAFF, nullable=False)
    phone = Column(String(30))
    status = Column(Enum(StaffStatus, native_enum=False, length=20), default=StaffStatus.ACTIVE, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<StaffUser {self.email} role={self.role}>"
