# mortuary/schemas/staff.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from datetime import datetime
from typing import Optional
from mortuary.models.enums import StaffRole, StaffStatus


class StaffCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    role: StaffRole = StaffRole.STAFF
    phone: Optional[str] = None


class StaffUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    role: Optional[StaffRole] = None
    phone: Optional[str] = None
    status: Optional[StaffStatus] = None

    @field_validator("name", "role", "status")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class StaffOut(BaseModel):
    id: int
    name: str
    email: str
    role: StaffRole
    phone: Optional[str]
    status: StaffStatus
    created_at: datetime

    class Config:
        from_attributes = True
