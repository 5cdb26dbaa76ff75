# mortuary/schemas/deceased.py
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional
from mortuary.models.enums import DeceasedStatus
from mortuary.schemas.chamber import CHAMBER_NAME_PATTERN, ChamberBrief
from mortuary.schemas.next_of_kin import NextOfKinOut


class DeceasedCreate(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    date_of_death: date
    time_of_death: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    cause_of_death: Optional[str] = None
    gender: Optional[str] = None
    identification_marks: Optional[str] = None
    personal_belongings: Optional[str] = None
    handled_by_id: Optional[int] = None
    # Omit to pick any chamber with room, or set auto_assign=False to register unassigned
    chamber_name: Optional[str] = Field(default=None, pattern=CHAMBER_NAME_PATTERN)
    auto_assign: bool = True


class DeceasedUpdate(BaseModel):
    """Descriptive fields only — status and chamber have their own endpoints."""
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    date_of_birth: Optional[date] = None
    date_of_death: Optional[date] = None
    time_of_death: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    cause_of_death: Optional[str] = None
    gender: Optional[str] = None
    identification_marks: Optional[str] = None
    personal_belongings: Optional[str] = None

    @field_validator("first_name", "last_name", "date_of_death")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class DeceasedStatusUpdate(BaseModel):
    status: DeceasedStatus


class DeceasedAssign(BaseModel):
    chamber_name: Optional[str] = Field(default=None, pattern=CHAMBER_NAME_PATTERN)


class DeceasedOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    date_of_birth: Optional[date]
    date_of_death: date
    time_of_death: Optional[str]
    cause_of_death: Optional[str]
    gender: Optional[str]
    identification_marks: Optional[str]
    personal_belongings: Optional[str]
    status: DeceasedStatus
    chamber_unit_number: Optional[int]
    chamber_unit_name: Optional[str]
    handled_by_id: Optional[int]
    chamber: Optional[ChamberBrief] = None
    next_of_kin: list[NextOfKinOut] = []
    created_at: Optional[datetime]

    class Config:
        from_attributes = True
