# mortuary/schemas/release.py
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional


class ReleaseCreate(BaseModel):
    deceased_id: int
    released_to: str = Field(min_length=1, max_length=200)
    relationship: str = Field(min_length=1, max_length=50)
    release_date: date
    documents: Optional[str] = None
    remarks: Optional[str] = None


class ReleaseUpdate(BaseModel):
    released_to: Optional[str] = Field(default=None, min_length=1, max_length=200)
    relationship: Optional[str] = Field(default=None, min_length=1, max_length=50)
    release_date: Optional[date] = None
    documents: Optional[str] = None
    remarks: Optional[str] = None

    @field_validator("released_to", "relationship", "release_date")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class ReleaseOut(BaseModel):
    id: int
    deceased_id: int
    released_to: str
    relationship: str
    release_date: date
    documents: Optional[str]
    remarks: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
