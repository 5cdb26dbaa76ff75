# mortuary/schemas/next_of_kin.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional


class NextOfKinCreate(BaseModel):
    deceased_id: int
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    relationship: str = Field(min_length=1, max_length=50)
    phone_number: str = Field(min_length=3, max_length=30)
    email: Optional[EmailStr] = None
    address: Optional[str] = None


class NextOfKinUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    relationship: Optional[str] = Field(default=None, min_length=1, max_length=50)
    phone_number: Optional[str] = Field(default=None, min_length=3, max_length=30)
    email: Optional[EmailStr] = None
    address: Optional[str] = None

    @field_validator("first_name", "last_name", "relationship", "phone_number")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class NextOfKinOut(BaseModel):
    id: int
    deceased_id: int
    first_name: str
    last_name: str
    relationship: str
    phone_number: str
    email: Optional[str]
    address: Optional[str]

    class Config:
        from_attributes = True
