# mortuary/schemas/chamber.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
from mortuary.models.enums import ChamberStatus

CHAMBER_NAME_PATTERN = r"^[A-Z]$"


class ChamberCreate(BaseModel):
    name: str = Field(pattern=CHAMBER_NAME_PATTERN, description="Single uppercase letter A-Z")
    capacity: int = Field(gt=0)
    temperature: Optional[float] = None


class ChamberUpdate(BaseModel):
    capacity: Optional[int] = Field(default=None, gt=0)
    status: Optional[ChamberStatus] = None
    temperature: Optional[float] = None


class ChamberBrief(BaseModel):
    id: int
    name: str
    status: ChamberStatus
    capacity: int
    current_occupancy: int

    class Config:
        from_attributes = True


class ChamberOut(ChamberBrief):
    temperature: Optional[float] = None
    available_units: list[str] = []
    occupancy_percent: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
