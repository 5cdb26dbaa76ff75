# mortuary/schemas/service.py
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from decimal import Decimal
from typing import Optional
from mortuary.models.enums import ServiceStatus, ServiceType


class ServiceCreate(BaseModel):
    deceased_id: int
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    type: ServiceType
    cost: Decimal = Field(default=Decimal("0"), ge=0)


class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[ServiceType] = None
    cost: Optional[Decimal] = Field(default=None, ge=0)
    status: Optional[ServiceStatus] = None

    @field_validator("name", "type", "cost", "status")
    @classmethod
    def required_not_null(cls, v):
        if v is None:
            raise ValueError("may be omitted but not null")
        return v


class ServiceOut(BaseModel):
    id: int
    deceased_id: int
    name: str
    description: Optional[str]
    type: ServiceType
    cost: Decimal
    status: ServiceStatus
    created_at: datetime
    completed_at: Optional[datetime]

    class Config:
        from_attributes = True


class ServiceStatsRow(BaseModel):
    type: ServiceType
    status: ServiceStatus
    count: int
    total_cost: Decimal
