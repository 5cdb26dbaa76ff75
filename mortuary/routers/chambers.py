"""Chambers — capacity administration and occupancy views."""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from mortuary.database import get_db
from mortuary.models.chamber import Chamber
from mortuary.models.enums import ChamberStatus
from mortuary.schemas.chamber import CHAMBER_NAME_PATTERN, ChamberCreate, ChamberOut, ChamberUpdate
from mortuary.services import chamber_service

router = APIRouter()


def _to_out(db: Session, chamber: Chamber) -> ChamberOut:
    out = ChamberOut.model_validate(chamber)
    out.available_units = chamber_service.available_units(db, chamber)
    out.occupancy_percent = round(chamber.current_occupancy / chamber.capacity * 100, 1)
    return out


@router.post("/chambers", response_model=ChamberOut, status_code=status.HTTP_201_CREATED,
             summary="Create a chamber")
def create_chamber(body: ChamberCreate, db: Session = Depends(get_db)):
    chamber = chamber_service.create_chamber(db, body.name, body.capacity, body.temperature)
    return _to_out(db, chamber)


@router.get("/chambers", response_model=list[ChamberOut], summary="List chambers with free units")
def list_chambers(chamber_status: Optional[ChamberStatus] = Query(default=None, alias="status"),
                  db: Session = Depends(get_db)):
    return [_to_out(db, c) for c in chamber_service.list_chambers(db, chamber_status)]


@router.get("/chambers/lookup", response_model=ChamberOut, summary="One chamber by name")
def get_chamber(chamber_name: str = Query(pattern=CHAMBER_NAME_PATTERN), db: Session = Depends(get_db)):
    return _to_out(db, chamber_service.get_chamber(db, chamber_name))


@router.put("/chambers", response_model=ChamberOut, summary="Update capacity, status or temperature")
def update_chamber(body: ChamberUpdate, chamber_name: str = Query(pattern=CHAMBER_NAME_PATTERN),
                   db: Session = Depends(get_db)):
    chamber = chamber_service.update_chamber(db, chamber_name, capacity=body.capacity,
                                             status=body.status, temperature=body.temperature)
    return _to_out(db, chamber)


@router.delete("/chambers", summary="Delete an empty chamber")
def delete_chamber(chamber_name: str = Query(pattern=CHAMBER_NAME_PATTERN), db: Session = Depends(get_db)):
    chamber_service.delete_chamber(db, chamber_name)
    return {"chamber_name": chamber_name, "status": "deleted"}
