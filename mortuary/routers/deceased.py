"""Deceased records — registration, unit assignment and status changes."""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from mortuary.database import get_db
from mortuary.models.enums import DeceasedStatus
from mortuary.schemas.chamber import CHAMBER_NAME_PATTERN
from mortuary.schemas.deceased import (
    DeceasedAssign,
    DeceasedCreate,
    DeceasedOut,
    DeceasedStatusUpdate,
    DeceasedUpdate,
)
from mortuary.services import deceased_service

router = APIRouter()


@router.post("/deceased", response_model=DeceasedOut, status_code=status.HTTP_201_CREATED,
             summary="Register a deceased record")
def create_deceased(body: DeceasedCreate, db: Session = Depends(get_db)):
    """
    Places the record in `chamber_name` if given, otherwise in the first
    chamber with room. Send `auto_assign: false` to register it unassigned.
    """
    return deceased_service.create_deceased(db, body)


@router.get("/deceased/all", response_model=list[DeceasedOut], summary="List deceased records")
def list_deceased(record_status: Optional[DeceasedStatus] = Query(default=None, alias="status"),
                  chamber_name: Optional[str] = Query(default=None, pattern=CHAMBER_NAME_PATTERN),
                  db: Session = Depends(get_db)):
    return deceased_service.list_deceased(db, record_status, chamber_name)


@router.get("/deceased", response_model=DeceasedOut, summary="One deceased record")
def get_deceased(id: int, db: Session = Depends(get_db)):
    return deceased_service.get_deceased(db, id)


@router.put("/deceased", response_model=DeceasedOut, summary="Change status; terminal statuses free the unit")
def update_status(body: DeceasedStatusUpdate, id: int, db: Session = Depends(get_db)):
    return deceased_service.update_status(db, id, body.status)


@router.patch("/deceased", response_model=DeceasedOut, summary="Edit descriptive fields")
def update_details(body: DeceasedUpdate, id: int, db: Session = Depends(get_db)):
    return deceased_service.update_details(db, id, body)


@router.post("/deceased/assign", response_model=DeceasedOut, summary="Assign an unassigned record to a unit")
def assign_deceased(id: int, body: Optional[DeceasedAssign] = None, db: Session = Depends(get_db)):
    chamber_name = body.chamber_name if body else None
    return deceased_service.assign_deceased(db, id, chamber_name)


@router.delete("/deceased", summary="Delete a deceased record")
def delete_deceased(id: int, db: Session = Depends(get_db)):
    deceased_service.delete_deceased(db, id)
    return {"id": id, "status": "deleted"}
