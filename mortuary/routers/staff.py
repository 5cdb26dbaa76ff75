"""Staff users."""

from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from mortuary.database import get_db
from mortuary.models.enums import StaffRole
from mortuary.schemas.staff import StaffCreate, StaffOut, StaffUpdate
from mortuary.services import staff_service

router = APIRouter()


@router.post("/staff", response_model=StaffOut, status_code=status.HTTP_201_CREATED)
def create_staff(body: StaffCreate, db: Session = Depends(get_db)):
    return staff_service.create_staff(db, body)


@router.get("/staff/all", response_model=list[StaffOut])
def list_staff(role: Optional[StaffRole] = None, db: Session = Depends(get_db)):
    return staff_service.list_staff(db, role)


@router.get("/staff", response_model=StaffOut)
def get_staff(id: int, db: Session = Depends(get_db)):
    return staff_service.get_staff(db, id)


@router.put("/staff", response_model=StaffOut)
def update_staff(body: StaffUpdate, id: int, db: Session = Depends(get_db)):
    return staff_service.update_staff(db, id, body)


@router.delete("/staff")
def delete_staff(id: int, db: Session = Depends(get_db)):
    staff_service.delete_staff(db, id)
    return {"id": id, "status": "deleted"}
