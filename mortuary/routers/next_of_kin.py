"""Next-of-kin contacts."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from mortuary.database import get_db
from mortuary.schemas.next_of_kin import NextOfKinCreate, NextOfKinOut, NextOfKinUpdate
from mortuary.services import next_of_kin_service

router = APIRouter()


@router.post("/next-of-kin", response_model=NextOfKinOut, status_code=status.HTTP_201_CREATED)
def create_next_of_kin(body: NextOfKinCreate, db: Session = Depends(get_db)):
    return next_of_kin_service.create_next_of_kin(db, body)


@router.get("/next-of-kin", response_model=list[NextOfKinOut], summary="Contacts for one deceased record")
def list_next_of_kin(deceased_id: int, db: Session = Depends(get_db)):
    return next_of_kin_service.list_for_deceased(db, deceased_id)


@router.put("/next-of-kin", response_model=NextOfKinOut)
def update_next_of_kin(body: NextOfKinUpdate, id: int, db: Session = Depends(get_db)):
    return next_of_kin_service.update_next_of_kin(db, id, body)


@router.delete("/next-of-kin")
def delete_next_of_kin(id: int, db: Session = Depends(get_db)):
    next_of_kin_service.delete_next_of_kin(db, id)
    return {"id": id, "status": "deleted"}
