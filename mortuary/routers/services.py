"""Funeral and care services booked per deceased record."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from mortuary.database import get_db
from mortuary.schemas.service import ServiceCreate, ServiceOut, ServiceStatsRow, ServiceUpdate
from mortuary.services import funeral_service

router = APIRouter()


@router.post("/services", response_model=ServiceOut, status_code=status.HTTP_201_CREATED)
def create_service(body: ServiceCreate, db: Session = Depends(get_db)):
    return funeral_service.create_service(db, body)


@router.get("/services/stats", response_model=list[ServiceStatsRow], summary="Counts and cost by type and status")
def get_service_stats(db: Session = Depends(get_db)):
    return funeral_service.service_stats(db)


@router.get("/services", response_model=list[ServiceOut], summary="Services for one deceased record")
def list_services(deceased_id: int, db: Session = Depends(get_db)):
    return funeral_service.list_for_deceased(db, deceased_id)


@router.put("/services", response_model=ServiceOut)
def update_service(body: ServiceUpdate, id: int, db: Session = Depends(get_db)):
    return funeral_service.update_service(db, id, body)


@router.delete("/services")
def delete_service(id: int, db: Session = Depends(get_db)):
    funeral_service.delete_service(db, id)
    return {"id": id, "status": "deleted"}
