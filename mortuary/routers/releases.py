"""Release hand-over records."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from mortuary.database import get_db
from mortuary.schemas.release import ReleaseCreate, ReleaseOut, ReleaseUpdate
from mortuary.services import release_service

router = APIRouter()


@router.post("/releases", response_model=ReleaseOut, status_code=status.HTTP_201_CREATED,
             summary="Release a deceased record and free its unit")
def create_release(body: ReleaseCreate, db: Session = Depends(get_db)):
    return release_service.create_release(db, body)


@router.get("/releases/stats", summary="Release totals by month")
def get_release_stats(db: Session = Depends(get_db)):
    return release_service.release_stats(db)


@router.get("/releases", response_model=ReleaseOut)
def get_release(deceased_id: int, db: Session = Depends(get_db)):
    return release_service.get_release(db, deceased_id)


@router.put("/releases", response_model=ReleaseOut)
def update_release(body: ReleaseUpdate, id: int, db: Session = Depends(get_db)):
    return release_service.update_release(db, id, body)
