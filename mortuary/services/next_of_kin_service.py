# mortuary/services/next_of_kin_service.py
"""Next-of-kin contacts attached to a deceased record."""

from sqlalchemy.orm import Session

from mortuary.database import transaction
from mortuary.exceptions import DeceasedNotFoundError, NotFoundError
from mortuary.models.deceased import DeceasedRecord
from mortuary.models.next_of_kin import NextOfKin
from mortuary.schemas.next_of_kin import NextOfKinCreate, NextOfKinUpdate
from mortuary.utils.logger import get_logger

logger = get_logger(__name__)


def get_next_of_kin(db: Session, kin_id: int) -> NextOfKin:
    kin = db.get(NextOfKin, kin_id)
    if not kin:
        raise NotFoundError("Next of kin", kin_id)
    return kin


def list_for_deceased(db: Session, deceased_id: int) -> list[NextOfKin]:
    return db.query(NextOfKin).filter(NextOfKin.deceased_id == deceased_id).order_by(NextOfKin.id).all()


def create_next_of_kin(db: Session, body: NextOfKinCreate) -> NextOfKin:
    if db.get(DeceasedRecord, body.deceased_id) is None:
        raise DeceasedNotFoundError(body.deceased_id)
    kin = NextOfKin(**body.model_dump())
    with transaction(db):
        db.add(kin)
    db.refresh(kin)
    logger.info(f"Added next of kin {kin.id} for deceased record {kin.deceased_id}")
    return kin


def update_next_of_kin(db: Session, kin_id: int, body: NextOfKinUpdate) -> NextOfKin:
    with transaction(db):
        kin = get_next_of_kin(db, kin_id)
        for field, value in body.model_dump(exclude_unset=True).items():
            setattr(kin, field, value)
    db.refresh(kin)
    return kin


def delete_next_of_kin(db: Session, kin_id: int):
    with transaction(db):
        db.delete(get_next_of_kin(db, kin_id))
