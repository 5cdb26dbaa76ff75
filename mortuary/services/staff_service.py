# mortuary/services/staff_service.py
"""Staff user directory."""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mortuary.database import transaction
from mortuary.exceptions import DuplicateError, NotFoundError
from mortuary.models.deceased import DeceasedRecord
from mortuary.models.enums import StaffRole
from mortuary.models.staff_user import StaffUser
from mortuary.schemas.staff import StaffCreate, StaffUpdate
from mortuary.utils.logger import get_logger

logger = get_logger(__name__)


def get_staff(db: Session, staff_id: int) -> StaffUser:
    user = db.get(StaffUser, staff_id)
    if not user:
        raise NotFoundError("Staff user", staff_id)
    return user


def list_staff(db: Session, role: Optional[StaffRole] = None) -> list[StaffUser]:
    q = db.query(StaffUser)
    if role:
        q = q.filter(StaffUser.role == role)
    return q.order_by(StaffUser.name).all()


def create_staff(db: Session, body: StaffCreate) -> StaffUser:
    email = body.email.lower()
    if db.query(StaffUser).filter(StaffUser.email == email).first():
        raise DuplicateError(f"Email {email} already registered")
    user = StaffUser(**body.model_dump(exclude={"email"}), email=email)
    try:
        with transaction(db):
            db.add(user)
    except IntegrityError:
        raise DuplicateError(f"Email {email} already registered")
    db.refresh(user)
    logger.info(f"Registered staff user {user.email} ({user.role.value})")
    return user


def update_staff(db: Session, staff_id: int, body: StaffUpdate) -> StaffUser:
    with transaction(db):
        user = get_staff(db, staff_id)
        for field, value in body.model_dump(exclude_unset=True).items():
            setattr(user, field, value)
    db.refresh(user)
    return user


def delete_staff(db: Session, staff_id: int):
    """Records the user handled are kept and lose their handler reference."""
    with transaction(db):
        user = get_staff(db, staff_id)
        db.query(DeceasedRecord).filter(DeceasedRecord.handled_by_id == staff_id).update(
            {DeceasedRecord.handled_by_id: None}, synchronize_session=False
        )
        db.delete(user)
    logger.info(f"Removed staff user {staff_id}")
