# mortuary/services/deceased_service.py
"""
Deceased record lifecycle.

IN_FACILITY → RELEASED / PROCESSED. Moving to a terminal status detaches the
record from its chamber unit; there is no way back to IN_FACILITY.
"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from mortuary.database import transaction
from mortuary.exceptions import AlreadyAssignedError, DeceasedNotFoundError, InvalidStatusTransitionError, NotFoundError
from mortuary.models.chamber import Chamber
from mortuary.models.deceased import DeceasedRecord
from mortuary.models.enums import TERMINAL_STATUSES, DeceasedStatus
from mortuary.models.staff_user import StaffUser
from mortuary.schemas.deceased import DeceasedCreate, DeceasedUpdate
from mortuary.services import chamber_service
from mortuary.utils.logger import get_logger

logger = get_logger(__name__)


def get_deceased(db: Session, record_id: int) -> DeceasedRecord:
    record = (
        db.query(DeceasedRecord)
        .options(joinedload(DeceasedRecord.chamber), joinedload(DeceasedRecord.next_of_kin))
        .filter(DeceasedRecord.id == record_id)
        .first()
    )
    if not record:
        raise DeceasedNotFoundError(record_id)
    return record


def list_deceased(db: Session, status: Optional[DeceasedStatus] = None,
                  chamber_name: Optional[str] = None) -> list[DeceasedRecord]:
    q = db.query(DeceasedRecord).options(joinedload(DeceasedRecord.chamber))
    if status:
        q = q.filter(DeceasedRecord.status == status)
    if chamber_name:
        q = q.join(DeceasedRecord.chamber).filter(Chamber.name == chamber_name)
    return q.order_by(DeceasedRecord.created_at.desc(), DeceasedRecord.id.desc()).all()


def _resolve_target_chamber(db: Session, chamber_name: Optional[str], auto_assign: bool) -> Optional[Chamber]:
    if chamber_name:
        return chamber_service.get_chamber(db, chamber_name)
    if auto_assign:
        return chamber_service.find_available_chamber(db)
    return None


def create_deceased(db: Session, body: DeceasedCreate) -> DeceasedRecord:
    """
    Register a deceased record and, unless auto_assign is off and no chamber
    is named, place it in a chamber unit. Record and chamber are written in
    one transaction.
    """
    if body.handled_by_id is not None and db.get(StaffUser, body.handled_by_id) is None:
        raise NotFoundError("Staff user", body.handled_by_id)

    fields = body.model_dump(exclude={"chamber_name", "auto_assign"})

    def _create() -> DeceasedRecord:
        chamber = _resolve_target_chamber(db, body.chamber_name, body.auto_assign)
        record = DeceasedRecord(**fields, status=DeceasedStatus.IN_FACILITY)
        db.add(record)
        db.flush()
        if chamber is not None:
            chamber_service.assign_to_chamber(db, record, chamber)
        return record

    record = chamber_service.with_unit_retry(db, _create)
    logger.info(f"Registered deceased record {record.id} ({record.last_name}) "
                f"unit={record.chamber_unit_name or 'unassigned'}")
    return get_deceased(db, record.id)


def assign_deceased(db: Session, record_id: int, chamber_name: Optional[str] = None) -> DeceasedRecord:
    """Place an unassigned IN_FACILITY record into a chamber (named, or any with room)."""

    def _assign() -> DeceasedRecord:
        record = get_deceased(db, record_id)
        if record.status in TERMINAL_STATUSES:
            raise InvalidStatusTransitionError(record.status.value, DeceasedStatus.IN_FACILITY.value)
        if record.chamber_id is not None:
            raise AlreadyAssignedError(record.id, record.chamber_unit_name)
        chamber = _resolve_target_chamber(db, chamber_name, auto_assign=True)
        return chamber_service.assign_to_chamber(db, record, chamber)

    record = chamber_service.with_unit_retry(db, _assign)
    return get_deceased(db, record.id)


def update_status(db: Session, record_id: int, status: DeceasedStatus) -> DeceasedRecord:
    """
    Change the lifecycle status. A terminal status on an assigned record also
    frees its unit and recounts the chamber, atomically.
    """
    with transaction(db):
        record = get_deceased(db, record_id)
        current = record.status
        if current in TERMINAL_STATUSES and status == DeceasedStatus.IN_FACILITY:
            raise InvalidStatusTransitionError(current.value, status.value)

        record.status = status
        if status in TERMINAL_STATUSES and record.chamber_id is not None:
            chamber_service.release_from_chamber(db, record)

    logger.info(f"Deceased record {record_id}: {current.value} → {status.value}")
    return get_deceased(db, record_id)


def update_details(db: Session, record_id: int, body: DeceasedUpdate) -> DeceasedRecord:
    with transaction(db):
        record = get_deceased(db, record_id)
        for field, value in body.model_dump(exclude_unset=True).items():
            setattr(record, field, value)
    return get_deceased(db, record_id)


def delete_deceased(db: Session, record_id: int):
    """Delete a record; an occupied unit is freed in the same transaction."""
    with transaction(db):
        record = get_deceased(db, record_id)
        chamber_service.release_from_chamber(db, record)
        db.delete(record)
    logger.info(f"Deleted deceased record {record_id}")


def count_by_status(db: Session) -> dict:
    counts = {s.value: 0 for s in DeceasedStatus}
    rows = db.query(DeceasedRecord.status, func.count(DeceasedRecord.id)).group_by(DeceasedRecord.status).all()
    for record_status, count in rows:
        counts[record_status.value] = count
    counts["total"] = sum(counts.values())
    return counts
