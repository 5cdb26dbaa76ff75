# mortuary/services/release_service.py
"""
Release hand-over records.
Writing one moves the deceased record to RELEASED and frees its chamber
unit in the same transaction.
"""

from sqlalchemy import func
from sqlalchemy.orm import Session

from mortuary.database import transaction
from mortuary.exceptions import ConflictError, DeceasedNotFoundError, NotFoundError
from mortuary.models.deceased import DeceasedRecord
from mortuary.models.enums import DeceasedStatus
from mortuary.models.release_record import ReleaseRecord
from mortuary.schemas.release import ReleaseCreate, ReleaseUpdate
from mortuary.services import chamber_service
from mortuary.utils.logger import get_logger

logger = get_logger(__name__)


def create_release(db: Session, body: ReleaseCreate) -> ReleaseRecord:
    with transaction(db):
        record = db.get(DeceasedRecord, body.deceased_id)
        if record is None:
            raise DeceasedNotFoundError(body.deceased_id)
        if record.status == DeceasedStatus.RELEASED or record.release_record is not None:
            raise ConflictError("Deceased has already been released", code="ALREADY_RELEASED")

        release = ReleaseRecord(**body.model_dump())
        db.add(release)
        record.status = DeceasedStatus.RELEASED
        chamber_service.release_from_chamber(db, record)
    db.refresh(release)
    logger.info(f"Deceased record {body.deceased_id} released to {release.released_to}")
    return release


def get_release(db: Session, deceased_id: int) -> ReleaseRecord:
    release = db.query(ReleaseRecord).filter(ReleaseRecord.deceased_id == deceased_id).first()
    if not release:
        raise NotFoundError("Release record for deceased", deceased_id)
    return release


def update_release(db: Session, release_id: int, body: ReleaseUpdate) -> ReleaseRecord:
    with transaction(db):
        release = db.get(ReleaseRecord, release_id)
        if not release:
            raise NotFoundError("Release record", release_id)
        for field, value in body.model_dump(exclude_unset=True).items():
            setattr(release, field, value)
    db.refresh(release)
    return release


def release_stats(db: Session) -> dict:
    """Total releases plus per-month counts for the last twelve months with releases."""
    total = db.query(func.count(ReleaseRecord.id)).scalar() or 0
    by_month: dict[str, int] = {}
    for (release_date,) in db.query(ReleaseRecord.release_date).all():
        month = release_date.strftime("%Y-%m")
        by_month[month] = by_month.get(month, 0) + 1
    months = sorted(by_month, reverse=True)[:12]
    return {
        "total_releases": total,
        "releases_by_month": [{"month": m, "count": by_month[m]} for m in months],
    }
