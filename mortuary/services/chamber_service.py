# mortuary/services/chamber_service.py
"""
Chamber occupancy management.

A chamber named by one letter holds `capacity` numbered units ("1A", "2A", ...).
Assignment always takes the lowest free number so vacated low units are
reused first. Every assign/release runs inside the caller's transaction with
the chamber row locked, and current_occupancy is recounted from the
deceased_records table after the write is flushed, never carried over from
an earlier read.
"""

from typing import Callable, Iterable, Optional, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mortuary.config import settings
from mortuary.database import transaction
from mortuary.exceptions import (
    CapacityBelowOccupancyError,
    ChamberFullError,
    ChamberNotFoundError,
    ChamberOccupiedError,
    ChamberUnavailableError,
    DuplicateError,
    NoAvailableChamberError,
    UnitTakenError,
)
from mortuary.models.chamber import Chamber
from mortuary.models.deceased import UNIT_NAME_CONSTRAINT, DeceasedRecord
from mortuary.models.enums import FORCED_CHAMBER_STATUSES, ChamberStatus, DeceasedStatus
from mortuary.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


# ── Unit finder ──────────────────────────────────────────────────────────────

def unit_name(number: int, chamber_name: str) -> str:
    return f"{number}{chamber_name}"


def find_lowest_free_unit(capacity: int, occupied: Iterable[int], chamber_name: str = "?") -> int:
    """Smallest number in [1, capacity] not in `occupied`. Raises ChamberFullError if none."""
    taken = set(occupied)
    for number in range(1, capacity + 1):
        if number not in taken:
            return number
    raise ChamberFullError(chamber_name, capacity)


def free_unit_names(chamber: Chamber, occupied: Iterable[int]) -> list[str]:
    taken = set(occupied)
    return [unit_name(n, chamber.name) for n in range(1, chamber.capacity + 1) if n not in taken]


def occupied_unit_numbers(db: Session, chamber_id: int) -> set[int]:
    rows = (
        db.query(DeceasedRecord.chamber_unit_number)
        .filter(
            DeceasedRecord.chamber_id == chamber_id,
            DeceasedRecord.status == DeceasedStatus.IN_FACILITY,
            DeceasedRecord.chamber_unit_number.isnot(None),
        )
        .all()
    )
    return {number for (number,) in rows}


def available_units(db: Session, chamber: Chamber) -> list[str]:
    return free_unit_names(chamber, occupied_unit_numbers(db, chamber.id))


# ── Lookups ──────────────────────────────────────────────────────────────────

def get_chamber(db: Session, name: str, lock: bool = False) -> Chamber:
    q = db.query(Chamber).filter(Chamber.name == name)
    if lock:
        q = q.with_for_update().populate_existing()
    chamber = q.first()
    if not chamber:
        raise ChamberNotFoundError(name)
    return chamber


def list_chambers(db: Session, status: Optional[ChamberStatus] = None) -> list[Chamber]:
    q = db.query(Chamber)
    if status:
        q = q.filter(Chamber.status == status)
    return q.order_by(Chamber.name).all()


def find_available_chamber(db: Session) -> Chamber:
    """First chamber by name that is AVAILABLE and has a free unit."""
    chamber = (
        db.query(Chamber)
        .filter(
            Chamber.status == ChamberStatus.AVAILABLE,
            Chamber.current_occupancy < Chamber.capacity,
        )
        .order_by(Chamber.name)
        .first()
    )
    if not chamber:
        raise NoAvailableChamberError()
    return chamber


# ── Occupancy bookkeeping ────────────────────────────────────────────────────

def derived_status(chamber: Chamber, occupancy: int) -> ChamberStatus:
    if chamber.status in FORCED_CHAMBER_STATUSES:
        return chamber.status
    return ChamberStatus.OCCUPIED if occupancy >= chamber.capacity else ChamberStatus.AVAILABLE


def refresh_occupancy(db: Session, chamber: Chamber) -> Chamber:
    """Recount IN_FACILITY occupants (pending writes must be flushed) and recompute status."""
    count = (
        db.query(func.count(DeceasedRecord.id))
        .filter(
            DeceasedRecord.chamber_id == chamber.id,
            DeceasedRecord.status == DeceasedStatus.IN_FACILITY,
        )
        .scalar()
    ) or 0
    chamber.current_occupancy = count
    chamber.status = derived_status(chamber, count)
    return chamber


def ensure_assignable(chamber: Chamber):
    if chamber.status in FORCED_CHAMBER_STATUSES:
        logger.warning(f"Chamber {chamber.name} rejected assignment: {chamber.status.value}")
        raise ChamberUnavailableError(chamber.name, chamber.status.value)
    if chamber.current_occupancy >= chamber.capacity:
        logger.warning(f"Chamber {chamber.name} rejected assignment: full ({chamber.capacity})")
        raise ChamberFullError(chamber.name, chamber.capacity)


def assign_to_chamber(db: Session, record: DeceasedRecord, chamber: Chamber) -> DeceasedRecord:
    """
    Bind `record` to the lowest free unit of `chamber`.
    Must run inside a transaction; nothing is committed here.
    """
    # Re-read under lock so two requests on one chamber queue up
    chamber = get_chamber(db, chamber.name, lock=True)
    ensure_assignable(chamber)

    number = find_lowest_free_unit(chamber.capacity, occupied_unit_numbers(db, chamber.id), chamber.name)
    record.chamber = chamber
    record.chamber_unit_number = number
    record.chamber_unit_name = unit_name(number, chamber.name)
    record.status = DeceasedStatus.IN_FACILITY
    try:
        db.flush()
    except IntegrityError as exc:
        if not _is_unit_clash(exc):
            raise
        raise UnitTakenError(chamber.name) from exc

    refresh_occupancy(db, chamber)
    logger.info(f"Assigned record {record.id} to unit {record.chamber_unit_name} "
                f"({chamber.current_occupancy}/{chamber.capacity})")
    return record


def release_from_chamber(db: Session, record: DeceasedRecord) -> Optional[Chamber]:
    """Clear the record's unit and recount its former chamber. Returns that chamber, if any."""
    chamber = record.chamber
    if chamber is None:
        return None
    chamber = get_chamber(db, chamber.name, lock=True)
    released_unit = record.chamber_unit_name

    record.chamber = None
    record.chamber_unit_number = None
    record.chamber_unit_name = None
    db.flush()

    refresh_occupancy(db, chamber)
    logger.info(f"Released unit {released_unit} ({chamber.current_occupancy}/{chamber.capacity})")
    return chamber


def _is_unit_clash(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return UNIT_NAME_CONSTRAINT in message or "chamber_unit_name" in message


def with_unit_retry(db: Session, operation: Callable[[], T], retries: Optional[int] = None) -> T:
    """
    Run `operation` in a transaction and commit it.

    If the write loses a race for a unit name, the transaction is rolled back
    and `operation` runs again so it computes a fresh unit. After `retries`
    extra attempts the last clash is raised as UnitTakenError, naming the
    chamber when the clash surfaced in assign_to_chamber.
    """
    attempts = 1 + (settings.UNIT_ASSIGN_RETRIES if retries is None else retries)
    clash = UnitTakenError()
    for attempt in range(1, attempts + 1):
        try:
            with transaction(db):
                return operation()
        except UnitTakenError as exc:
            clash = exc
        except IntegrityError as exc:
            if not _is_unit_clash(exc):
                raise
            clash = UnitTakenError()
        logger.warning(f"Unit name clash (attempt {attempt}/{attempts}): {clash.message}")
    raise clash


# ── Administration ───────────────────────────────────────────────────────────

def create_chamber(db: Session, name: str, capacity: int, temperature: Optional[float] = None) -> Chamber:
    if db.query(Chamber).filter(Chamber.name == name).first():
        raise DuplicateError(f"Chamber {name} already exists")
    chamber = Chamber(name=name, capacity=capacity, current_occupancy=0,
                      status=ChamberStatus.AVAILABLE, temperature=temperature)
    try:
        with transaction(db):
            db.add(chamber)
    except IntegrityError:
        raise DuplicateError(f"Chamber {name} already exists")
    db.refresh(chamber)
    logger.info(f"Created chamber {name} with {capacity} units")
    return chamber


def update_chamber(db: Session, name: str, capacity: Optional[int] = None,
                   status: Optional[ChamberStatus] = None,
                   temperature: Optional[float] = None) -> Chamber:
    """
    MAINTENANCE / OUT_OF_ORDER force the status. AVAILABLE or OCCUPIED lift a
    forced status; the stored value is then derived from occupancy.
    """
    with transaction(db):
        chamber = get_chamber(db, name, lock=True)
        refresh_occupancy(db, chamber)
        if capacity is not None:
            if capacity < chamber.current_occupancy:
                raise CapacityBelowOccupancyError(name, capacity, chamber.current_occupancy)
            chamber.capacity = capacity
        if temperature is not None:
            chamber.temperature = temperature
        if status in FORCED_CHAMBER_STATUSES:
            chamber.status = status
        elif status is not None:
            chamber.status = ChamberStatus.AVAILABLE
        chamber.status = derived_status(chamber, chamber.current_occupancy)
    db.refresh(chamber)
    logger.info(f"Updated chamber {chamber!r}")
    return chamber


def delete_chamber(db: Session, name: str):
    """Occupied chambers cannot be deleted."""
    with transaction(db):
        chamber = get_chamber(db, name, lock=True)
        refresh_occupancy(db, chamber)
        if chamber.current_occupancy > 0:
            logger.warning(f"Refused to delete occupied chamber {name}")
            raise ChamberOccupiedError(name, chamber.current_occupancy)
        # Terminal records keep no chamber reference, so nothing else points here
        db.delete(chamber)
    logger.info(f"Deleted chamber {name}")


def occupancy_summary(db: Session) -> dict:
    chambers = db.query(Chamber).all()
    total_units = sum(c.capacity for c in chambers)
    occupied_units = sum(c.current_occupancy for c in chambers)
    by_status = {s.value: 0 for s in ChamberStatus}
    for c in chambers:
        by_status[c.status.value] += 1
    return {
        "total_chambers": len(chambers),
        "available_chambers": by_status[ChamberStatus.AVAILABLE.value],
        "occupied_chambers": by_status[ChamberStatus.OCCUPIED.value],
        "chambers_by_status": by_status,
        "total_units": total_units,
        "occupied_units": occupied_units,
        "occupancy_rate": round(occupied_units / total_units * 100, 1) if total_units else 0,
    }
