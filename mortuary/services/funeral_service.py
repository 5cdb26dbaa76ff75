# mortuary/services/funeral_service.py
"""Care, ritual and logistics services booked for a deceased record."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from mortuary.database import transaction
from mortuary.exceptions import DeceasedNotFoundError, NotFoundError
from mortuary.models.deceased import DeceasedRecord
from mortuary.models.enums import ServiceStatus
from mortuary.models.service import Service
from mortuary.schemas.service import ServiceCreate, ServiceUpdate
from mortuary.utils.logger import get_logger

logger = get_logger(__name__)


def get_service(db: Session, service_id: int) -> Service:
    service = db.get(Service, service_id)
    if not service:
        raise NotFoundError("Service", service_id)
    return service


def list_for_deceased(db: Session, deceased_id: int) -> list[Service]:
    return db.query(Service).filter(Service.deceased_id == deceased_id).order_by(Service.created_at).all()


def create_service(db: Session, body: ServiceCreate) -> Service:
    if db.get(DeceasedRecord, body.deceased_id) is None:
        raise DeceasedNotFoundError(body.deceased_id)
    service = Service(**body.model_dump(), status=ServiceStatus.PENDING)
    with transaction(db):
        db.add(service)
    db.refresh(service)
    logger.info(f"Booked {service.type.value} service {service.id} for deceased record {service.deceased_id}")
    return service


def update_service(db: Session, service_id: int, body: ServiceUpdate) -> Service:
    """Completing a service stamps completed_at; leaving COMPLETED clears it."""
    with transaction(db):
        service = get_service(db, service_id)
        changes = body.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(service, field, value)
        if "status" in changes:
            if service.status == ServiceStatus.COMPLETED:
                service.completed_at = service.completed_at or datetime.utcnow()
            else:
                service.completed_at = None
    db.refresh(service)
    return service


def delete_service(db: Session, service_id: int):
    with transaction(db):
        db.delete(get_service(db, service_id))


def service_stats(db: Session) -> list[dict]:
    """Count and summed cost per (type, status)."""
    rows = (
        db.query(Service.type, Service.status, func.count(Service.id), func.coalesce(func.sum(Service.cost), 0))
        .group_by(Service.type, Service.status)
        .order_by(Service.type, Service.status)
        .all()
    )
    return [
        {"type": type_, "status": status, "count": count, "total_cost": Decimal(str(total))}
        for type_, status, count, total in rows
    ]


def revenue_by_type(db: Session) -> list[dict]:
    """Count and revenue of non-cancelled services per type."""
    rows = (
        db.query(Service.type, func.count(Service.id), func.coalesce(func.sum(Service.cost), 0))
        .filter(Service.status != ServiceStatus.CANCELLED)
        .group_by(Service.type)
        .all()
    )
    return [{"type": type_.value, "count": count, "revenue": float(total)} for type_, count, total in rows]
