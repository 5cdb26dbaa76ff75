"""Dashboard statistics."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from mortuary.database import get_db
from mortuary.services import chamber_service, deceased_service, funeral_service

router = APIRouter()


@router.get("/stats/overview", summary="Chambers, records and services at a glance")
def get_overview(db: Session = Depends(get_db)):
    services_by_type = funeral_service.revenue_by_type(db)
    return {
        "chambers": chamber_service.occupancy_summary(db),
        "deceased": deceased_service.count_by_status(db),
        "services": {
            "total_services": sum(row["count"] for row in services_by_type),
            "total_revenue": round(sum(row["revenue"] for row in services_by_type), 2),
            "services_by_type": services_by_type,
        },
    }
