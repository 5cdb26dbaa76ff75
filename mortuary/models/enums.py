# mortuary/models/enums.py
"""Status and category values shared by models, schemas and services."""

import enum


class ChamberStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    MAINTENANCE = "MAINTENANCE"
    OUT_OF_ORDER = "OUT_OF_ORDER"


# Set by an administrator; occupancy changes never override these
FORCED_CHAMBER_STATUSES = (ChamberStatus.MAINTENANCE, ChamberStatus.OUT_OF_ORDER)


class DeceasedStatus(str, enum.Enum):
    IN_FACILITY = "IN_FACILITY"
    RELEASED = "RELEASED"
    PROCESSED = "PROCESSED"


TERMINAL_STATUSES = (DeceasedStatus.RELEASED, DeceasedStatus.PROCESSED)


class ServiceStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ServiceType(str, enum.Enum):
    CARE = "CARE"
    RITUAL = "RITUAL"
    LOGISTICS = "LOGISTICS"
    OTHER = "OTHER"


class StaffRole(str, enum.Enum):
    ADMIN = "ADMIN"
    STAFF = "STAFF"


class StaffStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
