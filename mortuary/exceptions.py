# mortuary/exceptions.py
"""
Domain errors raised by the service layer.

Routers never build HTTP errors for these by hand: the handler registered
in main.py turns any MortuaryError into a JSON response using its
status_code, so a failure raised inside a transaction is rolled back and
reported the same way everywhere.
"""

from typing import Optional, Any, Dict


class MortuaryError(Exception):
    """Base exception for all domain errors"""

    status_code = 500

    def __init__(self, message: str, code: str = "INTERNAL_ERROR", details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body = {"detail": self.message, "code": self.code}
        if self.details:
            body["details"] = self.details
        return body


# ============================================
# Not found (404)
# ============================================

class NotFoundError(MortuaryError):
    status_code = 404

    def __init__(self, resource: str, identifier: Any):
        super().__init__(f"{resource} '{identifier}' not found", code="NOT_FOUND",
                         details={"resource": resource, "id": identifier})


class ChamberNotFoundError(NotFoundError):
    def __init__(self, name: str):
        super().__init__("Chamber", name)


class DeceasedNotFoundError(NotFoundError):
    def __init__(self, record_id: int):
        super().__init__("Deceased record", record_id)


# ============================================
# Conflicts with current state (400)
# ============================================

class ConflictError(MortuaryError):
    status_code = 400

    def __init__(self, message: str, code: str = "CONFLICT", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)


class ChamberFullError(ConflictError):
    def __init__(self, name: str, capacity: int):
        super().__init__(
            f"Cannot assign deceased to chamber {name}. Chamber is at full capacity ({capacity} units)",
            code="CHAMBER_FULL",
        )


class ChamberUnavailableError(ConflictError):
    def __init__(self, name: str, status: str):
        super().__init__(
            f"Cannot assign deceased to chamber {name}. Chamber is under {status.lower().replace('_', ' ')}",
            code="CHAMBER_UNAVAILABLE",
        )


class NoAvailableChamberError(ConflictError):
    def __init__(self):
        super().__init__("No available chambers", code="NO_AVAILABLE_CHAMBER")


class ChamberOccupiedError(ConflictError):
    def __init__(self, name: str, occupancy: int):
        super().__init__(
            f"Chamber {name} still holds {occupancy} deceased record(s); release them first",
            code="CHAMBER_OCCUPIED",
        )


class CapacityBelowOccupancyError(ConflictError):
    def __init__(self, name: str, capacity: int, occupancy: int):
        super().__init__(
            f"Capacity {capacity} is below the current occupancy of chamber {name} ({occupancy})",
            code="CAPACITY_BELOW_OCCUPANCY",
        )


class AlreadyAssignedError(ConflictError):
    def __init__(self, record_id: int, unit_name: str):
        super().__init__(f"Deceased record {record_id} already occupies unit {unit_name}",
                         code="ALREADY_ASSIGNED")


class InvalidStatusTransitionError(ConflictError):
    def __init__(self, current: str, requested: str):
        super().__init__(f"Cannot change status from {current} to {requested}",
                         code="INVALID_STATUS_TRANSITION")


class DuplicateError(ConflictError):
    def __init__(self, message: str):
        super().__init__(message, code="DUPLICATE")


# ============================================
# Races (409, retryable)
# ============================================

class UnitTakenError(MortuaryError):
    """Another request took the computed unit first; retrying may succeed."""

    status_code = 409

    def __init__(self, chamber_name: Optional[str] = None):
        where = f" in chamber {chamber_name}" if chamber_name else ""
        super().__init__(
            f"The chamber unit{where} was taken by a concurrent request. Please try again.",
            code="UNIT_TAKEN",
        )
