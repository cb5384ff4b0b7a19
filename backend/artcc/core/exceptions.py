"""
Domain exceptions.

Services raise these instead of HTTPException so they stay usable outside a
request. The API layer maps each one to a status code in `artcc.main`.

Usage:
    from artcc.core.exceptions import NotFoundError

    if not event:
        raise NotFoundError("Event", event_id)
"""

from typing import Any, Dict, Optional


class FacilityError(Exception):
    """Base exception for all facility errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(FacilityError):
    """Bad or missing input, or an action on an event that is already over"""

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class EventOverError(ValidationError):
    def __init__(self, event_id: int):
        super().__init__(
            "Event is already over",
            details={"event_id": event_id},
        )
        self.code = "EVENT_OVER"


class NotFoundError(FacilityError):
    """Referenced event, position, registration or controller is absent"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            code="NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class PermissionDeniedError(FacilityError):
    """Actor lacks the required role"""

    status_code = 403

    def __init__(self, message: str = "Not permitted"):
        super().__init__(message, code="PERMISSION_DENIED")


class ExternalDataError(FacilityError):
    """The activity feed could not be read"""

    status_code = 502

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Could not read activity data from {source}: {reason}",
            code="EXTERNAL_DATA_ERROR",
            details={"source": source},
        )
