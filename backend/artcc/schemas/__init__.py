from artcc.schemas.event import (
    EventCreate, EventUpdate, EventResponse, EventDetail,
    PositionCreate, PositionResponse, PositionDisplay, PositionAssign,
    RegistrationCreate, RegistrationResponse, RegistrationDisplay,
    MessageResponse,
)
from artcc.schemas.controller import (
    ControllerResponse, ControllerDetail, CertificationUpdate, CertificationResponse,
    TrainingNoteCreate, TrainingNoteResponse,
)
from artcc.schemas.no_show import NoShowCreate, NoShowResponse, NoShowListResponse, NoShowPurgeResponse
from artcc.schemas.activity import ActivityViolation, ActivityReport, AuditLogEntry
from artcc.schemas.feedback import FeedbackCreate, FeedbackReview, FeedbackCommentsUpdate, FeedbackResponse
from artcc.schemas.visitor import (
    VisitorApplicationCreate, VisitorApplicationDecision, VisitorApplicationResponse,
)
from artcc.schemas.resource import ResourceCreate, ResourceResponse, ResourceListResponse

__all__ = [
    "EventCreate", "EventUpdate", "EventResponse", "EventDetail",
    "PositionCreate", "PositionResponse", "PositionDisplay", "PositionAssign",
    "RegistrationCreate", "RegistrationResponse", "RegistrationDisplay",
    "MessageResponse",
    "ControllerResponse", "ControllerDetail", "CertificationUpdate", "CertificationResponse",
    "TrainingNoteCreate", "TrainingNoteResponse",
    "NoShowCreate", "NoShowResponse", "NoShowListResponse", "NoShowPurgeResponse",
    "ActivityViolation", "ActivityReport", "AuditLogEntry",
    "FeedbackCreate", "FeedbackReview", "FeedbackCommentsUpdate", "FeedbackResponse",
    "VisitorApplicationCreate", "VisitorApplicationDecision", "VisitorApplicationResponse",
    "ResourceCreate", "ResourceResponse", "ResourceListResponse",
]
