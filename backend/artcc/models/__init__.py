from artcc.models.controller import Certification, Controller, ControllerRating, TrainingNote
from artcc.models.event import Event, EventPosition, EventRegistration, PositionCategory
from artcc.models.no_show import NoShow, NoShowKind
from artcc.models.activity import ActivityRecord
from artcc.models.audit import AuditLog
from artcc.models.feedback import Feedback, FeedbackRating, ReviewAction
from artcc.models.visitor import VisitorApplication, VisitorDecision
from artcc.models.resource import Resource

__all__ = [
    "Controller", "ControllerRating", "Certification", "TrainingNote",
    "Event", "EventPosition", "EventRegistration", "PositionCategory",
    "NoShow", "NoShowKind",
    "ActivityRecord",
    "AuditLog",
    "Feedback", "FeedbackRating", "ReviewAction",
    "VisitorApplication", "VisitorDecision",
    "Resource",
]
