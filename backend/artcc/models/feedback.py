"""
Pilot feedback about a controller, held for staff review before anyone else
sees it.
"""

from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, Column, Integer, String, Text

from artcc.db.base import Base, TimestampMixin


class FeedbackRating(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class ReviewAction(str, Enum):
    PENDING = "pending"
    ARCHIVE = "archive"
    APPROVE = "approve"


class Feedback(Base, TimestampMixin):
    __tablename__ = "feedback"

    id = Column(Integer, primary_key=True, index=True)
    controller_cid = Column(Integer, nullable=False, index=True)
    position = Column(String(50), nullable=False)
    rating = Column(String(20), nullable=False)
    comments = Column(Text, nullable=False, default="")
    submitter_cid = Column(Integer, nullable=False)
    contact_me = Column(Boolean, nullable=False, default=False)
    email = Column(String(255), nullable=True)
    reviewer_action = Column(String(20), nullable=False, default=ReviewAction.PENDING.value)
    reviewed_by = Column(Integer, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "rating IN ('excellent', 'good', 'fair', 'poor')", name="check_feedback_rating"
        ),
        CheckConstraint(
            "reviewer_action IN ('pending', 'archive', 'approve')", name="check_feedback_action"
        ),
    )

    def __repr__(self) -> str:
        return f"<Feedback(id={self.id}, controller={self.controller_cid}, rating={self.rating})>"
