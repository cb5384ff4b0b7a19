"""
No-show entries: a controller missed an event slot or a training session.
"""

from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, Column, Integer, String, Text

from artcc.db.base import Base, TimestampMixin


class NoShowKind(str, Enum):
    EVENT = "event"
    TRAINING = "training"


class NoShow(Base, TimestampMixin):
    __tablename__ = "no_shows"

    id = Column(Integer, primary_key=True, index=True)
    cid = Column(Integer, nullable=False, index=True)
    reported_by = Column(Integer, nullable=False)
    kind = Column(String(20), nullable=False)
    notes = Column(Text, nullable=True)
    notified = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("kind IN ('event', 'training')", name="check_no_show_kind"),
    )

    def __repr__(self) -> str:
        return f"<NoShow(id={self.id}, cid={self.cid}, kind={self.kind})>"
