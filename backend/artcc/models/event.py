"""
Event models: events, their staffable positions, and controller registrations.

Key design decisions:
- "Over" is not stored; `Event.is_over` compares `end` with the clock on every read
- Position assignment (`EventPosition.cid`) has no uniqueness constraint, so staff
  may put the same controller on more than one position
- Registration choices are plain integers, not foreign keys: deleting a position
  leaves them pointing at nothing and they simply stop resolving to a name
- Unique constraint on (event_id, cid) backs the registration upsert
"""

from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from artcc.core.clock import as_utc, utcnow
from artcc.db.base import Base, TimestampMixin


class PositionCategory(str, Enum):
    ENROUTE = "Enroute"
    TRACON = "TRACON"
    LOCAL = "Local"


class Event(Base, TimestampMixin):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    banner_url = Column(String(1000), nullable=True)
    start = Column(DateTime(timezone=True), nullable=False)
    end = Column(DateTime(timezone=True), nullable=False)
    published = Column(Boolean, nullable=False, default=False)
    created_by = Column(Integer, nullable=False)

    __table_args__ = (
        Index("ix_events_start", "start"),
        Index("ix_events_end", "end"),
    )

    @property
    def is_over(self) -> bool:
        return utcnow() >= as_utc(self.end)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name}, published={self.published})>"


class EventPosition(Base, TimestampMixin):
    __tablename__ = "event_positions"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(String(20), nullable=False)
    name = Column(String(50), nullable=False)
    cid = Column(Integer, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "category IN ('Enroute', 'TRACON', 'Local')",
            name="check_position_category",
        ),
    )


class EventRegistration(Base, TimestampMixin):
    __tablename__ = "event_registrations"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    cid = Column(Integer, nullable=False, index=True)
    choice_1 = Column(Integer, nullable=True)
    choice_2 = Column(Integer, nullable=True)
    choice_3 = Column(Integer, nullable=True)
    notes = Column(String(500), nullable=True)

    __table_args__ = (
        UniqueConstraint("event_id", "cid", name="uq_event_registration_event_cid"),
    )

    @property
    def choices(self) -> list:
        return [self.choice_1, self.choice_2, self.choice_3]
