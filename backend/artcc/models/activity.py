"""
Stored copy of the network's online-time data, one row per controller per month.
"""

from sqlalchemy import Column, Integer, String, UniqueConstraint

from artcc.db.base import Base, TimestampMixin


class ActivityRecord(Base, TimestampMixin):
    __tablename__ = "activity"

    id = Column(Integer, primary_key=True, index=True)
    cid = Column(Integer, nullable=False, index=True)
    month = Column(String(7), nullable=False, index=True)  # YYYY-MM
    minutes = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("cid", "month", name="uq_activity_cid_month"),
    )
