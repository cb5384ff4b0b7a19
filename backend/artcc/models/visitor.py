"""
Visitor applications from controllers homed at another facility.
"""

from enum import Enum

from sqlalchemy import Column, Integer, String, Text

from artcc.db.base import Base, TimestampMixin


class VisitorDecision(str, Enum):
    ACCEPT = "accept"
    DENY = "deny"


class VisitorApplication(Base, TimestampMixin):
    __tablename__ = "visitor_applications"

    id = Column(Integer, primary_key=True, index=True)
    cid = Column(Integer, nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    home_facility = Column(String(10), nullable=False)
    rating = Column(Integer, nullable=False)
    reason = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<VisitorApplication(id={self.id}, cid={self.cid}, from={self.home_facility})>"
