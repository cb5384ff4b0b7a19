"""
Roster models: controllers, their certifications and training notes.

Key design decisions:
- `cid` is the network-wide identifier and what every other table references
- Roles are stored as a comma-separated list of role codes (e.g. "ATM,INS")
- Certifications are one row per (cid, name); changing a value overwrites it
"""

from enum import IntEnum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)

from artcc.db.base import Base, TimestampMixin


class ControllerRating(IntEnum):
    INA = -1
    SUS = 0
    OBS = 1
    S1 = 2
    S2 = 3
    S3 = 4
    C1 = 5
    C2 = 6
    C3 = 7
    I1 = 8
    I2 = 9
    I3 = 10
    SUP = 11
    ADM = 12


class Controller(Base, TimestampMixin):
    __tablename__ = "controllers"

    id = Column(Integer, primary_key=True, index=True)
    cid = Column(Integer, unique=True, index=True, nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    operating_initials = Column(String(2), nullable=True)
    rating = Column(Integer, nullable=False, default=ControllerRating.OBS)
    status = Column(String(20), nullable=False, default="active")
    discord_id = Column(String(50), nullable=True)
    home_facility = Column(String(10), nullable=False, default="")
    is_on_roster = Column(Boolean, nullable=False, default=False)
    roles = Column(String(255), nullable=False, default="")
    join_date = Column(DateTime(timezone=True), nullable=True)
    loa_until = Column(DateTime(timezone=True), nullable=True)

    @property
    def role_codes(self) -> set[str]:
        return {role.strip() for role in (self.roles or "").split(",") if role.strip()}

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name} ({self.operating_initials or '??'})"

    @property
    def rating_short(self) -> str:
        try:
            return ControllerRating(self.rating).name
        except ValueError:
            return ""

    def __repr__(self) -> str:
        return f"<Controller(cid={self.cid}, name={self.first_name} {self.last_name})>"


class Certification(Base, TimestampMixin):
    __tablename__ = "certifications"

    id = Column(Integer, primary_key=True, index=True)
    cid = Column(Integer, ForeignKey("controllers.cid", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    value = Column(String(20), nullable=False, default="none")
    changed_on = Column(DateTime(timezone=True), nullable=False)
    set_by = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("cid", "name", name="uq_certification_cid_name"),
        CheckConstraint(
            "value IN ('none', 'training', 'solo', 'certified')",
            name="check_certification_value",
        ),
    )


class TrainingNote(Base, TimestampMixin):
    __tablename__ = "training_notes"

    id = Column(Integer, primary_key=True, index=True)
    cid = Column(Integer, ForeignKey("controllers.cid", ondelete="CASCADE"), nullable=False, index=True)
    instructor_cid = Column(Integer, nullable=False)
    position = Column(String(50), nullable=False)
    session_date = Column(DateTime(timezone=True), nullable=False, index=True)
    notes = Column(Text, nullable=False, default="")
