from sqlalchemy import Column, Integer, Text

from artcc.db.base import Base, TimestampMixin


class AuditLog(Base, TimestampMixin):
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, index=True)
    message = Column(Text, nullable=False)
