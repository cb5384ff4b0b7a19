"""
Resource documents and links (SOPs, LOAs, references).

Only the metadata lives here. The file itself is stored by the upload
service and referenced by `file_name`. `updated_at` doubles as the
"last updated" date shown next to each document.
"""

from sqlalchemy import Column, Integer, String

from artcc.db.base import Base, TimestampMixin


class Resource(Base, TimestampMixin):
    __tablename__ = "resources"

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(50), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    file_name = Column(String(500), nullable=True)
    link = Column(String(1000), nullable=True)

    def __repr__(self) -> str:
        return f"<Resource(id={self.id}, category={self.category}, name={self.name})>"
