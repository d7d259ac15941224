"""
SQLAlchemy database models for the retirement runway planner.

The database backend keeps each stored blob (such as the serialized
snapshot) in one row keyed by its storage key.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, LargeBinary, String

from .base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredBlob(Base):
    """A blob stored under a unique key."""

    __tablename__ = "stored_blobs"

    id = Column(Integer, primary_key=True)
    key = Column(String(512), unique=True, nullable=False, index=True)
    content = Column(LargeBinary, nullable=False)
    content_type = Column(String(255), nullable=False, default="application/octet-stream")
    blob_metadata = Column(JSON)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    def __repr__(self):
        return f"<StoredBlob(id={self.id}, key='{self.key}', size={len(self.content or b'')})>"
