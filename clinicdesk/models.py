import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Index, String
from sqlalchemy.sql import func

from .database import Base


def generate_document_id():
    """Generate a unique identifier for a new document"""
    return uuid.uuid4().hex


def _utcnow():
    return datetime.now(timezone.utc)


class Document(Base):
    """One stored entity. Every query is partitioned by owner_id and collection."""

    __tablename__ = "documents"

    id = Column(String(64), primary_key=True, default=generate_document_id)
    owner_id = Column(String(255), nullable=False, index=True)  # Firebase UID of the clinic owner
    collection = Column(String(50), nullable=False)  # clients, treatments, staff, statuses, appointments
    data = Column(JSON, nullable=False, default=dict)
    # Set client-side with microseconds so listing order follows insertion order
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (Index("ix_documents_owner_collection", "owner_id", "collection"),)
