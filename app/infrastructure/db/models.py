"""SQLAlchemy ORM models for database persistence."""
from datetime import datetime
from sqlalchemy import (
    Column, String, DateTime, LargeBinary, Enum as SQLEnum, Index, JSON
)
from sqlalchemy.dialects.postgresql import JSONB

from app.core.database import Base
from app.domain.models.ingest_record import EventType, IngestStatus


# ----------------------------------------------------------------------
# Idempotency Store
# ----------------------------------------------------------------------

class IngestRecordModel(Base):
    """SQLAlchemy model for the ingest_records table."""

    __tablename__ = "ingest_records"

    vendor_id = Column(String(255), primary_key=True)
    external_event_id = Column(String(512), primary_key=True)
    ingest_id = Column(String(64), nullable=False, unique=True)
    received_at = Column(String(64), nullable=False)
    s3_bucket = Column(String(255), nullable=False)
    s3_key = Column(String(1024), nullable=False)
    event_type = Column(SQLEnum(EventType, native_enum=False), nullable=True)
    status = Column(
        SQLEnum(IngestStatus, native_enum=False),
        nullable=False,
        default=IngestStatus.INGESTED
    )

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("ix_ingest_records_status", "status"),
    )


# ----------------------------------------------------------------------
# Raw Archive
# ----------------------------------------------------------------------

class RawObjectModel(Base):
    """SQLAlchemy model for the raw_objects table."""

    __tablename__ = "raw_objects"

    bucket = Column(String(255), primary_key=True)
    key = Column(String(1024), primary_key=True)
    content = Column(LargeBinary, nullable=False)
    content_type = Column(String(255), nullable=False, default="application/json")
    object_metadata = Column("metadata", JSON().with_variant(JSONB, "postgresql"), nullable=False)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
