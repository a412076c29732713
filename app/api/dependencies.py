"""FastAPI dependency wiring for the ingest services."""
from functools import lru_cache
from fastapi import Depends
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.core.database import SessionLocal
from app.application.services.ingest_submission import IngestSubmissionService
from app.application.services.lookup_ingest_record import LookupIngestRecordService
from app.domain.ports.event_publisher import EventPublisher
from app.domain.ports.vendor_directory import VendorDirectory
from app.infrastructure.db.repositories.ingest_record_repository import (
    SQLAlchemyIngestRecordRepository
)
from app.infrastructure.db.repositories.raw_object_repository import SQLAlchemyRawArchive
from app.infrastructure.directory.http_directory import HttpVendorDirectory
from app.infrastructure.directory.static_directory import StaticVendorDirectory
from app.infrastructure.events.temporal_publisher import TemporalEventPublisher


def get_session_factory() -> sessionmaker:
    """Repositories open one session per call from this factory."""
    return SessionLocal


@lru_cache
def get_vendor_directory() -> VendorDirectory:
    """External directory when configured, otherwise the static key map."""
    if settings.vendor_directory_url:
        return HttpVendorDirectory(
            settings.vendor_directory_url,
            timeout=settings.vendor_directory_timeout_seconds
        )
    return StaticVendorDirectory(settings.vendor_api_keys)


@lru_cache
def get_event_publisher() -> EventPublisher:
    """Process-wide publisher; connects to Temporal on first publish."""
    return TemporalEventPublisher(
        settings.temporal_host,
        settings.temporal_namespace,
        max_attempts=settings.consumer_max_attempts
    )


def get_ingest_service(
    session_factory: sessionmaker = Depends(get_session_factory),
    directory: VendorDirectory = Depends(get_vendor_directory),
    publisher: EventPublisher = Depends(get_event_publisher)
) -> IngestSubmissionService:
    return IngestSubmissionService(
        directory,
        SQLAlchemyRawArchive(session_factory),
        SQLAlchemyIngestRecordRepository(session_factory),
        publisher,
        settings
    )


def get_lookup_service(
    session_factory: sessionmaker = Depends(get_session_factory),
    directory: VendorDirectory = Depends(get_vendor_directory)
) -> LookupIngestRecordService:
    return LookupIngestRecordService(directory, SQLAlchemyIngestRecordRepository(session_factory))
