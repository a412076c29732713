"""Temporal activities - idempotent, retriable operations."""
import asyncio
from temporalio import activity

from app.core.database import SessionLocal
from app.application.services.process_ingestion_event import ProcessIngestionEventService
from app.infrastructure.db.repositories.ingest_record_repository import (
    SQLAlchemyIngestRecordRepository
)
from app.infrastructure.db.repositories.raw_object_repository import SQLAlchemyRawArchive
from app.infrastructure.normalizers.pending import default_normalizers


def _build_service(session_factory=SessionLocal) -> ProcessIngestionEventService:
    """Wire the consumer service to database-backed adapters."""
    return ProcessIngestionEventService(
        SQLAlchemyRawArchive(session_factory),
        SQLAlchemyIngestRecordRepository(session_factory),
        default_normalizers()
    )


@activity.defn
async def process_ingestion_event(detail: dict) -> str:
    """
    Activity to fetch and normalize one accepted ingestion.
    
    Raises on fetch failure so Temporal retries it.
    
    Args:
        detail: ingest.accepted event detail
        
    Returns:
        ProcessingOutcome value
    """
    activity.logger.info(f"Processing ingest.accepted for {detail.get('ingestId')}")
    
    outcome = await _build_service().process(detail)
    activity.logger.info(f"Processing finished: {outcome.value}")
    return outcome.value


@activity.defn
async def mark_ingestion_failed(detail: dict) -> str:
    """
    Activity to dead-letter an ingestion whose processing was abandoned.
    
    Args:
        detail: ingest.accepted event detail
        
    Returns:
        ProcessingOutcome value
    """
    outcome = await asyncio.to_thread(_build_service().dead_letter, detail)
    activity.logger.warning(f"Dead-letter for {detail.get('ingestId')}: {outcome.value}")
    return outcome.value
