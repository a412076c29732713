"""Downstream consumer application service."""
import asyncio
import logging
from enum import Enum
from typing import Any, Dict, Mapping

from app.domain.models.ingest_record import EventType, IngestStatus
from app.domain.models.ingestion_event import IngestionEvent
from app.domain.ports.ingest_record_repo import IngestRecordRepository
from app.domain.ports.normalizer import Normalizer
from app.domain.ports.raw_archive import RawArchive

logger = logging.getLogger(__name__)


class ProcessingOutcome(str, Enum):
    """Result of handling one delivered ingestion event."""
    FETCHED = "fetched"
    SKIPPED = "skipped"
    DEAD_LETTERED = "dead_lettered"


class ProcessIngestionEventService:
    """
    Reacts to ingest.accepted events.
    
    Responsibilities:
    - Fetch the archived raw payload named by the event
    - Hand it to the normalizer for the event type
    - Mark ingestions FAILED once retries are exhausted
    
    Every step is safe to repeat for the same event.
    """
    
    def __init__(
        self,
        raw_archive: RawArchive,
        record_repo: IngestRecordRepository,
        normalizers: Mapping[EventType, Normalizer]
    ):
        """
        Initialize service.
        
        Args:
            raw_archive: Blob store holding verbatim payloads
            record_repo: Idempotency store
            normalizers: Normalizer per event type
        """
        self.raw_archive = raw_archive
        self.record_repo = record_repo
        self.normalizers = normalizers
    
    async def process(self, detail: Dict[str, Any]) -> ProcessingOutcome:
        """
        Handle one delivered event.
        
        Args:
            detail: Event detail as published
            
        Returns:
            FETCHED when the payload was retrieved, SKIPPED when the event
            does not name an archive location
            
        Raises:
            ArchiveObjectNotFound: If the archived payload cannot be read
            Exception: Archive transport failures, so the caller can retry
        """
        if not detail or not detail.get("s3Bucket") or not detail.get("s3Key"):
            logger.error(f"Missing s3Bucket/s3Key in event detail: {detail}")
            return ProcessingOutcome.SKIPPED
        
        event = IngestionEvent.from_detail(detail)
        
        try:
            raw = await asyncio.to_thread(self.raw_archive.get, event.raw_location)
        except Exception as e:
            logger.error(
                f"Failed to fetch raw payload {event.raw_location.bucket}/{event.raw_location.key}: {e!r}"
            )
            raise
        
        logger.info(f"Fetched raw payload for {event.ingest_id} ({len(raw.content)} bytes)")
        
        normalizer = self.normalizers.get(event.event_type) if event.event_type else None
        if normalizer is None:
            logger.warning(f"No normalizer for event type {event.event_type} on {event.ingest_id}")
            return ProcessingOutcome.FETCHED
        
        await normalizer.normalize(event, raw)
        return ProcessingOutcome.FETCHED
    
    def dead_letter(self, detail: Dict[str, Any]) -> ProcessingOutcome:
        """
        Mark an ingestion FAILED after processing gave up on it.
        
        Only records still in INGESTED are moved, so repeated calls and
        records already advanced by other processing are left alone.
        
        Args:
            detail: Event detail as published
            
        Returns:
            DEAD_LETTERED if the record was marked, SKIPPED otherwise
        """
        vendor_id = (detail or {}).get("vendorId")
        external_event_id = (detail or {}).get("externalEventId")
        if not vendor_id or not external_event_id:
            logger.error(f"Cannot dead-letter event without its idempotency key: {detail}")
            return ProcessingOutcome.SKIPPED
        
        moved = self.record_repo.transition_status(
            vendor_id, external_event_id, IngestStatus.INGESTED, IngestStatus.FAILED
        )
        if moved:
            logger.warning(f"Ingestion {vendor_id}/{external_event_id} marked FAILED")
            return ProcessingOutcome.DEAD_LETTERED
        return ProcessingOutcome.SKIPPED
