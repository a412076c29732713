"""Ingest submission application service."""
import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from app.application.services.vendor_auth import authenticate_vendor
from app.core.config import Settings
from app.domain.errors import ErrorCode, IngestError, MissingConfigurationError
from app.domain.models.ingest_record import (
    IngestRecord, RawLocation, new_ingest_id, utc_now_iso
)
from app.domain.models.ingestion_event import IngestionEvent
from app.domain.models.raw_payload import RawPayloadObject, build_raw_key
from app.domain.ports.event_publisher import EventPublisher
from app.domain.ports.ingest_record_repo import IngestRecordRepository
from app.domain.ports.raw_archive import RawArchive
from app.domain.ports.vendor_directory import VendorDirectory
from app.domain.services.submission_policy import SubmissionPolicy

logger = logging.getLogger(__name__)


class IngestOutcomeStatus(str, Enum):
    """Client-visible result of an admissible submission."""
    ACCEPTED = "ACCEPTED"
    DUPLICATE = "DUPLICATE"


@dataclass(frozen=True)
class IngestOutcome:
    """Result returned to the client with a 202."""
    status: IngestOutcomeStatus
    ingest_id: str


class IngestSubmissionService:
    """
    Orchestrates admission, archival, idempotent recording and fan-out.
    
    Order of side effects:
    1. Raw archive write (every admissible attempt, duplicates included)
    2. Conditional create of the IngestRecord (single winner per key)
    3. Event publish (winner only; failures never reach the client)
    """
    
    def __init__(
        self,
        vendor_directory: VendorDirectory,
        raw_archive: RawArchive,
        record_repo: IngestRecordRepository,
        publisher: EventPublisher,
        settings: Settings
    ):
        """
        Initialize service with its collaborators.
        
        Args:
            vendor_directory: API key to vendor lookup
            raw_archive: Blob store for verbatim payloads
            record_repo: Idempotency store
            publisher: Ingestion event channel
            settings: Destination names and timeouts
        """
        self.vendor_directory = vendor_directory
        self.raw_archive = raw_archive
        self.record_repo = record_repo
        self.publisher = publisher
        self.settings = settings
    
    async def accept(
        self,
        api_key: Optional[str],
        route_path: str,
        raw_body: Optional[bytes],
        request_id: str = "unknown"
    ) -> IngestOutcome:
        """
        Accept or reject one vendor submission.
        
        Args:
            api_key: Value of the X-Api-Key header
            route_path: Request path
            raw_body: Body bytes exactly as received
            request_id: Correlation id used in logs
            
        Returns:
            IngestOutcome with ACCEPTED or DUPLICATE
            
        Raises:
            IngestError: For authentication, validation, configuration or
                internal failures
        """
        try:
            return await self._accept(api_key, route_path, raw_body, request_id)
        except IngestError:
            raise
        except MissingConfigurationError as e:
            logger.error(f"[{request_id}] {e}")
            raise IngestError(ErrorCode.MISSING_ENV, str(e))
        except Exception as e:
            logger.error(f"[{request_id}] Unhandled error during ingest: {e!r}", exc_info=True)
            raise IngestError(ErrorCode.INTERNAL_ERROR, "Unexpected server error.")
    
    async def _accept(
        self,
        api_key: Optional[str],
        route_path: str,
        raw_body: Optional[bytes],
        request_id: str
    ) -> IngestOutcome:
        vendor_id = await authenticate_vendor(self.vendor_directory, api_key)
        submission = SubmissionPolicy.validate(raw_body, route_path)
        
        # Identifiers are minted only for admissible requests
        ingest_id = new_ingest_id()
        received_at = utc_now_iso()
        
        bucket, channel = self.settings.require_destinations()
        location = RawLocation(bucket=bucket, key=build_raw_key(vendor_id, received_at, ingest_id))
        
        raw_object = RawPayloadObject(
            location=location,
            content=raw_body,
            metadata={
                "vendorId": vendor_id,
                "externalEventId": submission.external_event_id,
                "receivedAt": received_at,
                "ingestId": ingest_id,
            }
        )
        await self._bounded(self.settings.archive_timeout_seconds, self.raw_archive.put, raw_object)
        
        record = IngestRecord(
            vendor_id=vendor_id,
            external_event_id=submission.external_event_id,
            ingest_id=ingest_id,
            received_at=received_at,
            raw_location=location,
            event_type=submission.event_type
        )
        created = await self._bounded(
            self.settings.store_timeout_seconds, self.record_repo.create_if_absent, record
        )
        
        if not created:
            existing_id = await self._existing_ingest_id(vendor_id, submission.external_event_id)
            logger.info(
                f"[{request_id}] Duplicate submission {vendor_id}/{submission.external_event_id}, "
                f"attempt archived as {location.key}"
            )
            return IngestOutcome(IngestOutcomeStatus.DUPLICATE, existing_id or ingest_id)
        
        await self._publish(IngestionEvent.from_record(record), channel, request_id)
        logger.info(f"[{request_id}] Accepted {ingest_id} for {vendor_id}/{submission.external_event_id}")
        return IngestOutcome(IngestOutcomeStatus.ACCEPTED, ingest_id)
    
    async def _existing_ingest_id(self, vendor_id: str, external_event_id: str) -> Optional[str]:
        existing = await self._bounded(
            self.settings.store_timeout_seconds,
            self.record_repo.find_by_composite_key,
            vendor_id,
            external_event_id
        )
        return existing.ingest_id if existing else None
    
    async def _publish(self, event: IngestionEvent, channel: str, request_id: str) -> None:
        """Publish without affecting the client response; the record is never rolled back."""
        try:
            await asyncio.wait_for(
                self.publisher.publish(event, channel),
                timeout=self.settings.publish_timeout_seconds
            )
        except Exception as e:
            logger.error(
                f"[{request_id}] Failed to publish event for {event.ingest_id}: {e!r}",
                exc_info=True
            )
    
    @staticmethod
    async def _bounded(timeout: float, fn, *args):
        """Run a blocking store call in a worker thread with an upper time bound."""
        return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=timeout)
