"""Admin lookup application service."""
import asyncio
import logging
from typing import Optional

from app.application.services.vendor_auth import authenticate_vendor
from app.domain.errors import ErrorCode, IngestError
from app.domain.models.ingest_record import IngestRecord
from app.domain.ports.ingest_record_repo import IngestRecordRepository
from app.domain.ports.vendor_directory import VendorDirectory
from app.domain.services.lookup_path import is_lookup_path, parse_lookup_path

logger = logging.getLogger(__name__)


class LookupIngestRecordService:
    """
    Read-only, tenant-isolated view of the idempotency store.
    
    A vendor can only read its own records. The tenant check happens before
    the read so callers learn nothing about other vendors' records.
    GETs outside the admin surface are authenticated and then rejected
    as UNKNOWN_ROUTE without touching the store.
    """
    
    def __init__(self, vendor_directory: VendorDirectory, record_repo: IngestRecordRepository):
        """
        Initialize service.
        
        Args:
            vendor_directory: API key to vendor lookup
            record_repo: Idempotency store
        """
        self.vendor_directory = vendor_directory
        self.record_repo = record_repo
    
    async def lookup(
        self,
        api_key: Optional[str],
        path: str,
        request_id: str = "unknown"
    ) -> IngestRecord:
        """
        Look up one ingest record.
        
        Args:
            api_key: Value of the X-Api-Key header
            path: Request path ``[/<stage>]/admin/ingest/{vendorId}/{externalEventId}``
            request_id: Correlation id used in logs
            
        Returns:
            The stored IngestRecord
            
        Raises:
            IngestError: MISSING_API_KEY, INVALID_API_KEY, UNKNOWN_ROUTE, BAD_PATH,
                FORBIDDEN, NOT_FOUND or INTERNAL_ERROR
        """
        try:
            caller_vendor_id = await authenticate_vendor(self.vendor_directory, api_key)
            if not is_lookup_path(path):
                raise IngestError(ErrorCode.UNKNOWN_ROUTE, f"Unknown route: {path}")
            vendor_id, external_event_id = parse_lookup_path(path)
            
            if vendor_id != caller_vendor_id:
                logger.warning(
                    f"[{request_id}] Vendor {caller_vendor_id} denied lookup for vendor {vendor_id}"
                )
                raise IngestError(
                    ErrorCode.FORBIDDEN,
                    "Cannot access ingest records for another vendor."
                )
            
            record = await asyncio.to_thread(
                self.record_repo.find_by_composite_key, vendor_id, external_event_id
            )
        except IngestError:
            raise
        except Exception as e:
            logger.error(f"[{request_id}] Unhandled error during lookup: {e!r}", exc_info=True)
            raise IngestError(ErrorCode.INTERNAL_ERROR, "Unexpected server error.")
        
        if record is None:
            raise IngestError(ErrorCode.NOT_FOUND, "No ingest record found.")
        return record
