"""IngestRecord repository port interface."""
from abc import ABC, abstractmethod
from typing import Optional

from app.domain.models.ingest_record import IngestRecord, IngestStatus


class IngestRecordRepository(ABC):
    """Repository interface for the idempotency store."""
    
    @abstractmethod
    def create_if_absent(self, record: IngestRecord) -> bool:
        """
        Create a record only if none exists for its composite key.
        
        Concurrent callers with the same key race on a single conditional
        write; exactly one of them wins.
        
        Args:
            record: IngestRecord to create
            
        Returns:
            True if the record was created, False if the key already existed
        """
        pass
    
    @abstractmethod
    def find_by_composite_key(
        self,
        vendor_id: str,
        external_event_id: str
    ) -> Optional[IngestRecord]:
        """
        Strongly consistent read by composite key.
        
        Args:
            vendor_id: Vendor identifier
            external_event_id: Vendor-supplied event identifier
            
        Returns:
            IngestRecord if found, None otherwise
        """
        pass
    
    @abstractmethod
    def transition_status(
        self,
        vendor_id: str,
        external_event_id: str,
        expected: IngestStatus,
        new_status: IngestStatus
    ) -> bool:
        """
        Compare-and-set the status of an existing record.
        
        Args:
            vendor_id: Vendor identifier
            external_event_id: Vendor-supplied event identifier
            expected: Status the record must currently have
            new_status: Status to move to
            
        Returns:
            True if the record was updated, False otherwise
        """
        pass
