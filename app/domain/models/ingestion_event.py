"""IngestionEvent - fan-out notification for accepted ingestions."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.domain.models.ingest_record import EventType, IngestRecord, RawLocation

INGEST_ACCEPTED = "ingest.accepted"


@dataclass(frozen=True)
class IngestionEvent:
    """
    Announcement that a submission won the idempotency race.
    
    Delivery is at-least-once; consumers must tolerate duplicates.
    """
    vendor_id: str
    external_event_id: str
    ingest_id: str
    received_at: str
    raw_location: RawLocation
    event_type: Optional[EventType] = None
    
    @classmethod
    def from_record(cls, record: IngestRecord) -> "IngestionEvent":
        """Build the announcement for a freshly created record."""
        return cls(
            vendor_id=record.vendor_id,
            external_event_id=record.external_event_id,
            ingest_id=record.ingest_id,
            received_at=record.received_at,
            raw_location=record.raw_location,
            event_type=record.event_type
        )
    
    def to_detail(self) -> Dict[str, Any]:
        """Serialize to the wire detail published on the channel."""
        detail = {
            "vendorId": self.vendor_id,
            "externalEventId": self.external_event_id,
            "ingestId": self.ingest_id,
            "receivedAt": self.received_at,
            "s3Bucket": self.raw_location.bucket,
            "s3Key": self.raw_location.key,
        }
        if self.event_type:
            detail["eventType"] = self.event_type.value
        return detail
    
    @classmethod
    def from_detail(cls, detail: Dict[str, Any]) -> "IngestionEvent":
        """
        Rebuild an event from its wire detail.
        
        Args:
            detail: Detail as published on the channel
            
        Returns:
            IngestionEvent
            
        Raises:
            KeyError: If s3Bucket or s3Key is missing
        """
        event_type = None
        if detail.get("eventType") in {t.value for t in EventType}:
            event_type = EventType(detail["eventType"])
        
        return cls(
            vendor_id=detail.get("vendorId", ""),
            external_event_id=detail.get("externalEventId", ""),
            ingest_id=detail.get("ingestId", ""),
            received_at=detail.get("receivedAt", ""),
            raw_location=RawLocation(bucket=detail["s3Bucket"], key=detail["s3Key"]),
            event_type=event_type
        )
