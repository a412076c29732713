"""IngestRecord entity - the unit of idempotency."""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class IngestStatus(str, Enum):
    """Lifecycle status of an ingestion."""
    INGESTED = "INGESTED"
    NORMALIZED = "NORMALIZED"
    FAILED = "FAILED"


class EventType(str, Enum):
    """Vendor event types, one per ingest route."""
    INVENTORY_UPDATE = "inventory-update"
    ORDER_STATUS_UPDATE = "order-status-update"


def new_ingest_id() -> str:
    """Mint a globally unique ingest identifier."""
    return f"ing_{uuid.uuid4()}"


def utc_now_iso(now: Optional[datetime] = None) -> str:
    """
    ISO-8601 UTC instant with a Z suffix and a fixed microsecond field.

    Args:
        now: Instant to format; defaults to the current wall-clock time
    """
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="microseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class RawLocation:
    """Reference to an object in the raw archive."""
    bucket: str
    key: str


@dataclass
class IngestRecord:
    """
    Record of one accepted vendor submission.
    
    Invariants:
    - (vendor_id, external_event_id) is unique and never reassigned
    - ingest_id, received_at and raw_location are set once
    - only status may change after creation
    """
    vendor_id: str
    external_event_id: str
    ingest_id: str
    received_at: str
    raw_location: RawLocation
    event_type: Optional[EventType] = None
    status: IngestStatus = IngestStatus.INGESTED
    
    def __post_init__(self):
        """Validate invariants."""
        if not self.vendor_id:
            raise ValueError("vendor_id cannot be empty")
        if not self.external_event_id:
            raise ValueError("external_event_id cannot be empty")
        if not self.ingest_id:
            raise ValueError("ingest_id cannot be empty")
    
    def get_composite_key(self) -> tuple:
        """
        Get the idempotency key for this record.
        
        Returns:
            Tuple of (vendor_id, external_event_id)
        """
        return (self.vendor_id, self.external_event_id)
