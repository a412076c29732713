"""RawPayloadObject entity - verbatim archived submission."""
from dataclasses import dataclass, field
from typing import Dict

from app.domain.models.ingest_record import RawLocation

RAW_CONTENT_TYPE = "application/json"


def build_raw_key(vendor_id: str, received_at: str, ingest_id: str) -> str:
    """
    Derive the archive key for a submission.
    
    Keys are partitioned by vendor so retention policies can be applied
    per vendor prefix.
    
    Args:
        vendor_id: Resolved vendor identifier
        received_at: ISO-8601 acceptance timestamp
        ingest_id: Minted ingest identifier
        
    Returns:
        Archive object key
    """
    return f"raw/vendorId={vendor_id}/receivedAt={received_at}/{ingest_id}.json"


@dataclass
class RawPayloadObject:
    """
    Entity holding the exact bytes a vendor submitted.
    
    Rules:
    - No transformation applied
    - Immutable once written
    - One object per ingestion attempt, including duplicates
    """
    location: RawLocation
    content: bytes
    content_type: str = RAW_CONTENT_TYPE
    metadata: Dict[str, str] = field(default_factory=dict)
    
    def __post_init__(self):
        """Validate invariants."""
        if not self.location.bucket:
            raise ValueError("bucket cannot be empty")
        if not self.location.key:
            raise ValueError("key cannot be empty")
    
    def text(self) -> str:
        """Decode the archived bytes as UTF-8 text."""
        return self.content.decode("utf-8")
