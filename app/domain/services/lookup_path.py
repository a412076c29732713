"""Admin lookup path parsing."""
from typing import Tuple

from app.domain.errors import ErrorCode, IngestError

ADMIN_SEGMENTS = ("admin", "ingest")
EXPECTED_SHAPE = "Expected /admin/ingest/{vendorId}/{externalEventId}"


def is_lookup_path(path: str) -> bool:
    """Check whether a path targets the admin lookup surface."""
    return "/admin/ingest/" in (path or "")


def parse_lookup_path(path: str) -> Tuple[str, str]:
    """
    Extract the vendor id and external event id from a lookup path.
    
    Accepts ``/admin/ingest/{vendorId}/{externalEventId}`` with at most one
    stage segment in front, e.g. ``/dev/admin/ingest/v1/e1``.
    
    Args:
        path: Request path
        
    Returns:
        Tuple of (vendor_id, external_event_id)
        
    Raises:
        IngestError: BAD_PATH if the path does not have the expected shape
    """
    parts = [p for p in (path or "").split("/") if p]
    
    base = None
    for offset in (0, 1):
        if tuple(parts[offset:offset + 2]) == ADMIN_SEGMENTS:
            base = offset + 2
            break
    
    if base is None or len(parts) != base + 2:
        raise IngestError(ErrorCode.BAD_PATH, EXPECTED_SHAPE)
    
    vendor_id, external_event_id = parts[base], parts[base + 1]
    if not vendor_id.strip() or not external_event_id.strip():
        raise IngestError(ErrorCode.BAD_PATH, EXPECTED_SHAPE)
    return vendor_id, external_event_id
