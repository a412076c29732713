"""Vendor authentication shared by the ingest and lookup surfaces."""
from typing import Optional

from app.domain.errors import ErrorCode, IngestError
from app.domain.ports.vendor_directory import VendorDirectory


async def authenticate_vendor(directory: VendorDirectory, api_key: Optional[str]) -> str:
    """
    Resolve the calling vendor from its API key.
    
    Args:
        directory: Vendor directory to consult
        api_key: Value of the X-Api-Key header, if any
        
    Returns:
        Vendor id of the caller
        
    Raises:
        IngestError: MISSING_API_KEY or INVALID_API_KEY
    """
    if api_key is None or not api_key.strip():
        raise IngestError(ErrorCode.MISSING_API_KEY, "X-Api-Key header is required.")
    
    vendor_id = await directory.resolve(api_key)
    if vendor_id is None:
        raise IngestError(ErrorCode.INVALID_API_KEY, "API key is invalid or revoked.")
    return vendor_id
