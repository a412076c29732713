"""Vendor directory client - resolves API keys against an external service."""
import logging
from typing import Optional
import httpx

from app.domain.ports.vendor_directory import VendorDirectory

logger = logging.getLogger(__name__)


class HttpVendorDirectory(VendorDirectory):
    """
    Vendor directory backed by an HTTP lookup service.
    
    The service answers ``GET /vendors/resolve`` with ``{"vendorId": ...}``
    for a known key and 404 for an unknown one. The key travels in the
    ``X-Api-Key`` header, never in the URL.
    """
    
    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize directory client.
        
        Args:
            base_url: Base URL of the directory service
            timeout: Request timeout in seconds
            transport: Optional httpx transport override
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
    
    async def resolve(self, api_key: str) -> Optional[str]:
        """
        Resolve an API key via the directory service.
        
        Args:
            api_key: Key presented by the caller
            
        Returns:
            Vendor id, or None if the service does not know the key
            
        Raises:
            httpx.HTTPError: If the directory service is unavailable
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(
                f"{self.base_url}/vendors/resolve",
                headers={
                    "X-Api-Key": api_key,
                    "Accept": "application/json"
                }
            )
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()
        
        vendor_id = data.get("vendorId")
        if not vendor_id:
            logger.warning("Vendor directory returned a response without vendorId")
            return None
        return vendor_id
