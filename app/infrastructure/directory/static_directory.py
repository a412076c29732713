"""Vendor directory backed by a static key map from settings."""
from typing import Dict, Optional

from app.domain.ports.vendor_directory import VendorDirectory


class StaticVendorDirectory(VendorDirectory):
    """In-process API key directory, for local use and tests."""
    
    def __init__(self, api_keys: Dict[str, str]):
        """
        Initialize directory.
        
        Args:
            api_keys: Map of API key to vendor id
        """
        self._api_keys = dict(api_keys)
    
    async def resolve(self, api_key: str) -> Optional[str]:
        """Exact, case-sensitive lookup."""
        return self._api_keys.get(api_key)
