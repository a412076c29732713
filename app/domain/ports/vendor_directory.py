"""Vendor directory port interface."""
from abc import ABC, abstractmethod
from typing import Optional


class VendorDirectory(ABC):
    """Read-only API key to vendor id lookup."""
    
    @abstractmethod
    async def resolve(self, api_key: str) -> Optional[str]:
        """
        Resolve an API key to a vendor id.
        
        Keys are matched exactly and case-sensitively.
        
        Args:
            api_key: Key presented by the caller
            
        Returns:
            Vendor id if the key is known, None otherwise
        """
        pass
