"""Raw archive port interface."""
from abc import ABC, abstractmethod

from app.domain.models.ingest_record import RawLocation
from app.domain.models.raw_payload import RawPayloadObject


class RawArchive(ABC):
    """Immutable blob store for verbatim submissions."""
    
    @abstractmethod
    def put(self, obj: RawPayloadObject) -> RawLocation:
        """
        Write a new object.
        
        Args:
            obj: Object to archive
            
        Returns:
            Location the object was written to
            
        Raises:
            ArchiveObjectExists: If an object already exists at the location
        """
        pass
    
    @abstractmethod
    def get(self, location: RawLocation) -> RawPayloadObject:
        """
        Read an archived object.
        
        Args:
            location: Bucket and key of the object
            
        Returns:
            The archived object
            
        Raises:
            ArchiveObjectNotFound: If nothing is stored at the location
        """
        pass
