"""Normalizer port interface."""
from abc import ABC, abstractmethod

from app.domain.models.ingestion_event import IngestionEvent
from app.domain.models.raw_payload import RawPayloadObject


class Normalizer(ABC):
    """Turns an archived vendor payload into internal business records."""
    
    @abstractmethod
    async def normalize(self, event: IngestionEvent, raw: RawPayloadObject) -> None:
        """
        Normalize one archived submission.
        
        Implementations must be idempotent; the same event may be
        delivered more than once.
        
        Args:
            event: Announcement that triggered processing
            raw: Archived payload for the event
        """
        pass
