"""Event publisher port interface."""
from abc import ABC, abstractmethod

from app.domain.models.ingestion_event import IngestionEvent


class EventPublisher(ABC):
    """At-least-once channel announcing accepted ingestions."""
    
    @abstractmethod
    async def publish(self, event: IngestionEvent, channel: str) -> None:
        """
        Publish one ingestion event.
        
        Args:
            event: Event to announce
            channel: Logical channel the consumer listens on
            
        Raises:
            Exception: If the channel rejected the event
        """
        pass
