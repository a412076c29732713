"""Placeholder normalizers until vendor mapping rules exist."""
import logging

from app.domain.models.ingest_record import EventType
from app.domain.models.ingestion_event import IngestionEvent
from app.domain.models.raw_payload import RawPayloadObject
from app.domain.ports.normalizer import Normalizer

logger = logging.getLogger(__name__)


class PendingNormalizer(Normalizer):
    """Accepts the raw payload and leaves the record as INGESTED."""
    
    def __init__(self, event_type: EventType):
        self.event_type = event_type
    
    async def normalize(self, event: IngestionEvent, raw: RawPayloadObject) -> None:
        logger.info(
            f"Normalization for {self.event_type.value} not implemented; "
            f"ingest {event.ingest_id} left as received ({len(raw.content)} bytes)"
        )


def default_normalizers() -> dict:
    """One normalizer per event type."""
    return {event_type: PendingNormalizer(event_type) for event_type in EventType}
